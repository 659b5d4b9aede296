"""Saving game objects and their components into JSON documents and reading them back."""

from __future__ import annotations

from typing import Any

from amarillo.components import (
    Component,
    ComponentCamera,
    ComponentMesh,
    ComponentTexture,
    ComponentTransform,
    ComponentType,
)
from amarillo.gameobject import GameObject
from amarillo.jsondoc import JsonDoc

_TYPE_NAMES = {
    ComponentType.TRANSFORM: "Transform",
    ComponentType.MESH: "Mesh",
    ComponentType.TEXTURE: "Texture",
    ComponentType.CAMERA: "Camera",
}
_TYPES_BY_NAME = {name: kind for kind, name in _TYPE_NAMES.items()}


def _floats(values, count: int = 3) -> list[float]:
    return [float(v) for v in list(values)[:count]]


def _active_flag(component: Component) -> int:
    return 1 if component.active else 0


def component_to_dict(component: Component) -> dict[str, Any]:
    """The saved form of one component; components without a saved form give an empty dict."""
    kind = component.type
    name = _TYPE_NAMES.get(kind)
    if name is None:
        return {}
    data: dict[str, Any] = {"Type": name, "Active": _active_flag(component)}
    if kind is ComponentType.TRANSFORM and isinstance(component, ComponentTransform):
        data["Translation"] = _floats(component.world_position)
        data["Rotation"] = _floats(component.world_rotation)
        data["Scale"] = _floats(component.world_scale)
    elif kind is ComponentType.MESH and isinstance(component, ComponentMesh):
        mesh = component.mesh
        data["Vertex Count"] = len(mesh.vertices) if mesh is not None else 0
        data["Index Count"] = len(mesh.indices) if mesh is not None else 0
    elif kind is ComponentType.CAMERA and isinstance(component, ComponentCamera):
        camera = component.camera
        data["Position"] = _floats(camera.position)
        data["FOV"] = float(camera.vertical_fov)
        data["Near Plane"] = float(camera.near_plane_distance)
        data["Far Plane"] = float(camera.far_plane_distance)
    elif kind is ComponentType.TEXTURE and isinstance(component, ComponentTexture):
        pass
    return data


def component_type_from_dict(data: dict[str, Any]) -> ComponentType:
    """The component type named by the ``Type`` entry; NONE when missing or unknown."""
    name = data.get("Type") if isinstance(data, dict) else None
    return _TYPES_BY_NAME.get(name, ComponentType.NONE) if isinstance(name, str) else ComponentType.NONE


def game_object_to_dict(game_object: GameObject) -> dict[str, Any]:
    """The saved form of a game object: name, world transform, uids and components."""
    transform = game_object.transform
    data: dict[str, Any] = {
        "Name": game_object.name,
        "Position": _floats(transform.world_position),
        "Rotation": _floats(transform.world_rotation),
        "Scale": _floats(transform.world_scale),
        "UID": game_object.uid,
    }
    if game_object.parent is not None:
        data["Parent UID"] = game_object.parent.uid
    children = [child.uid for child in game_object.children]
    if children:
        data["Children UID"] = children
    data["Components"] = [component_to_dict(c) for c in game_object.components]
    return data


def game_object_from_dict(data: dict[str, Any]) -> GameObject:
    """Build a game object from its saved form.

    The new object keeps its own transform; every saved component is added
    after it as a plain component of the saved type.
    """
    if not isinstance(data, dict):
        raise TypeError("a saved game object must be a JSON object")
    name = data.get("Name")
    game_object = GameObject(name if isinstance(name, str) else "")
    uid = data.get("UID")
    game_object.uid = uid if isinstance(uid, str) else ""
    components = data.get("Components")
    if isinstance(components, list):
        for entry in components:
            if not isinstance(entry, dict):
                continue
            component = Component(game_object)
            component.type = component_type_from_dict(entry)
            game_object.attach_component(component)
    return game_object


def store_game_object(doc: JsonDoc, key: str, game_object: GameObject) -> None:
    """Put ``game_object`` under ``key`` in the document's current section."""
    doc.object[key] = game_object_to_dict(game_object)


def load_game_object(doc: JsonDoc, key: str) -> GameObject | None:
    """The game object saved under ``key`` in the current section, or None."""
    data = doc.object.get(key)
    if not isinstance(data, dict):
        return None
    return game_object_from_dict(data)