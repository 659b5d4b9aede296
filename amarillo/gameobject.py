"""Game objects: named nodes in the scene tree that carry components."""

from __future__ import annotations

import uuid
from typing import Iterable

from amarillo.camera import Camera3D, CameraManager
from amarillo.components import (
    Component,
    ComponentCamera,
    ComponentMesh,
    ComponentTexture,
    ComponentTransform,
    ComponentType,
)


class GameObject:
    """A scene node with a parent, children and a list of components."""

    def __init__(self, name: str = "", camera_manager: CameraManager | None = None) -> None:
        self.name = name
        self.tag = "No Tag"
        self.uid = ""
        self.parent: GameObject | None = None
        self.children: list[GameObject] = []
        self.selected = False
        self.active = True
        self.delete_game_object = False
        self.tags: list[str] = []
        self.components: list[Component] = []
        self.camera_manager = camera_manager
        self.texture: ComponentTexture | None = None
        self.mesh: ComponentMesh | None = None
        self.transform: ComponentTransform | None = None
        self.transform = self.add_component(ComponentType.TRANSFORM)

    def __repr__(self) -> str:
        return f"GameObject({self.name!r})"

    def enable(self) -> None:
        """Activate the object and enable its components; no-op if already active."""
        if self.active:
            return
        self.active = True
        for component in self.components:
            component.enable()

    def disable(self) -> None:
        """Deactivate the object and disable its components; no-op if already inactive."""
        if not self.active:
            return
        self.active = False
        for component in self.components:
            component.disable()

    def update(self) -> None:
        """Update every component."""
        for component in self.components:
            component.update()

    def ensure_unique_uid(self, others: Iterable[GameObject]) -> bool:
        """Give this object a fresh uid if another object shares it; return True if changed."""
        taken = {other.uid for other in others if other is not self}
        changed = False
        while self.uid in taken:
            self.uid = str(uuid.uuid4())
            changed = True
        return changed

    def set_parent(self, new_parent: GameObject) -> bool:
        """Move under ``new_parent``; refuse (False) when that would make a cycle."""
        if new_parent.is_child_of(self):
            return False
        if self.parent is not None:
            self.parent.delete_child(self)
        self.parent = new_parent
        new_parent.children.append(self)
        return True

    def remove_parent(self) -> None:
        """Detach from the current parent, if any."""
        if self.parent is None:
            return
        self.parent.delete_child(self)

    def is_child_of(self, gameobject: GameObject) -> bool:
        """True when this object is ``gameobject`` or one of its descendants."""
        if gameobject is self:
            return True
        return any(self.is_child_of(child) for child in gameobject.children)

    def delete_child(self, child: GameObject) -> None:
        """Remove ``child`` from the children and clear its parent."""
        if any(existing is child for existing in self.children):
            self.children = [existing for existing in self.children if existing is not child]
            child.parent = None

    def start_play(self) -> None:
        """Tell every component that play has started."""
        for component in self.components:
            component.on_start_play()

    def add_component(self, kind: ComponentType) -> Component:
        """Create a component of ``kind``, attach it and return it."""
        if kind is ComponentType.TRANSFORM:
            component: Component = ComponentTransform(self)
        elif kind is ComponentType.MESH:
            component = ComponentMesh(self)
        elif kind is ComponentType.TEXTURE:
            component = ComponentTexture(self)
        elif kind is ComponentType.CAMERA:
            component = ComponentCamera(self, self.camera_manager)
        else:
            raise ValueError(f"Component type not found: {kind}")
        self.components.append(component)
        return component

    def attach_component(self, component: Component) -> None:
        """Attach an already built component."""
        self.components.append(component)

    def get_component(self, kind: ComponentType) -> Component | None:
        """The first component of ``kind``, or None."""
        return next((c for c in self.components if c.type is kind), None)

    def add_children(self, child: GameObject) -> GameObject:
        """Make ``child`` a child of this object and return it."""
        child.set_parent(self)
        return child

    def update_camera(self, camera: Camera3D) -> None:
        """Place ``camera`` at this object's world position and rotation."""
        camera.set_position(self.transform.world_position)
        camera.set_rotation(self.transform.world_rotation)