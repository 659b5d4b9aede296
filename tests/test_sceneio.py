import json

import pytest

from amarillo.components import ComponentType
from amarillo.gameobject import GameObject
from amarillo.jsondoc import create_json, load_json, save_json
from amarillo.sceneio import (
    component_to_dict,
    component_type_from_dict,
    game_object_from_dict,
    game_object_to_dict,
    load_game_object,
    store_game_object,
)


def _object(name="Cube", uid="uid-cube"):
    obj = GameObject(name)
    obj.uid = uid
    return obj


def test_transform_component_saves_world_translation():
    obj = _object()
    obj.transform.set_local_position((1.0, 2.0, 3.0))
    data = component_to_dict(obj.transform)
    assert data["Type"] == "Transform"
    assert data["Active"] == 1
    assert data["Translation"] == pytest.approx([1.0, 2.0, 3.0])
    assert data["Scale"] == pytest.approx([1.0, 1.0, 1.0])
    assert len(data["Rotation"]) == 3


def test_inactive_component_saves_zero_flag():
    obj = _object()
    obj.transform.disable()
    assert component_to_dict(obj.transform)["Active"] == 0


def test_camera_component_saves_camera_values():
    obj = _object()
    camera_component = obj.add_component(ComponentType.CAMERA)
    data = component_to_dict(camera_component)
    assert data["Type"] == "Camera"
    assert data["FOV"] == pytest.approx(camera_component.camera.vertical_fov)
    assert data["Near Plane"] == pytest.approx(camera_component.camera.near_plane_distance)
    assert data["Far Plane"] == pytest.approx(camera_component.camera.far_plane_distance)
    assert data["Position"] == pytest.approx(list(camera_component.camera.position))


def test_mesh_without_mesh_has_zero_counts():
    obj = _object()
    data = component_to_dict(obj.add_component(ComponentType.MESH))
    assert data["Type"] == "Mesh"
    assert data["Vertex Count"] == 0
    assert data["Index Count"] == 0


def test_texture_component_type_name():
    obj = _object()
    assert component_to_dict(obj.add_component(ComponentType.TEXTURE))["Type"] == "Texture"


@pytest.mark.parametrize(
    "name, kind",
    [
        ("Transform", ComponentType.TRANSFORM),
        ("Mesh", ComponentType.MESH),
        ("Texture", ComponentType.TEXTURE),
        ("Camera", ComponentType.CAMERA),
        ("Unknown", ComponentType.NONE),
    ],
)
def test_component_type_from_dict(name, kind):
    assert component_type_from_dict({"Type": name}) is kind


def test_component_type_from_dict_without_type():
    assert component_type_from_dict({}) is ComponentType.NONE


def test_game_object_dict_holds_hierarchy_uids():
    parent = _object("Parent", "uid-parent")
    child = _object("Child", "uid-child")
    parent.add_children(child)

    parent_data = game_object_to_dict(parent)
    child_data = game_object_to_dict(child)

    assert parent_data["Name"] == "Parent"
    assert parent_data["Children UID"] == ["uid-child"]
    assert "Parent UID" not in parent_data
    assert child_data["Parent UID"] == "uid-parent"
    assert "Children UID" not in child_data


def test_game_object_dict_lists_components_in_order():
    obj = _object()
    obj.add_component(ComponentType.TEXTURE)
    obj.add_component(ComponentType.CAMERA)
    types = [c["Type"] for c in game_object_to_dict(obj)["Components"]]
    assert types == ["Transform", "Texture", "Camera"]


def test_round_trip_keeps_name_uid_and_component_types():
    obj = _object("Pikachu", "uid-pika")
    obj.add_component(ComponentType.TEXTURE)
    restored = game_object_from_dict(game_object_to_dict(obj))
    assert restored.name == "Pikachu"
    assert restored.uid == "uid-pika"
    saved_types = [c.type for c in restored.components[1:]]
    assert saved_types == [ComponentType.TRANSFORM, ComponentType.TEXTURE]
    assert restored.transform is restored.components[0]


def test_game_object_from_non_dict_raises():
    with pytest.raises(TypeError):
        game_object_from_dict(["not", "an", "object"])


def test_store_and_load_through_document_file(tmp_path):
    doc = create_json()
    obj = _object("Saved", "uid-saved")
    store_game_object(doc, "GameObject", obj)
    path = tmp_path / "scene.json"
    save_json(doc, path)

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk["GameObject"]["UID"] == "uid-saved"

    loaded = load_game_object(load_json(path), "GameObject")
    assert loaded.name == "Saved"
    assert loaded.uid == "uid-saved"


def test_load_missing_key_gives_none():
    doc = create_json()
    doc.set_string("GameObject", "text")
    assert load_game_object(doc, "Missing") is None
    assert load_game_object(doc, "GameObject") is None