# amarillo

The core of a small 3D game engine, written in plain Python on top of numpy.
It provides a scene graph of game objects with components, transforms that
propagate through the hierarchy, perspective and orthographic camera
frustums, a compact binary mesh format, a dotted-key JSON document for
settings and scenes, helpers for asset folders, and a module-based main loop.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `amarillo.color` | `Color` with r, g, b, a channels, and the named colours `RED`, `GREEN`, `BLUE`, `BLACK`, `WHITE` |
| `amarillo.textutil` | `text_cmp`, `to_upper_case`, `to_lower_case` |
| `amarillo.geometry` | vectors, quaternions in (x, y, z, w) order, TRS matrices, `AABB` and `OBB` boxes |
| `amarillo.mesh` | `Vertex`, `Mesh`, the binary mesh format and `normal_lines` |
| `amarillo.filesystem` | path decomposition, name-collision renaming and the `FileSystem` folder layout |
| `amarillo.camera` | `Frustum`, `FrustumType`, `Camera3D` and `CameraManager` |
| `amarillo.jsondoc` | `JsonDoc` and `JsonArrayPack`, plus `create_json`, `load_json`, `save_json` |
| `amarillo.components` | `Component` and `ComponentTransform`, `ComponentMesh`, `ComponentTexture`, `ComponentCamera` |
| `amarillo.gameobject` | `GameObject`, the node of the scene graph |
| `amarillo.sceneio` | converting game objects and components to dictionaries and JSON documents and back |
| `amarillo.application` | `Module`, `UpdateStatus`, `Application` and the `main` command |

## A short tour

Text helpers:

```python
from amarillo.textutil import text_cmp, to_lower_case

text_cmp("Assets", "Assets")   # True
text_cmp(None, "Assets")       # False
to_lower_case("Model.FBX")     # "model.fbx"
```

Building a hierarchy:

```python
from amarillo.gameobject import GameObject
from amarillo.components import ComponentType

root = GameObject("root")
child = GameObject("child")
root.add_children(child)

child.is_child_of(root)        # True
root.set_parent(child)         # False: that would make a cycle

child.add_component(ComponentType.MESH)
child.get_component(ComponentType.MESH)   # the ComponentMesh just added
```

Every game object starts with a `ComponentTransform`. Setting a local
position, rotation or scale on it rebuilds its local matrix and recomputes
the world matrices of the object and all of its descendants.

Meshes are stored as a small binary blob: two little-endian uint32 counts
(indices, vertices), the uint32 indices, then each vertex as eight float32
values (position, normal, texture coordinates).

```python
from amarillo.mesh import Mesh, Vertex, save_mesh, load_mesh

mesh = Mesh(indices=[0, 1, 2], vertices=[
    Vertex((0, 0, 0)), Vertex((1, 0, 0)), Vertex((0, 1, 0)),
])
data = save_mesh(mesh)
same_mesh = load_mesh(data)
```

`save_mesh_to_file` and `load_mesh_from_file` do the same through a file;
`load_mesh` raises `ValueError` on data shorter than its header says.

JSON documents address values by dotted keys:

```python
from amarillo.jsondoc import create_json, save_json, load_json

doc = create_json()
doc.set_number("window.width", 1280)
doc.get_number("window.width", 0)   # 1280.0
save_json(doc, "settings.json")

again = load_json("settings.json")
```

A document also has a cursor: `move_to_section` and
`move_to_section_from_array` step into nested objects, and `move_to_root`
returns. `get_array` gives a `JsonArrayPack` that walks the object nodes of
an array.

Scenes go into documents through `amarillo.sceneio`:

```python
from amarillo.sceneio import store_game_object, load_game_object

store_game_object(doc, "root", root)
loaded = load_game_object(doc, "root")
```

A loaded game object gets its name, uid and one plain `Component` of each
saved type; positions and hierarchy links are written but not restored.

Path helpers work on backslash-separated engine paths:

```python
from amarillo.filesystem import get_file_extension, new_name_for_file_name_collision

get_file_extension("house.fbx")               # "fbx"
new_name_for_file_name_collision("house")     # "house(1)"
new_name_for_file_name_collision("house(1)")  # "house(2)"
```

`FileSystem(base_path)` creates `Assets`, `Settings` and `Library` with
`Meshes`, `Prefabs`, `Textures`, `Scenes` and `Shades` inside it, and offers
copying, renaming, deleting, saving, loading and listing of files.

Cameras:

```python
from amarillo.camera import CameraManager

cameras = CameraManager()
game_camera = cameras.create_camera()   # the first one becomes active
cameras.look_at((0, 0, 0))              # aims the editor camera
cameras.set_aspect_ratio(1280, 720)
```

## Running the engine loop

```
amarillo --frames 10
```

`--frames` sets how many frames to run (default 1). The command builds an
`Application` with no modules and runs it: `init` then `start` on every
module, pre-update, update and post-update passes each frame, and
`clean_up` in reverse order. Its exit status is 0 on success and 1 when a
step fails. To do real work, subclass `Module` and pass instances to
`Application`:

```python
from amarillo.application import Application, Module, UpdateStatus

class Counter(Module):
    frames = 0

    def update(self, dt):
        self.frames += 1
        return UpdateStatus.STOP if self.frames == 3 else UpdateStatus.CONTINUE

app = Application([Counter()])
app.run()   # 0
```

## What this package does not do

There is no window, no rendering, no keyboard or mouse input, no editor
interface, no scripting and no importing of model or image files. Textures
are held by `ComponentTexture` as opaque objects and are never loaded or
drawn; `normal_lines`, the box corner points and the camera matrices produce
data that a renderer could use, but nothing here draws them.