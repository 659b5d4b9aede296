"""Core of a small 3D game engine: scene graph, components, transforms, cameras, meshes, JSON documents, asset file helpers and a module-based main loop."""

__version__ = "0.5.0"