"""Mesh data and the binary mesh file format.

A mesh file starts with two little-endian uint32 counts (indices, vertices),
followed by the uint32 indices and then each vertex as eight float32 values:
position, normal and texture coordinates.
"""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Iterable

import numpy as np

_HEADER = struct.Struct("<II")
_VERTEX = struct.Struct("<8f")


@dataclass
class Vertex:
    """One mesh vertex."""

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    normal: tuple[float, float, float] = (0.0, 0.0, 0.0)
    tex_coords: tuple[float, float] = (0.0, 0.0)


@dataclass
class Mesh:
    """Indexed triangle mesh with attached textures and GPU buffer ids."""

    indices: list[int] = field(default_factory=list)
    vertices: list[Vertex] = field(default_factory=list)
    textures: list[object] = field(default_factory=list)
    vbo: int = 0
    ebo: int = 0


def save_mesh(mesh: Mesh) -> bytes:
    """Serialise ``mesh`` into the binary mesh format."""
    try:
        parts = [
            _HEADER.pack(len(mesh.indices), len(mesh.vertices)),
            struct.pack(f"<{len(mesh.indices)}I", *mesh.indices),
        ]
        parts.extend(
            _VERTEX.pack(*v.position, *v.normal, *v.tex_coords) for v in mesh.vertices
        )
    except struct.error as exc:
        raise ValueError(f"mesh cannot be encoded: {exc}") from exc
    return b"".join(parts)


def load_mesh(data: bytes) -> Mesh:
    """Build a mesh from bytes written by ``save_mesh``."""
    view = memoryview(data)
    if len(view) < _HEADER.size:
        raise ValueError("mesh data is shorter than its header")
    index_count, vertex_count = _HEADER.unpack_from(view, 0)
    index_end = _HEADER.size + 4 * index_count
    vertex_end = index_end + _VERTEX.size * vertex_count
    if len(view) < vertex_end:
        raise ValueError(
            f"mesh data holds {len(view)} bytes but its header needs {vertex_end}"
        )
    indices = list(struct.unpack_from(f"<{index_count}I", view, _HEADER.size))
    vertices = [
        Vertex(values[0:3], values[3:6], values[6:8])
        for values in _VERTEX.iter_unpack(view[index_end:vertex_end])
    ]
    return Mesh(indices=indices, vertices=vertices)


def save_mesh_to_file(mesh: Mesh, filename: str | PathLike) -> None:
    """Write ``mesh`` to ``filename`` in the binary mesh format."""
    Path(filename).write_bytes(save_mesh(mesh))


def load_mesh_from_file(filename: str | PathLike) -> Mesh:
    """Read a mesh written by ``save_mesh_to_file``."""
    return load_mesh(Path(filename).read_bytes())


def obtain_file_name(path: str) -> str:
    """Return the part of ``path`` after its last slash or backslash."""
    return re.split(r"[\\/]", path)[-1]


def normal_lines(
    meshes: Iterable[Mesh], length: float = 0.2
) -> list[tuple[np.ndarray, np.ndarray]]:
    """Segments from each triangle's centre along its first vertex normal."""
    lines = []
    for mesh in meshes:
        usable = len(mesh.indices) - len(mesh.indices) % 3
        for a, b, c in zip(*[iter(mesh.indices[:usable])] * 3):
            corners = np.array(
                [mesh.vertices[a].position, mesh.vertices[b].position, mesh.vertices[c].position],
                dtype=float,
            )
            center = corners.mean(axis=0)
            end = center + np.asarray(mesh.vertices[a].normal, dtype=float) * length
            lines.append((center, end))
    return lines