import struct

import numpy as np
import pytest

from amarillo.mesh import (
    Mesh,
    Vertex,
    load_mesh,
    load_mesh_from_file,
    normal_lines,
    obtain_file_name,
    save_mesh,
    save_mesh_to_file,
)


@pytest.fixture
def triangle():
    return Mesh(
        indices=[0, 1, 2],
        vertices=[
            Vertex((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0)),
            Vertex((3.0, 0.0, 0.0), (0.0, 0.0, 1.0), (1.0, 0.0)),
            Vertex((0.0, 3.0, 0.0), (0.0, 0.0, 1.0), (0.0, 1.0)),
        ],
    )


def test_header_holds_counts(triangle):
    data = save_mesh(triangle)
    assert data[:8] == struct.pack("<II", 3, 3)


def test_size_follows_layout(triangle):
    data = save_mesh(triangle)
    assert len(data) == 8 + 4 * len(triangle.indices) + 32 * len(triangle.vertices)


def test_round_trip(triangle):
    assert load_mesh(save_mesh(triangle)) == triangle


def test_empty_mesh_round_trip():
    assert load_mesh(save_mesh(Mesh())) == Mesh()


def test_truncated_data_raises(triangle):
    data = save_mesh(triangle)
    with pytest.raises(ValueError):
        load_mesh(data[:-1])
    with pytest.raises(ValueError):
        load_mesh(data[:4])


def test_negative_index_rejected():
    with pytest.raises(ValueError):
        save_mesh(Mesh(indices=[-1]))


def test_file_round_trip(tmp_path, triangle):
    path = tmp_path / "triangle.ymesh"
    save_mesh_to_file(triangle, path)
    assert path.read_bytes() == save_mesh(triangle)
    assert load_mesh_from_file(path) == triangle


def test_save_to_missing_directory_raises(tmp_path, triangle):
    with pytest.raises(OSError):
        save_mesh_to_file(triangle, tmp_path / "missing" / "out.ymesh")


@pytest.mark.parametrize(
    "path, expected",
    [("a/b\\c.fbx", "c.fbx"), ("Models/Cube.fbx", "Cube.fbx"), ("Cube.fbx", "Cube.fbx")],
)
def test_obtain_file_name(path, expected):
    assert obtain_file_name(path) == expected


def test_normal_lines(triangle):
    lines = normal_lines([triangle], 2.0)
    assert len(lines) == 1
    center, end = lines[0]
    positions = np.array([v.position for v in triangle.vertices])
    assert np.allclose(center, positions.mean(axis=0))
    assert np.allclose(end - center, np.array(triangle.vertices[0].normal) * 2.0)


def test_normal_lines_one_per_triangle(triangle):
    doubled = Mesh(indices=[0, 1, 2, 2, 1, 0, 0], vertices=triangle.vertices)
    assert len(normal_lines([triangle, doubled])) == 3