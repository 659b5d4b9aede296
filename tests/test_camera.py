import math

import numpy as np
import pytest

from amarillo.camera import Camera3D, CameraManager, Frustum, FrustumType
from amarillo.geometry import AABB, quat_from_axis_angle, quat_identity


def _to_view(camera, point):
    return (camera.view_matrix @ np.append(np.asarray(point, dtype=float), 1.0))[:3]


def _is_orthonormal(camera):
    f, u, r = camera.front, camera.up, camera.right
    return (
        math.isclose(np.linalg.norm(f), 1.0, abs_tol=1e-9)
        and math.isclose(np.linalg.norm(u), 1.0, abs_tol=1e-9)
        and abs(np.dot(f, u)) < 1e-9
        and abs(np.dot(f, r)) < 1e-9
    )


def test_default_camera_matches_source_values():
    camera = Camera3D()
    assert np.allclose(camera.position, [0, 3, -10])
    assert np.allclose(camera.front, [0, 0, 1])
    assert np.allclose(camera.up, [0, 1, 0])
    assert camera.near_plane_distance == 1.0
    assert camera.far_plane_distance == 1000.0
    assert math.isclose(camera.vertical_fov, math.radians(60.0))
    assert math.isclose(camera.frustum.aspect_ratio(), 1.3)


def test_world_right_is_perpendicular_unit():
    camera = Camera3D()
    right = camera.right
    assert math.isclose(np.linalg.norm(right), 1.0)
    assert abs(np.dot(right, camera.front)) < 1e-12
    assert abs(np.dot(right, camera.up)) < 1e-12


def test_view_matrix_puts_camera_at_origin_looking_down_minus_z():
    camera = Camera3D()
    assert np.allclose(_to_view(camera, camera.position), 0.0)
    ahead = camera.position + camera.front * 5.0
    assert np.allclose(_to_view(camera, ahead), [0, 0, -5.0])


def test_perspective_projection_maps_planes_to_depth_range():
    camera = Camera3D()
    proj = camera.projection_matrix
    for depth, expected in ((camera.near_plane_distance, -1.0), (camera.far_plane_distance, 1.0)):
        clip = proj @ np.array([0.0, 0.0, -depth, 1.0])
        assert math.isclose(clip[2] / clip[3], expected, abs_tol=1e-9)


def test_orthographic_projection_and_aspect():
    frustum = Frustum(
        type=FrustumType.ORTHOGRAPHIC,
        orthographic_width=4.0,
        orthographic_height=2.0,
        near_plane_distance=1.0,
        far_plane_distance=10.0,
    )
    assert frustum.aspect_ratio() == 2.0
    proj = frustum.projection_matrix()
    edge = proj @ np.array([2.0, 1.0, -10.0, 1.0])
    assert np.allclose(edge[:3] / edge[3], [1.0, 1.0, 1.0])


def test_corner_points_lie_on_near_and_far_planes():
    camera = Camera3D()
    corners = camera.get_corners()
    assert len(corners) == 8
    for index, corner in enumerate(corners):
        depth = np.dot(corner - camera.position, camera.front)
        expected = camera.far_plane_distance if index & 1 else camera.near_plane_distance
        assert math.isclose(depth, expected, rel_tol=1e-9)


def test_corner_points_project_to_clip_edges():
    camera = Camera3D()
    proj = camera.projection_matrix
    for corner in camera.get_corners():
        view = _to_view(camera, corner)
        clip = proj @ np.append(view, 1.0)
        ndc = clip[:3] / clip[3]
        assert np.allclose(np.abs(ndc), 1.0, atol=1e-6)


def test_opengl_matrices_are_transposes():
    camera = Camera3D()
    assert np.allclose(camera.opengl_view_matrix(), camera.view_matrix.T)
    assert np.allclose(camera.opengl_projection_matrix(), camera.projection_matrix.T)


def test_set_rotation_identity_looks_down_minus_z():
    camera = Camera3D()
    camera.set_rotation(quat_identity())
    assert np.allclose(camera.front, [0, 0, -1])
    assert np.allclose(camera.up, [0, 1, 0])


def test_set_rotation_keeps_basis_orthonormal():
    camera = Camera3D()
    camera.set_rotation(quat_from_axis_angle((1.0, 1.0, 0.0), 0.7))
    front, up, right = camera.front, camera.up, camera.right
    assert np.linalg.norm(front) == pytest.approx(1.0, abs=1e-9)
    assert np.linalg.norm(up) == pytest.approx(1.0, abs=1e-9)
    assert np.dot(front, up) == pytest.approx(0.0, abs=1e-9)
    assert np.dot(front, right) == pytest.approx(0.0, abs=1e-9)
    assert not np.allclose(front, [0, 0, -1])


def test_set_scale_perspective():
    camera = Camera3D()
    h, v = camera.horizontal_fov, camera.vertical_fov
    camera.set_scale((2.0, 0.5, 3.0))
    assert math.isclose(camera.near_plane_distance, 3.0)
    assert math.isclose(camera.far_plane_distance, 3000.0)
    assert math.isclose(camera.horizontal_fov, h * 2.0)
    assert math.isclose(camera.vertical_fov, v * 0.5)


def test_set_scale_orthographic():
    camera = Camera3D()
    camera.frustum.type = FrustumType.ORTHOGRAPHIC
    camera.frustum.orthographic_width = 4.0
    camera.frustum.orthographic_height = 2.0
    v = camera.vertical_fov
    camera.set_scale((2.0, 3.0, 1.0))
    assert camera.frustum.orthographic_width == 8.0
    assert camera.frustum.orthographic_height == 6.0
    assert camera.vertical_fov == v


def test_moves_follow_axes():
    camera = Camera3D()
    start = camera.position
    camera.move_front(2.0)
    assert np.allclose(camera.position, start + camera.front * 2.0)
    camera.move_back(2.0)
    assert np.allclose(camera.position, start)
    camera.move_right(1.5)
    assert np.allclose(camera.position, start + camera.right * 1.5)
    camera.move_left(1.5)
    camera.move_up(4.0)
    assert np.allclose(camera.position, start + np.array([0, 4.0, 0]))
    camera.move_down(4.0)
    assert np.allclose(camera.position, start)


@pytest.mark.parametrize("speed", [0.0, -3.0])
def test_moves_ignore_non_positive_speed(speed):
    camera = Camera3D()
    start = camera.position
    for move in (camera.move_front, camera.move_back, camera.move_right,
                 camera.move_left, camera.move_up, camera.move_down):
        move(speed)
    assert np.allclose(camera.position, start)


def test_orbit_keeps_distance_to_center():
    camera = Camera3D()
    center = np.array([1.0, 0.0, 2.0])
    before = np.linalg.norm(camera.position - center)
    camera.orbit(center, 0.4, 0.3)
    assert math.isclose(np.linalg.norm(camera.position - center), before, rel_tol=1e-9)
    assert not np.allclose(camera.position, [0, 3, -10])


def test_rotate_keeps_basis_orthonormal():
    camera = Camera3D()
    camera.rotate(0.5, -0.2)
    assert _is_orthonormal(camera)
    assert not np.allclose(camera.front, [0, 0, 1])


def test_look_points_front_at_target():
    camera = Camera3D()
    target = np.array([5.0, 1.0, 2.0])
    camera.look(target)
    expected = (target - camera.position) / np.linalg.norm(target - camera.position)
    assert np.allclose(camera.front, expected)
    assert camera.up[1] > 0.0
    assert _is_orthonormal(camera)


def test_focus_sets_distance_and_aims():
    camera = Camera3D()
    camera.focus((0.0, 0.0, 0.0), 7.0)
    assert math.isclose(np.linalg.norm(camera.position), 7.0)
    assert np.allclose(camera.front, -camera.position / 7.0)


def test_focus_on_box_uses_diagonal():
    camera = Camera3D()
    box = AABB.from_points([[-1, -2, -2], [1, 2, 2]])
    camera.focus_on_box(box)
    assert math.isclose(np.linalg.norm(camera.position), np.linalg.norm(box.size()))
    assert np.allclose(camera.front, normalized_neg(camera.position))


def normalized_neg(vector):
    return -np.asarray(vector) / np.linalg.norm(vector)


def test_manager_first_camera_becomes_active():
    manager = CameraManager()
    first = manager.create_camera()
    second = manager.create_camera()
    assert manager.active_camera is first
    assert manager.cameras == [first, second]


def test_manager_look_at_aims_editor_camera():
    manager = CameraManager()
    manager.look_at((0.0, 0.0, 0.0))
    editor = manager.editor_camera
    expected = -editor.position / np.linalg.norm(editor.position)
    assert np.allclose(editor.front, expected)
    assert abs(np.dot(editor.front, editor.up)) < 1e-9


def test_manager_move_shifts_position_and_front():
    manager = CameraManager()
    before_pos = manager.editor_camera.position
    before_front = manager.editor_camera.front
    manager.move((1.0, 2.0, 3.0))
    assert np.allclose(manager.editor_camera.position, before_pos + [1, 2, 3])
    assert np.allclose(manager.editor_camera.front, before_front + [1, 2, 3])


def test_manager_aspect_ratio_matches_viewport():
    manager = CameraManager()
    manager.set_aspect_ratio(1600, 900)
    assert math.isclose(manager.editor_camera.frustum.aspect_ratio(), 1600 / 900)


def test_manager_game_aspect_ratio():
    manager = CameraManager()
    with pytest.raises(RuntimeError):
        manager.set_aspect_ratio_game(800, 600)
    game = manager.create_camera()
    manager.set_aspect_ratio_game(800, 600)
    ratio = math.tan(manager.editor_camera.horizontal_fov / 2) / math.tan(game.vertical_fov / 2)
    assert math.isclose(ratio, 800 / 600)


def test_manager_rejects_zero_height():
    manager = CameraManager()
    with pytest.raises(ValueError):
        manager.set_aspect_ratio(800, 0)