"""Cameras built on a view frustum, and the engine's camera registry.

Frustum vectors are numpy arrays of three floats. The view matrix follows
the right-handed OpenGL convention: the camera looks down its local -Z axis,
and ``world_right`` is ``front x up``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from amarillo.geometry import AABB, normalized, quat_from_axis_angle, rotate_vector

_UNIT_X = np.array([1.0, 0.0, 0.0])
_UNIT_Y = np.array([0.0, 1.0, 0.0])
_UNIT_Z = np.array([0.0, 0.0, 1.0])


def _vec3(value) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3).copy()


class FrustumType(Enum):
    """How the frustum projects: with perspective or orthographically."""

    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"


@dataclass(eq=False)
class Frustum:
    """A view volume placed at ``pos`` looking along ``front`` with ``up`` upwards."""

    type: FrustumType = FrustumType.PERSPECTIVE
    pos: np.ndarray = field(default_factory=lambda: np.zeros(3))
    front: np.ndarray = field(default_factory=lambda: _UNIT_Z.copy())
    up: np.ndarray = field(default_factory=lambda: _UNIT_Y.copy())
    near_plane_distance: float = 1.0
    far_plane_distance: float = 1000.0
    vertical_fov: float = math.radians(60.0)
    horizontal_fov: float = math.radians(60.0)
    orthographic_width: float = 1.0
    orthographic_height: float = 1.0

    def __post_init__(self) -> None:
        self.pos = _vec3(self.pos)
        self.front = _vec3(self.front)
        self.up = _vec3(self.up)

    def copy(self) -> "Frustum":
        """An independent copy of this frustum."""
        return Frustum(
            self.type,
            self.pos,
            self.front,
            self.up,
            self.near_plane_distance,
            self.far_plane_distance,
            self.vertical_fov,
            self.horizontal_fov,
            self.orthographic_width,
            self.orthographic_height,
        )

    def world_right(self) -> np.ndarray:
        """The right-pointing direction in world space."""
        return np.cross(self.front, self.up)

    def aspect_ratio(self) -> float:
        """Width divided by height of the view."""
        if self.type is FrustumType.ORTHOGRAPHIC:
            return self.orthographic_width / self.orthographic_height
        return math.tan(self.horizontal_fov * 0.5) / math.tan(self.vertical_fov * 0.5)

    def translate(self, offset) -> None:
        """Move the frustum by ``offset``."""
        self.pos = self.pos + _vec3(offset)

    def view_matrix(self) -> np.ndarray:
        """World-to-view 4x4 matrix."""
        matrix = np.identity(4)
        matrix[0, :3] = self.world_right()
        matrix[1, :3] = self.up
        matrix[2, :3] = -self.front
        matrix[:3, 3] = -(matrix[:3, :3] @ self.pos)
        return matrix

    def projection_matrix(self) -> np.ndarray:
        """View-to-clip 4x4 matrix with OpenGL depth range [-1, 1]."""
        near = self.near_plane_distance
        far = self.far_plane_distance
        matrix = np.zeros((4, 4))
        if self.type is FrustumType.ORTHOGRAPHIC:
            matrix[0, 0] = 2.0 / self.orthographic_width
            matrix[1, 1] = 2.0 / self.orthographic_height
            matrix[2, 2] = -2.0 / (far - near)
            matrix[2, 3] = -(far + near) / (far - near)
            matrix[3, 3] = 1.0
            return matrix
        width = 2.0 * near * math.tan(self.horizontal_fov * 0.5)
        height = 2.0 * near * math.tan(self.vertical_fov * 0.5)
        matrix[0, 0] = 2.0 * near / width
        matrix[1, 1] = 2.0 * near / height
        matrix[2, 2] = (near + far) / (near - far)
        matrix[2, 3] = 2.0 * near * far / (near - far)
        matrix[3, 2] = -1.0
        return matrix

    def corner_points(self) -> list[np.ndarray]:
        """The eight corners; bit 2 of the index picks right, bit 1 top, bit 0 the far plane."""
        right = self.world_right()
        corners = []
        for index in range(8):
            depth = self.far_plane_distance if index & 1 else self.near_plane_distance
            if self.type is FrustumType.ORTHOGRAPHIC:
                half_w = self.orthographic_width * 0.5
                half_h = self.orthographic_height * 0.5
            else:
                half_w = depth * math.tan(self.horizontal_fov * 0.5)
                half_h = depth * math.tan(self.vertical_fov * 0.5)
            sx = 1.0 if index & 4 else -1.0
            sy = 1.0 if index & 2 else -1.0
            corners.append(
                self.pos + self.front * depth + right * (sx * half_w) + self.up * (sy * half_h)
            )
        return corners


class Camera3D:
    """A camera: a frustum and the operations that move and aim it."""

    def __init__(self) -> None:
        vertical = math.radians(60.0)
        self.frustum = Frustum(
            type=FrustumType.PERSPECTIVE,
            pos=(0.0, 3.0, -10.0),
            front=_UNIT_Z,
            up=_UNIT_Y,
            near_plane_distance=1.0,
            far_plane_distance=1000.0,
            vertical_fov=vertical,
            horizontal_fov=2.0 * math.atan(math.tan(vertical / 2.0) * 1.3),
        )

    @property
    def position(self) -> np.ndarray:
        """Where the camera stands."""
        return self.frustum.pos.copy()

    @property
    def front(self) -> np.ndarray:
        """The viewing direction (the camera's Z direction)."""
        return self.frustum.front.copy()

    @front.setter
    def front(self, value) -> None:
        self.frustum.front = _vec3(value)

    @property
    def up(self) -> np.ndarray:
        """The camera's up direction (its Y direction)."""
        return self.frustum.up.copy()

    @up.setter
    def up(self, value) -> None:
        self.frustum.up = _vec3(value)

    @property
    def right(self) -> np.ndarray:
        """The camera's X direction."""
        return self.frustum.world_right()

    @property
    def near_plane_distance(self) -> float:
        return self.frustum.near_plane_distance

    @near_plane_distance.setter
    def near_plane_distance(self, value: float) -> None:
        self.frustum.near_plane_distance = float(value)

    @property
    def far_plane_distance(self) -> float:
        return self.frustum.far_plane_distance

    @far_plane_distance.setter
    def far_plane_distance(self, value: float) -> None:
        self.frustum.far_plane_distance = float(value)

    @property
    def vertical_fov(self) -> float:
        return self.frustum.vertical_fov

    @vertical_fov.setter
    def vertical_fov(self, value: float) -> None:
        self.frustum.vertical_fov = float(value)

    @property
    def horizontal_fov(self) -> float:
        return self.frustum.horizontal_fov

    @property
    def view_matrix(self) -> np.ndarray:
        return self.frustum.view_matrix()

    @property
    def projection_matrix(self) -> np.ndarray:
        return self.frustum.projection_matrix()

    def set_position(self, pos) -> None:
        """Place the camera at ``pos``."""
        self.frustum.pos = _vec3(pos)

    def set_rotation(self, rotation) -> None:
        """Orient the camera by a quaternion; identity looks down -Z with +Y up."""
        self.frustum.front = normalized(rotate_vector(rotation, (0.0, 0.0, -1.0)))
        self.frustum.up = rotate_vector(rotation, (0.0, 1.0, 0.0))
        self.frustum.up = normalized(np.cross(self.frustum.world_right(), self.frustum.front))

    def set_scale(self, scale_factors) -> None:
        """Scale plane distances by z and the view's width and height by x and y."""
        sx, sy, sz = _vec3(scale_factors)
        self.frustum.near_plane_distance *= sz
        self.frustum.far_plane_distance *= sz
        if self.frustum.type is FrustumType.PERSPECTIVE:
            self.frustum.horizontal_fov *= sx
            self.frustum.vertical_fov *= sy
        else:
            self.frustum.orthographic_width *= sx
            self.frustum.orthographic_height *= sy

    def get_corners(self) -> list[np.ndarray]:
        """The eight corners of the camera's frustum."""
        return self.frustum.corner_points()

    def opengl_view_matrix(self) -> np.ndarray:
        """The view matrix transposed into OpenGL's column-major layout."""
        return self.frustum.view_matrix().T.copy()

    def opengl_projection_matrix(self) -> np.ndarray:
        """The projection matrix transposed into OpenGL's column-major layout."""
        return self.frustum.projection_matrix().T.copy()

    def _step(self, direction: np.ndarray, speed: float) -> None:
        if speed <= 0:
            return
        self.frustum.translate(direction * speed)

    def move_front(self, speed: float) -> None:
        """Step forward; a speed that is not positive does nothing."""
        self._step(self.frustum.front, speed)

    def move_back(self, speed: float) -> None:
        """Step backward; a speed that is not positive does nothing."""
        self._step(-self.frustum.front, speed)

    def move_right(self, speed: float) -> None:
        """Step to the right; a speed that is not positive does nothing."""
        self._step(self.frustum.world_right(), speed)

    def move_left(self, speed: float) -> None:
        """Step to the left; a speed that is not positive does nothing."""
        self._step(-self.frustum.world_right(), speed)

    def move_up(self, speed: float) -> None:
        """Rise along world Y; a speed that is not positive does nothing."""
        self._step(_UNIT_Y, speed)

    def move_down(self, speed: float) -> None:
        """Sink along world Y; a speed that is not positive does nothing."""
        self._step(-_UNIT_Y, speed)

    def orbit(self, rotate_center, motion_x: float, motion_y: float) -> None:
        """Swing the camera's position around ``rotate_center``."""
        center = _vec3(rotate_center)
        distance = self.frustum.pos - center
        around_right = quat_from_axis_angle(self.frustum.world_right(), motion_y)
        around_up = quat_from_axis_angle(self.frustum.up, motion_x)
        distance = rotate_vector(around_right, distance)
        distance = rotate_vector(around_up, distance)
        self.frustum.pos = distance + center

    def rotate(self, motion_x: float, motion_y: float) -> None:
        """Turn about world Y by ``motion_x`` and about the camera's right by ``motion_y``."""
        yaw = quat_from_axis_angle(_UNIT_Y, motion_x)
        self.frustum.front = normalized(rotate_vector(yaw, self.frustum.front))
        self.frustum.up = normalized(rotate_vector(yaw, self.frustum.up))
        pitch = quat_from_axis_angle(self.frustum.world_right(), motion_y)
        self.frustum.front = normalized(rotate_vector(pitch, self.frustum.front))
        self.frustum.up = normalized(rotate_vector(pitch, self.frustum.up))

    def look(self, look_pos) -> None:
        """Aim at ``look_pos``, keeping up as close to world Y as possible."""
        target = normalized(_vec3(look_pos) - self.frustum.pos)
        world_right = normalized(np.cross(_UNIT_Y, target))
        self.frustum.front = target
        self.frustum.up = normalized(np.cross(target, world_right))

    def focus(self, focus_center, distance: float) -> None:
        """Put the camera ``distance`` from the origin along its offset from ``focus_center``, then aim there."""
        direction = self.frustum.pos - _vec3(focus_center)
        self.frustum.pos = normalized(direction) * distance
        self.look(focus_center)

    def focus_on_box(self, aabb: AABB) -> None:
        """Focus on a box's centre at a distance of its diagonal."""
        self.focus(aabb.center(), float(np.linalg.norm(aabb.size())))


class CameraManager:
    """The editor camera plus every game camera, one of which is active."""

    def __init__(self) -> None:
        self.editor_camera = Camera3D()
        self.cameras: list[Camera3D] = []
        self.active_camera: Camera3D | None = None

    def create_camera(self) -> Camera3D:
        """Make a new camera; the first one made becomes the active camera."""
        camera = Camera3D()
        self.cameras.append(camera)
        if self.active_camera is None:
            self.active_camera = camera
        return camera

    def look_at(self, spot) -> None:
        """Aim the editor camera at ``spot``."""
        frustum = self.editor_camera.frustum
        frustum.front = normalized(_vec3(spot) - frustum.pos)
        side = normalized(np.cross(_UNIT_Y, frustum.front))
        frustum.up = np.cross(frustum.front, side)

    def move(self, movement) -> None:
        """Shift the editor camera's position and front vector by ``movement``."""
        offset = _vec3(movement)
        frustum = self.editor_camera.frustum
        frustum.pos = frustum.pos + offset
        frustum.front = frustum.front + offset

    @staticmethod
    def _vertical_fov_for(horizontal_fov: float, width: int, height: int) -> float:
        if height == 0:
            raise ValueError("height must not be zero")
        ratio = float(width) / float(height)
        if ratio == 0.0:
            raise ValueError("width must not be zero")
        return 2.0 * math.atan(math.tan(horizontal_fov * 0.5) / ratio)

    def set_aspect_ratio(self, width: int, height: int) -> None:
        """Fit the editor camera's vertical field of view to a viewport size."""
        frustum = self.editor_camera.frustum
        frustum.vertical_fov = self._vertical_fov_for(frustum.horizontal_fov, width, height)

    def set_aspect_ratio_game(self, width: int, height: int) -> None:
        """Fit the active camera's vertical field of view to a viewport size."""
        if self.active_camera is None:
            raise RuntimeError("there is no active camera")
        self.active_camera.frustum.vertical_fov = self._vertical_fov_for(
            self.editor_camera.frustum.horizontal_fov, width, height
        )