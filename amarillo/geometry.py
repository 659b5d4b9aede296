"""Vector, quaternion, matrix and bounding-box maths.

Vectors are numpy arrays of three floats, quaternions are arrays in
(x, y, z, w) order and matrices are 4x4 arrays acting on column vectors.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

_EPSILON_SQ = 1e-6


def _vec3(value) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3)


def _quat(value) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(4)


def normalized(vector) -> np.ndarray:
    """Return ``vector`` scaled to unit length; a near-zero vector gives the X axis."""
    v = np.asarray(vector, dtype=float)
    length_sq = float(np.dot(v, v))
    if length_sq <= _EPSILON_SQ:
        result = np.zeros_like(v)
        result[0] = 1.0
        return result
    return v / math.sqrt(length_sq)


def quat_identity() -> np.ndarray:
    """The quaternion that performs no rotation."""
    return np.array([0.0, 0.0, 0.0, 1.0])


def quat_from_axis_angle(axis, angle: float) -> np.ndarray:
    """Rotation of ``angle`` radians about ``axis``."""
    unit = normalized(_vec3(axis))
    half = angle * 0.5
    s = math.sin(half)
    return np.array([unit[0] * s, unit[1] * s, unit[2] * s, math.cos(half)])


def quat_mul(a, b) -> np.ndarray:
    """Hamilton product ``a * b``: rotating by ``b`` first, then ``a``."""
    ax, ay, az, aw = _quat(a)
    bx, by, bz, bw = _quat(b)
    return np.array(
        [
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz,
        ]
    )


def quat_inverse(quat) -> np.ndarray:
    """The inverse rotation of ``quat``."""
    q = _quat(quat)
    norm_sq = float(np.dot(q, q))
    if norm_sq == 0.0:
        raise ValueError("cannot invert a zero quaternion")
    return np.array([-q[0], -q[1], -q[2], q[3]]) / norm_sq


def _quat_to_matrix3(quat) -> np.ndarray:
    x, y, z, w = normalized(_quat(quat))
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
        ]
    )


def _matrix3_to_quat(m: np.ndarray) -> np.ndarray:
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0.0:
        s = math.sqrt(trace + 1.0) * 2.0
        w = 0.25 * s
        x = (m[2, 1] - m[1, 2]) / s
        y = (m[0, 2] - m[2, 0]) / s
        z = (m[1, 0] - m[0, 1]) / s
    elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
        s = math.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2]) * 2.0
        w = (m[2, 1] - m[1, 2]) / s
        x = 0.25 * s
        y = (m[0, 1] + m[1, 0]) / s
        z = (m[0, 2] + m[2, 0]) / s
    elif m[1, 1] > m[2, 2]:
        s = math.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2]) * 2.0
        w = (m[0, 2] - m[2, 0]) / s
        x = (m[0, 1] + m[1, 0]) / s
        y = 0.25 * s
        z = (m[1, 2] + m[2, 1]) / s
    else:
        s = math.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1]) * 2.0
        w = (m[1, 0] - m[0, 1]) / s
        x = (m[0, 2] + m[2, 0]) / s
        y = (m[1, 2] + m[2, 1]) / s
        z = 0.25 * s
    return normalized(np.array([x, y, z, w]))


def quat_from_euler_xyz(x: float, y: float, z: float) -> np.ndarray:
    """Rotation equal to rotating about Z, then Y, then X (radians)."""
    rx = quat_from_axis_angle((1.0, 0.0, 0.0), x)
    ry = quat_from_axis_angle((0.0, 1.0, 0.0), y)
    rz = quat_from_axis_angle((0.0, 0.0, 1.0), z)
    return normalized(quat_mul(quat_mul(rx, ry), rz))


def quat_to_euler_xyz(quat) -> np.ndarray:
    """Euler angles (x, y, z) in radians such that ``quat_from_euler_xyz`` rebuilds ``quat``."""
    m = _quat_to_matrix3(quat)
    if m[0, 2] < 1.0:
        if m[0, 2] > -1.0:
            return np.array(
                [
                    math.atan2(-m[1, 2], m[2, 2]),
                    math.asin(m[0, 2]),
                    math.atan2(-m[0, 1], m[0, 0]),
                ]
            )
        return np.array([-math.atan2(m[1, 0], m[1, 1]), -math.pi / 2, 0.0])
    return np.array([math.atan2(m[1, 0], m[1, 1]), math.pi / 2, 0.0])


def rotate_vector(quat, vector) -> np.ndarray:
    """Apply the rotation ``quat`` to ``vector``."""
    return _quat_to_matrix3(quat) @ _vec3(vector)


def matrix_from_trs(position, rotation, scale) -> np.ndarray:
    """4x4 matrix that scales, then rotates, then translates."""
    matrix = np.identity(4)
    matrix[:3, :3] = _quat_to_matrix3(rotation) * _vec3(scale)
    matrix[:3, 3] = _vec3(position)
    return matrix


def decompose_matrix(matrix) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split a TRS matrix into (position, rotation quaternion, scale)."""
    m = np.asarray(matrix, dtype=float).reshape(4, 4)
    position = m[:3, 3].copy()
    basis = m[:3, :3].copy()
    scale = np.linalg.norm(basis, axis=0)
    if np.linalg.det(basis) < 0.0:
        scale[0] = -scale[0]
    safe = np.where(scale == 0.0, 1.0, scale)
    rotation_matrix = basis / safe
    return position, _matrix3_to_quat(rotation_matrix), scale


def _corner_signs():
    for i in range(8):
        yield (i & 4) != 0, (i & 2) != 0, (i & 1) != 0


@dataclass(eq=False)
class AABB:
    """Axis-aligned box given by its minimum and maximum corners."""

    minimum: np.ndarray = field(default_factory=lambda: np.full(3, np.inf))
    maximum: np.ndarray = field(default_factory=lambda: np.full(3, -np.inf))

    def __post_init__(self) -> None:
        self.minimum = _vec3(self.minimum).copy()
        self.maximum = _vec3(self.maximum).copy()

    @classmethod
    def negative_infinity(cls) -> "AABB":
        """An empty box that any enclosed point will replace."""
        return cls()

    @classmethod
    def from_points(cls, points) -> "AABB":
        """The smallest box holding every point."""
        array = np.asarray(points, dtype=float).reshape(-1, 3)
        if array.shape[0] == 0:
            raise ValueError("cannot build a box from no points")
        return cls(array.min(axis=0), array.max(axis=0))

    def enclose(self, points) -> None:
        """Grow the box so that it holds one point or many."""
        array = np.atleast_2d(np.asarray(points, dtype=float)).reshape(-1, 3)
        if array.shape[0] == 0:
            return
        self.minimum = np.minimum(self.minimum, array.min(axis=0))
        self.maximum = np.maximum(self.maximum, array.max(axis=0))

    def is_finite(self) -> bool:
        """True when both corners are finite numbers."""
        return bool(np.all(np.isfinite(self.minimum)) and np.all(np.isfinite(self.maximum)))

    def center(self) -> np.ndarray:
        """Centre point of the box."""
        return (self.minimum + self.maximum) * 0.5

    def size(self) -> np.ndarray:
        """Edge lengths of the box."""
        return self.maximum - self.minimum

    def corner_points(self) -> list[np.ndarray]:
        """The eight corners; bit 2 of the index picks x, bit 1 y, bit 0 z."""
        return [
            np.array(
                [
                    self.maximum[0] if bx else self.minimum[0],
                    self.maximum[1] if by else self.minimum[1],
                    self.maximum[2] if bz else self.minimum[2],
                ]
            )
            for bx, by, bz in _corner_signs()
        ]


@dataclass(eq=False)
class OBB:
    """Oriented box: a centre, three unit axes (rows) and half extents."""

    center: np.ndarray
    axes: np.ndarray
    half_size: np.ndarray

    @classmethod
    def from_aabb(cls, aabb: AABB, matrix) -> "OBB":
        """Transform an axis-aligned box by a 4x4 matrix."""
        if not aabb.is_finite():
            raise ValueError("cannot transform an empty box")
        m = np.asarray(matrix, dtype=float).reshape(4, 4)
        linear = m[:3, :3]
        center = linear @ aabb.center() + m[:3, 3]
        half = aabb.size() * 0.5
        axes = np.empty((3, 3))
        half_size = np.empty(3)
        for i, column in enumerate(linear.T):
            direction = column * half[i]
            half_size[i] = float(np.linalg.norm(direction))
            axes[i] = normalized(direction)
        return cls(center, axes, half_size)

    def corner_points(self) -> list[np.ndarray]:
        """The eight corners, ordered as for ``AABB.corner_points``."""
        corners = []
        for signs in _corner_signs():
            point = self.center.copy()
            for axis, extent, positive in zip(self.axes, self.half_size, signs):
                point = point + axis * (extent if positive else -extent)
            corners.append(point)
        return corners