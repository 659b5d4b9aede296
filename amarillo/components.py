"""Components that give game objects a transform, a mesh, a texture or a camera."""

from __future__ import annotations

import logging
import math
from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np

from amarillo.camera import Camera3D, CameraManager
from amarillo.geometry import (
    AABB,
    OBB,
    decompose_matrix,
    matrix_from_trs,
    normalized,
    quat_from_euler_xyz,
    quat_identity,
    quat_mul,
    quat_to_euler_xyz,
)
from amarillo.mesh import Mesh

if TYPE_CHECKING:
    from amarillo.gameobject import GameObject
    from amarillo.jsondoc import JsonDoc

logger = logging.getLogger(__name__)


def _vec3(value) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3).copy()


class ComponentType(Enum):
    """The kinds of component a game object can carry."""

    NONE = 0
    TRANSFORM = 1
    MESH = 2
    TEXTURE = 3
    CAMERA = 4
    SCRIPT = 5


class Component:
    """Base of every component; the hooks do nothing unless overridden."""

    component_type = ComponentType.NONE

    def __init__(self, owner: GameObject | None = None) -> None:
        self.owner = owner
        self.type = self.component_type
        self.active = True
        self.not_destroy = True

    def enable(self) -> None:
        """Called when the owner is enabled."""

    def disable(self) -> None:
        """Called when the owner is disabled."""

    def start(self) -> None:
        """Called once before the first update."""

    def update(self) -> None:
        """Called every frame."""

    def serialize(self, doc: JsonDoc) -> None:
        """Write the component's data into ``doc``."""

    def on_start_play(self) -> None:
        """Called when the scene starts playing."""


class ComponentTransform(Component):
    """Local and world position, rotation and scale of a game object.

    Rotations are quaternions in (x, y, z, w) order; Euler angles are stored
    in radians.
    """

    component_type = ComponentType.TRANSFORM

    def __init__(
        self,
        owner: GameObject | None = None,
        position=None,
        scale=None,
        rotation=None,
    ) -> None:
        super().__init__(owner)
        self.world_position = np.zeros(3)
        self.world_rotation = quat_identity()
        self.world_rotation_euler = np.zeros(3)
        self.world_scale = np.ones(3)
        self.world_matrix = np.identity(4)

        self.local_position = np.zeros(3)
        self.local_rotation = quat_identity()
        self.local_rotation_euler = np.zeros(3)
        self.local_scale = np.ones(3)
        self.local_matrix = np.identity(4)

        if position is not None:
            self.world_position = _vec3(position)
        if scale is not None:
            self.world_scale = _vec3(scale)
        if rotation is not None:
            self.world_rotation = np.asarray(rotation, dtype=float).reshape(4).copy()
        self.update_local_matrix()

    def _parent_transform(self) -> ComponentTransform | None:
        owner = self.owner
        if owner is None or owner.parent is None:
            return None
        return owner.parent.transform

    def enable(self) -> None:
        self.active = True

    def disable(self) -> None:
        self.active = False

    def set_world_position(self, position) -> None:
        """Set the local position as ``position`` minus the parent's local position."""
        parent = self._parent_transform()
        offset = parent.local_position if parent is not None else np.zeros(3)
        self.set_local_position(_vec3(position) - offset)

    def set_world_rotation(self, rotation) -> None:
        """Set the local rotation as ``rotation`` combined with the parent's world rotation."""
        parent = self._parent_transform()
        parent_rotation = parent.world_rotation if parent is not None else quat_identity()
        self.set_local_rotation(quat_mul(rotation, parent_rotation))

    def set_world_scale(self, scale) -> None:
        """Set the local scale as ``scale`` minus the parent's local position, or minus one."""
        parent = self._parent_transform()
        offset = parent.local_position if parent is not None else np.ones(3)
        self.set_local_scale(_vec3(scale) - offset)

    def set_world_rotation_euler(self, rotation) -> None:
        """Set the world rotation from Euler angles in radians."""
        x, y, z = _vec3(rotation)
        self.set_world_rotation(quat_from_euler_xyz(x, y, z))

    def set_local_position(self, position) -> None:
        self.local_position = _vec3(position)
        self.update_local_matrix()
        self.recalculate_transform_hierarchy()

    def set_local_rotation(self, rotation) -> None:
        self.local_rotation = np.asarray(rotation, dtype=float).reshape(4).copy()
        self.local_rotation_euler = quat_to_euler_xyz(self.local_rotation)
        self.update_local_matrix()
        self.recalculate_transform_hierarchy()

    def set_local_scale(self, scale) -> None:
        self.local_scale = _vec3(scale)
        self.update_local_matrix()
        self.recalculate_transform_hierarchy()

    def set_local_rotation_euler(self, rotation) -> None:
        """Set the local rotation from Euler angles given in degrees."""
        radians = np.radians(_vec3(rotation))
        self.local_rotation_euler = radians
        self.local_rotation = quat_from_euler_xyz(*radians)
        self.update_local_matrix()
        self.recalculate_transform_hierarchy()

    def get_normalize_axis(self, i: int) -> np.ndarray:
        """Unit direction of world axis ``i`` (0 = X, 1 = Y, 2 = Z)."""
        if not 0 <= i < 3:
            raise IndexError(f"axis index must be 0, 1 or 2, not {i}")
        return normalized(self.world_matrix[:3, i])

    def get_forward(self) -> np.ndarray:
        """Unit direction of the world Z axis."""
        return self.get_normalize_axis(2)

    def update_local_matrix(self) -> None:
        """Rebuild the local matrix from local position, rotation and scale."""
        self.local_matrix = matrix_from_trs(
            self.local_position, self.local_rotation, self.local_scale
        )

    def update_local_from_matrix(self) -> None:
        """Read local position, rotation and scale back out of the local matrix."""
        position, rotation, scale = decompose_matrix(self.local_matrix)
        self.local_position = position
        self.local_rotation = rotation
        self.local_scale = scale
        self.local_rotation_euler = quat_to_euler_xyz(rotation)

    def recalculate_transform_hierarchy(self) -> None:
        """Recompute world matrices of this transform and every descendant."""
        pending: deque[ComponentTransform] = deque([self])
        while pending:
            current = pending.popleft()
            owner = current.owner
            if owner is not None:
                pending.extend(
                    child.transform for child in owner.children if child.transform is not None
                )
            parent = current._parent_transform()
            parent_world = parent.world_matrix if parent is not None else np.identity(4)
            current.world_matrix = parent_world @ current.local_matrix
            (
                current.world_position,
                current.world_rotation,
                current.world_scale,
            ) = decompose_matrix(current.world_matrix)
            current.world_rotation_euler = quat_to_euler_xyz(current.world_rotation)


class ComponentMesh(Component):
    """A mesh attached to a game object, with its bounding boxes."""

    component_type = ComponentType.MESH

    def __init__(self, owner: GameObject | None = None) -> None:
        super().__init__(owner)
        self.mesh: Mesh | None = None
        self.path = ""
        self.scale_factor = 1.0
        self.aabb = AABB.negative_infinity()
        self.global_aabb = AABB.negative_infinity()
        self.obb: OBB | None = None

    def set_mesh(self, mesh: Mesh) -> None:
        """Attach ``mesh`` and rebuild its local bounding box."""
        self.mesh = mesh
        self.init_bounding_boxes()

    def set_path(self, path: str) -> None:
        self.path = path

    def init_bounding_boxes(self) -> None:
        """Reset the world boxes and fit the local box to the mesh vertices."""
        self.obb = None
        self.global_aabb = AABB.negative_infinity()
        if self.mesh is not None and self.mesh.vertices:
            self.aabb = AABB.from_points([v.position for v in self.mesh.vertices])

    def update_bounding_boxes(self) -> None:
        """Place the local box in the world with the owner's world matrix."""
        if self.mesh is None:
            logger.error("Mesh component has no mesh to bound")
            return
        transform = self.owner.transform if self.owner is not None else None
        matrix = transform.world_matrix if transform is not None else np.identity(4)
        self.obb = OBB.from_aabb(self.aabb, matrix)
        self.global_aabb = AABB.negative_infinity()
        self.global_aabb.enclose(self.obb.corner_points())


class ComponentTexture(Component):
    """A texture attached to a game object."""

    component_type = ComponentType.TEXTURE

    def __init__(self, owner: GameObject | None = None, texture: Any = None) -> None:
        super().__init__(owner)
        self.texture = texture


class ComponentCamera(Component):
    """A camera that follows its owner's world transform."""

    component_type = ComponentType.CAMERA

    def __init__(
        self, owner: GameObject | None = None, manager: CameraManager | None = None
    ) -> None:
        super().__init__(owner)
        self.camera: Camera3D = manager.create_camera() if manager is not None else Camera3D()

    def update(self) -> None:
        """Move the camera to the owner's world position and rotation."""
        if self.owner is not None:
            self.owner.update_camera(self.camera)

    def serialize(self, doc: JsonDoc) -> None:
        doc.set_string("Camera", "Camera")

    @property
    def vertical_fov_degrees(self) -> float:
        """The camera's vertical field of view in degrees."""
        return math.degrees(self.camera.vertical_fov)