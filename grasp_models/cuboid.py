from dataclasses import dataclass, field
from enum import Enum
import numpy as np
from grasplib.errors import InvalidGeometryError


class GraspAxis(Enum):
    """ cuboid axis the gripper closes across """
    X = 0
    Y = 1
    Z = 2


@dataclass(frozen=True, eq=False)
class Cuboid:
    pose: np.ndarray    # [4x4] matrix of the box center
    depth: float        # [m] extent along local x
    width: float        # [m] extent along local y
    height: float       # [m] extent along local z

    def __post_init__(self):
        pose = np.array(self.pose, dtype=float)
        pose.setflags(write=False)
        object.__setattr__(self, 'pose', pose)

    @property
    def extents(self):
        return np.array([self.depth, self.width, self.height])

    @property
    def center(self):
        return self.pose[:3, 3]

    def extent_along(self, axis: GraspAxis) -> float:
        return float(self.extents[axis.value])

    def validate(self):
        pose = np.asarray(self.pose)
        if pose.shape != (4, 4) or not np.all(np.isfinite(pose)):
            raise InvalidGeometryError(
                f"Cuboid pose must be a finite 4x4 matrix, got shape {pose.shape}")
        for name, value in zip(("depth", "width", "height"), self.extents):
            if not value > 0:
                raise InvalidGeometryError(
                    f"Cuboid {name} must be positive, got {value}")
        return self


@dataclass(frozen=True, eq=False)
class Mesh:
    vertices: np.ndarray                    # [n,3] vertex positions
    triangles: np.ndarray = field(          # [m,3] vertex indices
        default_factory=lambda: np.zeros((0, 3), dtype=int))

    def __post_init__(self):
        vertices = np.array(self.vertices, dtype=float).reshape((-1, 3))
        vertices.setflags(write=False)
        object.__setattr__(self, 'vertices', vertices)
        triangles = np.array(self.triangles, dtype=int).reshape((-1, 3))
        triangles.setflags(write=False)
        object.__setattr__(self, 'triangles', triangles)

    def __len__(self):
        return len(self.vertices)
