import numpy as np
import pytest
from scipy.spatial.transform import Rotation as R
from grasp_models.cuboid import Cuboid
from grasp_models.grippers import GripperGeometry
from grasplib.geometry import homogeneous_mat_from_RT


@pytest.fixture
def geometry():
    # 15 degree sweeps, 1 cm face and depth sampling
    return GripperGeometry(
        gripper_width=0.03,
        finger_to_palm_depth=0.05,
        grasp_min_depth=0.02,
        angle_resolution=0.26,
        grasp_resolution=0.01,
        grasp_depth_resolution=0.01,
    )


@pytest.fixture
def cuboid():
    return Cuboid(np.eye(4), 0.04, 0.06, 0.08)


@pytest.fixture
def rotated_cuboid():
    pose = homogeneous_mat_from_RT(
        R.from_euler('xyz', [0.3, -0.2, 1.1]), np.array([0.5, -0.2, 0.1]))
    return Cuboid(pose, 0.04, 0.06, 0.08)


def box_corners(depth, width, height, pose=np.eye(4)):
    signs = np.array([[sx, sy, sz] for sx in (-1, 1) for sy in (-1, 1) for sz in (-1, 1)])
    local = signs * np.array([depth, width, height]) / 2.0
    return local @ pose[:3, :3].T + pose[:3, 3]
