from scipy.spatial.transform import Rotation
import numpy as np

UNIT_X = np.array([1., 0., 0.])
UNIT_Y = np.array([0., 1., 0.])
UNIT_Z = np.array([0., 0., 1.])


def invert_homogeneous(T):
    inverse = np.eye(4)
    inverse[:3, :3] = T[:3, :3].T
    inverse[:3, 3] = - T[:3, :3].T @ T[:3, 3]
    return inverse


def homogeneous_mat_from_RT(R, t):
    trans = np.eye(4)
    t = np.squeeze(t)

    if isinstance(R, Rotation):
        trans[0:3, 0:3] = R.as_matrix()
    elif np.shape(R) == (4,):
        trans[0:3, 0:3] = Rotation.from_quat(R).as_matrix()
    elif np.shape(R) == (3, 3):
        trans[0:3, 0:3] = R
    else:
        raise ValueError(f"Unsupported rotation of shape {np.shape(R)}")
    trans[:3, 3] = t

    return trans


def rotate_local(pose, axis, angle):
    """ rotate pose about one of its own axes (post-multiplication) """
    rot = np.eye(4)
    rot[:3, :3] = Rotation.from_rotvec(np.asarray(axis) * angle).as_matrix()
    return pose @ rot


def translate(pose, translation):
    """ translate pose in the world frame, orientation unchanged """
    moved = pose.copy()
    moved[:3, 3] += translation
    return moved


def transform_point(T, point):
    return T[:3, :3] @ np.asarray(point) + T[:3, 3]


def transform_points(T, points):
    """ points: [n,3] """
    return np.asarray(points) @ T[:3, :3].T + T[:3, 3]


def pose_axis(pose, axis):
    """ world direction of a local axis of the pose """
    return pose[:3, :3] @ axis


def angle_between_vectors(a, b):
    """ angle in [0, pi], arccos argument clamped against round-off """
    a_norm = np.linalg.norm(a)
    b_norm = np.linalg.norm(b)
    x = np.dot(a, b) / (a_norm * b_norm)
    return float(np.arccos(np.clip(x, -1.0, 1.0)))
