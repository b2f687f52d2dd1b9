import logging
import numpy as np
from grasp_models.cuboid import Cuboid, Mesh
from grasplib.errors import DegenerateMeshError
from grasplib.geometry import homogeneous_mat_from_RT, invert_homogeneous, transform_point, transform_points

logger = logging.getLogger(__name__)

HANDEDNESS_EPSILON = 1e-6


def vertex_inertia_matrix(vertices):
    """ inertia-like tensor of unit point masses, taken about the world origin
    (raw vertex coordinates, not centered on the centroid) """
    vertices = np.asarray(vertices, dtype=float)
    x, y, z = vertices[:, 0], vertices[:, 1], vertices[:, 2]

    Ixx = np.sum(y * y + z * z)
    Iyy = np.sum(x * x + z * z)
    Izz = np.sum(x * x + y * y)
    Ixy = np.sum(x * y)
    Ixz = np.sum(x * z)
    Iyz = np.sum(y * z)

    return np.array([
        [Ixx, -Ixy, -Ixz],
        [-Ixy, Iyy, -Iyz],
        [-Ixz, -Iyz, Izz],
    ])


def principal_axes(inertia):
    """ eigenvectors of the symmetric inertia matrix as columns [x, y, z].

    Order follows numpy.linalg.eigh (ascending eigenvalues). If the third axis
    does not match x cross y the third axis is flipped so the frame is right-handed.
    """
    eigenvalues, eigenvectors = np.linalg.eigh(inertia)
    logger.debug(f"eigenvalues: {eigenvalues}")

    axis_1 = eigenvectors[:, 0]
    axis_2 = eigenvectors[:, 1]
    axis_3 = eigenvectors[:, 2]

    w = np.cross(axis_1, axis_2) - axis_3
    if not np.all(np.abs(w) < HANDEDNESS_EPSILON):
        axis_3 = -axis_3
        logger.debug("eigenvectors are left-handed, flipping third axis")

    return np.stack([axis_1, axis_2, axis_3], axis=-1)


def bounding_box_from_mesh(mesh) -> Cuboid:
    """ oriented bounding box of the mesh vertices, aligned with their principal axes """
    vertices = mesh.vertices if isinstance(mesh, Mesh) else np.asarray(
        mesh, dtype=float).reshape((-1, 3))
    if len(vertices) == 0:
        raise DegenerateMeshError("Cannot compute bounding box of a mesh without vertices")
    logger.debug(f"num vertices = {len(vertices)}")

    centroid = np.mean(vertices, axis=0)
    axes = principal_axes(vertex_inertia_matrix(vertices))

    # principal axis frame -> world
    mesh_to_world = homogeneous_mat_from_RT(axes, centroid)

    local = transform_points(invert_homogeneous(mesh_to_world), vertices)
    min_bound = np.min(local, axis=0)
    max_bound = np.max(local, axis=0)
    depth, width, height = max_bound - min_bound
    logger.debug(f"bbox size = {depth:.4f}, {width:.4f}, {height:.4f}")

    # frame origin is the centroid, not necessarily the middle of the box
    box_pose = mesh_to_world.copy()
    box_pose[:3, 3] = transform_point(mesh_to_world, (min_bound + max_bound) / 2.0)

    return Cuboid(box_pose, float(depth), float(width), float(height))
