import logging
from typing import List, Tuple
from grasp_models.cuboid import Cuboid, GraspAxis
from grasp_models.grippers import GripperGeometry
from grasp_models.poses import IDEAL_GRASP_POSE
from grasplib.bounding_box import bounding_box_from_mesh
from grasplib.cuboid_grasps import generate_cuboid_axis_grasps
from grasplib.errors import InvalidGeometryError
from grasplib.grasp_candidate import GraspCandidate, grasp_id_counter

logger = logging.getLogger(__name__)


def attempted_axes(cuboid: Cuboid, max_grasp_size) -> List[GraspAxis]:
    """ axes that aren't too wide to grip, x first """
    return [axis for axis in GraspAxis if cuboid.extent_along(axis) <= max_grasp_size]


def generate_grasps(cuboid: Cuboid, max_grasp_size, geometry: GripperGeometry,
                    id_counter=None, ideal_pose=IDEAL_GRASP_POSE) -> List[GraspCandidate]:
    if not max_grasp_size > 0:
        raise InvalidGeometryError(
            f"max_grasp_size must be positive, got {max_grasp_size}")
    cuboid.validate()
    geometry.validate()

    if id_counter is None:
        id_counter = grasp_id_counter()

    grasps = []
    for axis in attempted_axes(cuboid, max_grasp_size):
        logger.debug(f"Generating grasps around {axis.name.lower()}-axis of cuboid")
        grasps.extend(generate_cuboid_axis_grasps(
            cuboid, axis, geometry, id_counter, ideal_pose))

    if not grasps:
        logger.warning("Generated 0 grasps")
    else:
        logger.info(f"Generated {len(grasps)} grasps")
    return grasps


def generate_grasps_from_mesh(mesh, max_grasp_size, geometry: GripperGeometry,
                              id_counter=None, ideal_pose=IDEAL_GRASP_POSE) -> Tuple[Cuboid, List[GraspCandidate]]:
    """ grasps around the oriented bounding box of the mesh """
    cuboid = bounding_box_from_mesh(mesh)
    logger.info(
        f"Mesh bounding box: {cuboid.depth:.4f} x {cuboid.width:.4f} x {cuboid.height:.4f}")
    return cuboid, generate_grasps(cuboid, max_grasp_size, geometry, id_counter, ideal_pose)
