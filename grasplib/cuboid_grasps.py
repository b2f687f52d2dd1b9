"""
Geometric grasp enumeration around one axis of a cuboid.

Grasp pose convention: the origin is the palm point, z points from the palm
towards the object (approach direction), y is the closing direction of the
fingers and x completes the right-handed frame. For a grasp around an axis,
y is aligned with that cuboid axis and the approach directions lie in the
plane of the two other axes (called a and b below).
"""
import logging
import math
import warnings
from enum import Enum
from typing import List, NamedTuple
import numpy as np
from scipy.spatial.transform import Rotation as R
from grasp_models.cuboid import Cuboid, GraspAxis
from grasp_models.grippers import GripperGeometry
from grasp_models.poses import IDEAL_GRASP_POSE
from grasplib.errors import AngularSweepBoundExceeded
from grasplib.geometry import UNIT_X, UNIT_Y, UNIT_Z, pose_axis, rotate_local, translate
from grasplib.grasp_candidate import GraspCandidate, grasp_id_counter, next_grasp_id
from grasplib.intersection import grasp_intersects_cuboid
from grasplib.scoring import score_grasp

logger = logging.getLogger(__name__)

# back the palm off of the object slightly
CORNER_OFFSET = 0.001
# number of poses tried along a face when the fingers are wider than the face
FACE_FALLBACK_GRASPS = 3


class AxisAlignment(NamedTuple):
    """ intrinsic x-y-z rotation taking the cuboid frame to the base grasp frame """
    roll: float
    pitch: float
    yaw: float

    def as_matrix(self):
        rot = np.eye(4)
        rot[:3, :3] = R.from_euler(
            'XYZ', [self.roll, self.pitch, self.yaw]).as_matrix()
        return rot


AXIS_ALIGNMENTS = {
    GraspAxis.X: AxisAlignment(-np.pi / 2.0, 0.0, -np.pi / 2.0),
    GraspAxis.Y: AxisAlignment(0.0, np.pi / 2.0, np.pi),
    GraspAxis.Z: AxisAlignment(np.pi / 2.0, np.pi / 2.0, 0.0),
}


class FaceDirections(NamedTuple):
    length_a: float
    length_b: float
    a_dir: np.ndarray   # world direction, base approach direction
    b_dir: np.ndarray   # world direction


class SweepStop(Enum):
    COLLISION = "collision"
    ITERATION_CAP = "iteration_cap"


class AngleSweep(NamedTuple):
    poses: List[np.ndarray]
    stop: SweepStop


def face_directions(cuboid: Cuboid, axis: GraspAxis) -> FaceDirections:
    if axis == GraspAxis.X:
        lengths, dirs = (cuboid.width, cuboid.height), (UNIT_Y, UNIT_Z)
    elif axis == GraspAxis.Y:
        lengths, dirs = (cuboid.depth, cuboid.height), (UNIT_X, UNIT_Z)
    elif axis == GraspAxis.Z:
        lengths, dirs = (cuboid.depth, cuboid.width), (UNIT_X, UNIT_Y)
    else:
        raise ValueError(f"Unknown grasp axis: {axis}")

    a_dir, b_dir = [pose_axis(cuboid.pose, d) for d in dirs]
    return FaceDirections(lengths[0], lengths[1],
                          a_dir / np.linalg.norm(a_dir), b_dir / np.linalg.norm(b_dir))


def num_radial_grasps(angle_resolution):
    return max(math.ceil((np.pi / 2.0) / angle_resolution), 1)


def face_grasp_layout(extent, gripper_width, resolution):
    """ (count, spacing) of a row of grasps covering the usable extent of a face exactly """
    usable = extent - gripper_width
    count = math.floor(usable / resolution) + 1
    # fingers wider than the face: try top/center/bottom aligned
    if count <= 0:
        count = FACE_FALLBACK_GRASPS
    spacing = 0.0 if count == 1 else usable / (count - 1)
    return count, spacing


def num_depth_grasps(finger_depth, depth_resolution):
    return max(math.ceil(finger_depth / depth_resolution), 1)


def max_sweep_iterations(angle_resolution):
    return math.ceil(np.pi / angle_resolution) + 1


def aligned_grasp_pose(cuboid_pose, alignment: AxisAlignment, rotation, translation):
    """ base grasp frame, rotated about its y axis, then shifted in the world frame """
    grasp_pose = cuboid_pose @ alignment.as_matrix()
    grasp_pose = rotate_local(grasp_pose, UNIT_Y, rotation)
    return translate(grasp_pose, translation)


def corner_grasp_poses(cuboid_pose, alignment, translation, corner_rotation, num_grasps):
    """ fan of grasps rotating through the 90 degrees around one edge """
    delta_angle = (np.pi / 2.0) / (num_grasps + 1)
    grasp_pose = aligned_grasp_pose(
        cuboid_pose, alignment, corner_rotation, translation)

    poses = []
    for _ in range(num_grasps):
        grasp_pose = rotate_local(grasp_pose, UNIT_Y, delta_angle)
        poses.append(grasp_pose)
    return poses


def face_grasp_poses(cuboid_pose, alignment, start, delta, rotation, num_grasps):
    grasp_pose = aligned_grasp_pose(cuboid_pose, alignment, rotation, start)
    return [translate(grasp_pose, i * delta) for i in range(num_grasps)]


def depth_grasp_poses(poses, finger_depth, depth_resolution):
    """ each pose backed off along its approach direction in equal steps """
    num_grasps = num_depth_grasps(finger_depth, depth_resolution)
    delta_f = finger_depth / num_grasps

    depth_poses = []
    for pose in poses:
        grasp_dir = pose_axis(pose, UNIT_Z)
        for j in range(1, num_grasps + 1):
            depth_poses.append(translate(pose, -j * delta_f * grasp_dir))
    return depth_poses


def sweep_grasp_angle(cuboid, base_pose, angle_step, finger_to_palm_depth, max_iterations) -> AngleSweep:
    """ rotate about the local y axis in angle_step increments while the
    reach-in segment stays clear of the cuboid """
    poses = []
    grasp_pose = rotate_local(base_pose, UNIT_Y, angle_step)
    for _ in range(max_iterations):
        if grasp_intersects_cuboid(cuboid, grasp_pose, finger_to_palm_depth):
            return AngleSweep(poses, SweepStop.COLLISION)
        poses.append(grasp_pose)
        grasp_pose = rotate_local(grasp_pose, UNIT_Y, angle_step)

    warnings.warn(
        f"Exceeded {max_iterations} iterations while creating variable angle grasps",
        AngularSweepBoundExceeded, stacklevel=2)
    return AngleSweep(poses, SweepStop.ITERATION_CAP)


def bidirectional_grasp_poses(poses):
    """ poses followed by the same poses flipped by 180 degrees about z """
    flipped = [rotate_local(pose, UNIT_Z, np.pi) for pose in poses]
    return list(poses) + flipped


def generate_cuboid_axis_poses(cuboid: Cuboid, axis: GraspAxis, geometry: GripperGeometry) -> List[np.ndarray]:
    cuboid.validate()
    geometry.validate()

    alignment = AXIS_ALIGNMENTS[axis]
    length_a, length_b, a_dir, b_dir = face_directions(cuboid, axis)
    gripper_width = geometry.gripper_width

    # corners, grasps are centroid aligned
    logger.debug(f"{axis.name}: adding corner grasps...")
    corner_a = 0.5 * (length_a + CORNER_OFFSET) * a_dir
    corner_b = 0.5 * (length_b + CORNER_OFFSET) * b_dir
    num_radial = num_radial_grasps(geometry.angle_resolution)

    grasp_poses = []
    for translation, corner_rotation in (
            (-corner_a - corner_b, 0.0),
            (-corner_a + corner_b, -np.pi / 2.0),
            (corner_a + corner_b, np.pi),
            (corner_a - corner_b, np.pi / 2.0)):
        grasp_poses.extend(corner_grasp_poses(
            cuboid.pose, alignment, translation, corner_rotation, num_radial))
    num_corner_grasps = len(grasp_poses)

    # faces, grasps are axis aligned
    logger.debug(f"{axis.name}: adding face grasps...")
    num_a, delta_a = face_grasp_layout(
        length_a, gripper_width, geometry.grasp_resolution)
    num_b, delta_b = face_grasp_layout(
        length_b, gripper_width, geometry.grasp_resolution)
    logger.debug(f"{axis.name}: face grasps a: {num_a} x {delta_a:.4f}, b: {num_b} x {delta_b:.4f}")

    usable_a = 0.5 * (length_a - gripper_width) * a_dir
    usable_b = 0.5 * (length_b - gripper_width) * b_dir
    for start, delta, rotation, num_grasps in (
            (-corner_a - usable_b, delta_b * b_dir, 0.0, num_b),            # -a face
            (usable_a + corner_b, -delta_a * a_dir, -np.pi / 2.0, num_a),   # +b face
            (corner_a + usable_b, -delta_b * b_dir, np.pi, num_b),          # +a face
            (-usable_a - corner_b, delta_a * a_dir, np.pi / 2.0, num_a)):   # -b face
        grasp_poses.extend(face_grasp_poses(
            cuboid.pose, alignment, start, delta, rotation, num_grasps))

    logger.debug(f"{axis.name}: adding depth grasps...")
    grasp_poses.extend(depth_grasp_poses(
        grasp_poses, geometry.finger_depth, geometry.grasp_depth_resolution))

    # corner grasps at zero depth don't need variable angles
    logger.debug(f"{axis.name}: adding variable angle grasps...")
    max_iterations = max_sweep_iterations(geometry.angle_resolution)
    angle_poses = []
    for base_pose in grasp_poses[num_corner_grasps:]:
        for step in (geometry.angle_resolution, -geometry.angle_resolution):
            sweep = sweep_grasp_angle(
                cuboid, base_pose, step, geometry.finger_to_palm_depth, max_iterations)
            angle_poses.extend(sweep.poses)
    grasp_poses.extend(angle_poses)

    logger.debug(f"{axis.name}: adding bi-directional grasps...")
    grasp_poses = bidirectional_grasp_poses(grasp_poses)

    logger.debug(f"{axis.name}: created {len(grasp_poses)} grasp poses")
    return grasp_poses


def generate_cuboid_axis_grasps(cuboid: Cuboid, axis: GraspAxis, geometry: GripperGeometry,
                                id_counter=None, ideal_pose=IDEAL_GRASP_POSE) -> List[GraspCandidate]:
    """ scored grasps around one cuboid axis, in generation order """
    if id_counter is None:
        id_counter = grasp_id_counter()

    return [
        GraspCandidate(next_grasp_id(id_counter), pose,
                       score_grasp(pose, geometry, cuboid.pose, ideal_pose), axis)
        for pose in generate_cuboid_axis_poses(cuboid, axis, geometry)
    ]
