import json
import time
from dataclasses import dataclass, field
import numpy as np
from scipy.spatial.transform import Rotation as R
from grasp_models.grippers import GripperGeometry
from grasplib.geometry import homogeneous_mat_from_RT
from grasplib.grasp_candidate import GraspCandidate


@dataclass(frozen=True)
class GraspMessageConfig:
    base_link: str = "world"
    ee_parent_link: str = "ee_link"
    pre_grasp_posture: str = "open"
    grasp_posture: str = "closed"
    # grasp frame -> end effector frame of the robot
    grasp_pose_to_eef_pose: np.ndarray = field(
        default_factory=lambda: np.eye(4), compare=False)


def pose_to_dict(pose):
    return {
        "position": pose[:3, 3].tolist(),
        "orientation": R.from_matrix(pose[:3, :3]).as_quat().tolist(),  # x, y, z, w
    }


def pose_from_dict(pose):
    return homogeneous_mat_from_RT(np.array(pose["orientation"]), np.array(pose["position"]))


def _gripper_translation(frame_id, direction, distance, stamp):
    return {
        "direction": {
            "header": {"frame_id": frame_id, "stamp": stamp},
            "vector": list(direction),
        },
        "desired_distance": distance,
        "min_distance": distance,
    }


def grasp_to_message(candidate: GraspCandidate, geometry: GripperGeometry,
                     config: GraspMessageConfig, stamp=None):
    """ JSON ready grasp for a downstream pick planner.

    Approach and retreat run along the z axis of the end effector parent link
    (z towards the object), over the full palm to fingertip distance.
    """
    if stamp is None:
        stamp = time.time()

    eef_pose = candidate.pose @ config.grasp_pose_to_eef_pose
    return {
        "id": candidate.id,
        "grasp_quality": candidate.quality,
        "grasp_axis": candidate.grasp_axis.name,
        "grasp_pose": {
            "header": {"frame_id": config.base_link, "stamp": stamp},
            "pose": pose_to_dict(eef_pose),
        },
        "pre_grasp_approach": _gripper_translation(
            config.ee_parent_link, (0., 0., 1.), geometry.finger_to_palm_depth, stamp),
        "post_grasp_retreat": _gripper_translation(
            config.ee_parent_link, (0., 0., -1.), geometry.finger_to_palm_depth, stamp),
        "pre_grasp_posture": config.pre_grasp_posture,
        "grasp_posture": config.grasp_posture,
    }


def pre_grasp_direction(message, ee_parent_link):
    """ offset from the grasp pose back to the pre-grasp pose """
    approach = message["pre_grasp_approach"]
    direction = -np.array(approach["direction"]["vector"], dtype=float) * approach["desired_distance"]

    # approach given in the end effector frame: express it in the grasp frame's parent
    if approach["direction"]["header"]["frame_id"] == ee_parent_link:
        grasp_pose = pose_from_dict(message["grasp_pose"]["pose"])
        direction = grasp_pose[:3, :3] @ direction
    return direction


def pre_grasp_pose(message, ee_parent_link):
    grasp_pose = pose_from_dict(message["grasp_pose"]["pose"])
    grasp_pose[:3, 3] += pre_grasp_direction(message, ee_parent_link)
    return {
        "header": dict(message["grasp_pose"]["header"]),
        "pose": pose_to_dict(grasp_pose),
    }


def write_grasps(path, data):
    """ data: list of grasp messages, or a dict holding them with their cuboid """
    with open(path, "w") as F:
        json.dump(data, F, indent="\t")


def read_grasps(path):
    with open(path) as F:
        return json.load(F)
