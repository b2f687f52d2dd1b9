import math
import numpy as np
from grasp_models.grippers import GripperGeometry
from grasp_models.poses import IDEAL_GRASP_POSE
from grasplib.geometry import UNIT_Y, UNIT_Z, angle_between_vectors, pose_axis

SCORE_WEIGHTS = (1.0, 1.0, 1.0)


def _alignment_score(pose, ideal_pose, axis):
    # 0 = 180 degrees off, 1 = aligned
    angle = angle_between_vectors(pose_axis(pose, axis), pose_axis(ideal_pose, axis))
    return (math.pi - angle) / math.pi


def grasp_score_components(pose, geometry: GripperGeometry, object_pose, ideal_pose=IDEAL_GRASP_POSE):
    """ (approach, roll, distance) scores, each in [0, 1]

    approach: z axis of the grasp against the z axis of the ideal pose
    roll: y axes against each other
    distance: palm to object centroid against the usable finger length
        (1 = palm at the centroid, 0 = at finger length or further)
    """
    approach = _alignment_score(pose, ideal_pose, UNIT_Z)
    roll = _alignment_score(pose, ideal_pose, UNIT_Y)

    finger_length = geometry.finger_depth
    distance = float(np.linalg.norm(pose[:3, 3] - object_pose[:3, 3]))
    if distance > finger_length:
        proximity = 0.0
    else:
        proximity = (finger_length - distance) / finger_length

    return approach, roll, proximity


def score_grasp(pose, geometry: GripperGeometry, object_pose, ideal_pose=IDEAL_GRASP_POSE,
                weights=SCORE_WEIGHTS) -> float:
    scores = grasp_score_components(pose, geometry, object_pose, ideal_pose)
    return float(np.average(scores, weights=weights))
