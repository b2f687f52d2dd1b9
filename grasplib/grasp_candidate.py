from dataclasses import dataclass
import itertools
import numpy as np
from grasp_models.cuboid import GraspAxis


@dataclass(frozen=True, eq=False)
class GraspCandidate:
    id: str
    pose: np.ndarray        # [4x4] gripper frame at the moment of grasp, world frame
    quality: float          # [0, 1]
    grasp_axis: GraspAxis   # cuboid axis the gripper closes across

    def __post_init__(self):
        pose = np.array(self.pose, dtype=float)
        pose.setflags(write=False)
        object.__setattr__(self, 'pose', pose)


def grasp_id_counter(start=0):
    """ fresh id source, one per generation request """
    return itertools.count(start)


def next_grasp_id(counter):
    return f"Grasp{next(counter)}"
