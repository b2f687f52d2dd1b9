import numpy as np
from grasplib.geometry import homogeneous_mat_from_RT
from scipy.spatial.transform import Rotation as R

# preferred grasp: approach along world +x, fingers closing along world z
IDEAL_GRASP_POSE = homogeneous_mat_from_RT(
    R.from_euler('YZ', [np.pi / 2, np.pi / 2]), np.zeros(3))
IDEAL_GRASP_POSE.setflags(write=False)
