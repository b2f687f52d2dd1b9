from .cuboid import Cuboid, GraspAxis, Mesh
from .grippers import GripperGeometry, RG2_GEOMETRY
from .poses import IDEAL_GRASP_POSE
