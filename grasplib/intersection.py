import math
import numpy as np
from grasplib.geometry import UNIT_Z, invert_homogeneous, transform_point


def plane_intersection(t, u1, v1, u2, v2, a, b):
    """ True if the segment point at parameter t lies on the segment (0 <= t <= 1)
    and inside the a x b rectangle centered at the origin of the plane.
    (u1, v1), (u2, v2) are the in-plane coordinates of the segment end points """
    # the plane must cross through the line segment
    if not 0.0 <= t <= 1.0:
        return False

    u = u1 + t * (u2 - u1)
    v = v1 + t * (v2 - v1)
    return -a / 2.0 <= u <= a / 2.0 and -b / 2.0 <= v <= b / 2.0


def _face_parameter(offset, start, end):
    """ segment parameter where coordinate == offset, None if parallel """
    direction = end - start
    if direction == 0.0:
        return None
    t = (offset - start) / direction
    return t if math.isfinite(t) else None


def segment_intersects_cuboid(point_a, point_b, depth, width, height):
    """ segment given in cuboid coordinates (cuboid centered at the origin) """
    half = np.array([depth, width, height]) / 2.0
    sizes = (depth, width, height)
    a = [float(x) for x in point_a]
    b = [float(x) for x in point_b]

    # z faces (XY planes), y faces (XZ planes), x faces (YZ planes)
    for normal, (i, j) in ((2, (0, 1)), (1, (0, 2)), (0, (1, 2))):
        for offset in (half[normal], -half[normal]):
            t = _face_parameter(offset, a[normal], b[normal])
            if t is None:
                continue
            if plane_intersection(t, a[i], a[j], b[i], b[j], sizes[i], sizes[j]):
                return True
    return False


def reach_in_segment(grasp_pose, finger_to_palm_depth):
    """ world end points of the segment from the grasp point to the fingertips """
    point_a = grasp_pose[:3, 3].copy()
    point_b = point_a + grasp_pose[:3, :3] @ UNIT_Z * finger_to_palm_depth
    return point_a, point_b


def grasp_intersects_cuboid(cuboid, grasp_pose, finger_to_palm_depth):
    """ collision predicate: does the reach-in segment of the grasp pass through the cuboid """
    point_a, point_b = reach_in_segment(grasp_pose, finger_to_palm_depth)

    # T_cuboid-world * p_world = p_cuboid
    world_to_cuboid = invert_homogeneous(cuboid.pose)
    point_a = transform_point(world_to_cuboid, point_a)
    point_b = transform_point(world_to_cuboid, point_b)

    return segment_intersects_cuboid(
        point_a, point_b, cuboid.depth, cuboid.width, cuboid.height)
