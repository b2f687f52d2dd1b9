import copy
import numpy as np
import open3d as o3d
from grasp_models.cuboid import Cuboid
from grasp_models.grippers import GripperGeometry
from grasplib.grasp_export import GraspMessageConfig, pose_from_dict, read_grasps
from grasplib.geometry import invert_homogeneous
from grasplib.utils import get_cuboid_vis, get_gripper_vis
import begin


@begin.start
@begin.convert(_automatic=True)
def main(grasps='grasps.json', all=False):
    "Show exported grasps around their cuboid, [k] steps through them one by one"
    data = read_grasps(grasps)
    cuboid = Cuboid(np.array(data["cuboid"]["pose"]), data["cuboid"]["depth"],
                    data["cuboid"]["width"], data["cuboid"]["height"])
    geometry = GripperGeometry.from_dict(data["gripper"])
    messages = data["grasps"]
    # exported poses are end effector poses, undo the default offset
    eef_to_grasp = invert_homogeneous(GraspMessageConfig().grasp_pose_to_eef_pose)
    poses = [pose_from_dict(m["grasp_pose"]["pose"]) @ eef_to_grasp for m in messages]

    cuboid_vis = get_cuboid_vis(cuboid)
    origin = o3d.geometry.TriangleMesh.create_coordinate_frame(0.05)
    grasp_width = min(cuboid.depth, cuboid.width, cuboid.height)

    print("\nTotal grasp poses: ", len(messages))
    if len(messages) == 0:
        return

    def gripper_color(quality):
        return [1.0 - quality, quality, 0.0]

    if all:
        grippers = [get_gripper_vis(geometry, pose, grasp_width, thickness=0.001,
                                    color=gripper_color(m["grasp_quality"]))
                    for pose, m in zip(poses, messages)]
        o3d.visualization.draw_geometries([origin, cuboid_vis, *grippers])
        return

    print("Press [k] to show the next grasp pose")

    def show_next(vis):
        show_next.current = (show_next.current + 1) % len(poses)

        vis.remove_geometry(show_next.gripper_vis, reset_bounding_box=False)
        vis.remove_geometry(show_next.gripper_frame, reset_bounding_box=False)

        message = messages[show_next.current]
        show_next.gripper_vis = get_gripper_vis(
            geometry, poses[show_next.current], grasp_width,
            color=gripper_color(message["grasp_quality"]))
        show_next.gripper_frame = copy.copy(origin)
        show_next.gripper_frame.transform(poses[show_next.current])
        print(f"{message['id']}: quality {message['grasp_quality']:.3f}")

        vis.add_geometry(show_next.gripper_vis, reset_bounding_box=False)
        vis.add_geometry(show_next.gripper_frame, reset_bounding_box=False)

    show_next.current = 0
    show_next.gripper_vis = get_gripper_vis(geometry, poses[0], grasp_width)
    show_next.gripper_frame = copy.copy(origin)
    show_next.gripper_frame.transform(poses[0])

    o3d.visualization.draw_geometries_with_key_callbacks(
        [origin, cuboid_vis, show_next.gripper_vis, show_next.gripper_frame],
        {ord("K"): show_next})
