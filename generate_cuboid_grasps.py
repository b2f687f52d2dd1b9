import logging
import time
import numpy as np
from tqdm import tqdm
from scipy.spatial.transform import Rotation as R
from grasp_models.cuboid import Cuboid
from grasp_models.grippers import GripperGeometry, RG2_GEOMETRY
from grasplib.geometry import homogeneous_mat_from_RT
from grasplib.grasp_export import GraspMessageConfig, grasp_to_message, write_grasps
from grasplib.grasp_generator import generate_grasps, generate_grasps_from_mesh
from grasplib.logging_config import setup_logging
import begin

logger = logging.getLogger("grasplib.generate")


def main(depth, width, height, position, orientation, max_grasp_size, gripper_config, mesh, output,
         base_link="world", ee_parent_link="ee_link"):
    t = time.perf_counter()
    geometry = RG2_GEOMETRY if gripper_config is None else GripperGeometry.from_json(
        gripper_config)

    if mesh is not None:
        from grasplib.utils import load_mesh
        cuboid, grasps = generate_grasps_from_mesh(
            load_mesh(mesh), max_grasp_size, geometry)
    else:
        pose = homogeneous_mat_from_RT(
            R.from_euler('xyz', orientation), np.array(position))
        cuboid = Cuboid(pose, depth, width, height)
        grasps = generate_grasps(cuboid, max_grasp_size, geometry)

    logger.info(
        f"Found {len(grasps)} grasp poses ({time.perf_counter()-t:.2f} sec)")

    config = GraspMessageConfig(base_link=base_link, ee_parent_link=ee_parent_link)
    stamp = time.time()
    messages = [grasp_to_message(grasp, geometry, config, stamp)
                for grasp in tqdm(grasps, disable=len(grasps) < 1000)]
    write_grasps(output, {
        "cuboid": {"pose": cuboid.pose.tolist(), "depth": cuboid.depth,
                   "width": cuboid.width, "height": cuboid.height},
        "gripper": geometry.to_dict(),
        "grasps": messages,
    })
    logger.info(f"Saved grasps to {output}")


@begin.start
@begin.convert(_automatic=True)
def run(depth=0.04, width=0.06, height=0.08, x=0.0, y=0.0, z=0.0, roll=0.0, pitch=0.0, yaw=0.0,
        max_grasp_size=0.1, gripper_config='', mesh='', output='grasps.json', verbose=False):
    "Generate scored grasp candidates around a cuboid (or the bounding box of a mesh)"
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    main(depth, width, height, [x, y, z], [roll, pitch, yaw], max_grasp_size,
         gripper_config or None, mesh or None, output)
