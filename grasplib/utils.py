import json
import logging
import os
import numpy as np
import open3d as o3d
from grasp_models.cuboid import Cuboid, Mesh
from grasp_models.grippers import GripperGeometry

logger = logging.getLogger(__name__)


def load_mesh(meshpath) -> Mesh:
    """ read a triangle mesh file, scaled by metadata.json next to it if present """
    mesh = o3d.io.read_triangle_mesh(meshpath)
    if not mesh.has_vertices():
        logger.warning(f"No vertices read from {meshpath}")

    try:
        with open(os.path.join(os.path.dirname(meshpath), "metadata.json")) as F:
            meta = json.load(F)
        if 'scale' in meta.keys():
            mesh.scale(scale=meta['scale'], center=[0., 0., 0.])
    except FileNotFoundError:
        logger.debug(f"Did not find metadata for {meshpath}")

    return Mesh(np.asarray(mesh.vertices), np.asarray(mesh.triangles))


def get_cuboid_vis(cuboid: Cuboid, color=(0.8, 0.8, 0.8)):
    box = o3d.geometry.TriangleMesh.create_box(
        cuboid.depth, cuboid.width, cuboid.height)
    box.translate([-cuboid.depth / 2, -cuboid.width / 2, -cuboid.height / 2])
    box.compute_vertex_normals()
    box.paint_uniform_color(list(color))
    box.transform(np.array(cuboid.pose))
    return box


def get_gripper_vis(geometry: GripperGeometry, pose, grasp_width, thickness=0.005, color=None):
    """ simple parallel gripper, palm at the pose origin, fingers along +z """
    f_h = thickness      # finger height
    f_d = thickness      # finger thickness
    finger_length = geometry.finger_to_palm_depth
    y_pos_finger = o3d.geometry.TriangleMesh.create_box(f_h, f_d, finger_length)
    y_neg_finger = o3d.geometry.TriangleMesh.create_box(f_h, f_d, finger_length)
    palm = o3d.geometry.TriangleMesh.create_box(f_h, grasp_width + 2*f_d, f_d)
    stem = o3d.geometry.TriangleMesh.create_box(f_h, f_h, 0.05)

    y_pos_finger.translate([-f_h/2, grasp_width/2, 0.])
    y_neg_finger.translate([-f_h/2, -grasp_width/2 - f_d, 0.])
    palm.translate([-f_h/2, -grasp_width/2 - f_d, -f_d])
    stem.translate([-f_h/2, -f_h/2, -0.05 - f_d])

    gripper_vis = y_neg_finger + y_pos_finger + palm + stem
    gripper_vis.compute_vertex_normals()
    if color is not None:
        gripper_vis.paint_uniform_color(list(color))
    gripper_vis.transform(np.array(pose))
    return gripper_vis
