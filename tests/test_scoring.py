import numpy as np
import pytest
from scipy.spatial.transform import Rotation as R
from grasp_models.poses import IDEAL_GRASP_POSE
from grasplib.geometry import homogeneous_mat_from_RT, rotate_local, UNIT_X
from grasplib.scoring import grasp_score_components, score_grasp


def test_ideal_pose_is_fixed_and_read_only():
    np.testing.assert_allclose(IDEAL_GRASP_POSE[:3, 2], [1., 0., 0.], atol=1e-12)
    np.testing.assert_allclose(IDEAL_GRASP_POSE[:3, 1], [0., 0., 1.], atol=1e-12)
    with pytest.raises(ValueError):
        IDEAL_GRASP_POSE[0, 3] = 1.0


def test_ideal_pose_at_object_scores_one(geometry):
    assert score_grasp(np.array(IDEAL_GRASP_POSE), geometry, np.eye(4)) == pytest.approx(1.0)


def test_palm_at_finger_length_scores_zero_distance(geometry):
    pose = np.array(IDEAL_GRASP_POSE)
    pose[:3, 3] = [-geometry.finger_depth, 0., 0.]

    approach, roll, distance = grasp_score_components(pose, geometry, np.eye(4))
    assert (approach, roll) == pytest.approx((1.0, 1.0))
    assert distance == pytest.approx(0.0)
    assert score_grasp(pose, geometry, np.eye(4)) == pytest.approx(2.0 / 3.0)


def test_distance_beyond_finger_length_only_zeroes_its_component(geometry):
    pose = np.array(IDEAL_GRASP_POSE)
    pose[:3, 3] = [0., 1., 0.]
    assert grasp_score_components(pose, geometry, np.eye(4))[2] == 0.0
    assert score_grasp(pose, geometry, np.eye(4)) == pytest.approx(2.0 / 3.0)


def test_distance_is_measured_to_object_pose(geometry):
    object_pose = homogeneous_mat_from_RT(np.eye(3), [0.3, 0.2, 0.1])
    pose = np.array(IDEAL_GRASP_POSE)
    pose[:3, 3] = [0.3, 0.2, 0.1 + geometry.finger_depth / 2.0]
    assert grasp_score_components(pose, geometry, object_pose)[2] == pytest.approx(0.5)


def test_opposite_approach_scores_zero(geometry):
    flipped = rotate_local(np.array(IDEAL_GRASP_POSE), UNIT_X, np.pi)
    approach, roll, _ = grasp_score_components(flipped, geometry, np.eye(4))
    assert approach == pytest.approx(0.0, abs=1e-7)
    assert roll == pytest.approx(0.0, abs=1e-7)


def test_quarter_turn_scores_half(geometry):
    pose = homogeneous_mat_from_RT(R.from_euler('x', 90, degrees=True), np.zeros(3))
    approach, _, _ = grasp_score_components(pose, geometry, np.eye(4), ideal_pose=np.eye(4))
    assert approach == pytest.approx(0.5)


def test_custom_ideal_pose_and_weights(geometry):
    pose = np.eye(4)
    assert score_grasp(pose, geometry, np.eye(4), ideal_pose=np.eye(4)) == pytest.approx(1.0)

    far = np.eye(4)
    far[:3, 3] = [1., 0., 0.]
    # only the distance component counts
    assert score_grasp(far, geometry, np.eye(4), ideal_pose=np.eye(4),
                       weights=(0., 0., 1.)) == pytest.approx(0.0)
    assert score_grasp(far, geometry, np.eye(4), ideal_pose=np.eye(4),
                       weights=(1., 1., 0.)) == pytest.approx(1.0)
