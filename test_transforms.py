#!/usr/bin/env python3
"""
Camera matrix math tests
Pose inversion, intrinsic matrix, rotator/quaternion conversion
"""

import numpy as np
import pytest

from core.errors import DegenerateTransform
from core.scene_data import CameraIntrinsics, Pose, Rotator
from core.transforms import (
    decompose_matrix,
    pose_to_matrix,
    quaternion_to_rotator,
    rotation_matrix_to_rotator,
    rotator_to_matrix,
    to_intrinsic_matrix,
    to_world_to_camera_matrix,
)


def test_identity_pose_gives_identity_matrix():
    matrix = to_world_to_camera_matrix(Pose())
    assert np.allclose(matrix, np.identity(4))


def test_non_uniform_scale_is_inverted():
    pose = Pose(location=(10.0, 20.0, 30.0), scale=(2.0, 4.0, 0.5))
    matrix = to_world_to_camera_matrix(pose)

    assert np.allclose(matrix[:3, :3], np.diag([0.5, 0.25, 2.0]))
    assert np.allclose(matrix[3, :3], [-5.0, -5.0, -60.0])
    assert np.allclose(matrix[:3, 3], [0.0, 0.0, 0.0])
    assert matrix[3, 3] == 1.0


def test_world_to_camera_inverts_forward_transform():
    pose = Pose(location=(120.0, -45.5, 300.0),
                rotation=Rotator(pitch=-15.0, yaw=45.0, roll=10.0),
                scale=(1.0, 2.0, 3.0))

    product = pose_to_matrix(pose) @ to_world_to_camera_matrix(pose)
    assert np.allclose(product, np.identity(4))


def test_world_to_camera_maps_camera_location_to_origin():
    pose = Pose(location=(5.0, 6.0, 7.0), rotation=Rotator(pitch=30.0, yaw=-60.0, roll=5.0))
    point = np.array([5.0, 6.0, 7.0, 1.0])

    assert np.allclose(point @ to_world_to_camera_matrix(pose), [0.0, 0.0, 0.0, 1.0])


@pytest.mark.parametrize("scale", [(0.0, 1.0, 1.0), (1.0, 0.0, 1.0), (1.0, 1.0, 0.0)])
def test_zero_scale_axis_raises(scale):
    with pytest.raises(DegenerateTransform):
        to_world_to_camera_matrix(Pose(scale=scale))


def test_no_negative_zeros_in_identity_inverse():
    matrix = to_world_to_camera_matrix(Pose())
    assert "-0.000000" not in " ".join(f"{v:.6f}" for v in matrix.flatten())


def test_intrinsic_matrix_layout():
    intrinsics = CameraIntrinsics(1000.0, 1100.0, 960.0, 540.0, 1920, 1080)
    k = to_intrinsic_matrix(intrinsics)

    assert k.shape == (3, 3)
    assert k[0, 0] == 1000.0
    assert k[1, 1] == 1100.0
    assert k[0, 2] == 960.0
    assert k[1, 2] == 540.0
    assert k[0, 1] == 0.0
    assert k[1, 0] == 0.0
    assert list(k[2]) == [0.0, 0.0, 1.0]


def test_rotator_round_trip():
    rotator = Rotator(pitch=30.0, yaw=45.0, roll=10.0)
    result = rotation_matrix_to_rotator(rotator_to_matrix(rotator))

    assert result.pitch == pytest.approx(30.0)
    assert result.yaw == pytest.approx(45.0)
    assert result.roll == pytest.approx(10.0)


def test_rotation_matrix_is_orthonormal():
    rot = rotator_to_matrix(Rotator(pitch=12.0, yaw=-73.0, roll=151.0))
    assert np.allclose(rot @ rot.T, np.identity(3))


def test_quaternion_identity():
    rotator = quaternion_to_rotator(0.0, 0.0, 0.0, 1.0)
    assert rotator.pitch == pytest.approx(0.0)
    assert rotator.yaw == pytest.approx(0.0)
    assert rotator.roll == pytest.approx(0.0)


def test_quaternion_yaw_quarter_turn():
    half = np.radians(90.0) / 2
    rotator = quaternion_to_rotator(0.0, 0.0, np.sin(half), np.cos(half))

    assert rotator.pitch == pytest.approx(0.0, abs=1e-9)
    assert rotator.yaw == pytest.approx(90.0)
    assert rotator.roll == pytest.approx(0.0, abs=1e-9)


def test_decompose_matrix_recovers_pose():
    pose = Pose(location=(1.0, 2.0, 3.0), rotation=Rotator(pitch=20.0, yaw=-35.0, roll=40.0),
                scale=(2.0, 2.0, 2.0))
    result = decompose_matrix(pose_to_matrix(pose))

    assert np.allclose(result.location, pose.location)
    assert np.allclose(result.scale, pose.scale)
    assert result.rotation.pitch == pytest.approx(20.0)
    assert result.rotation.yaw == pytest.approx(-35.0)
    assert result.rotation.roll == pytest.approx(40.0)
