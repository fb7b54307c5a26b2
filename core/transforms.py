#!/usr/bin/env python3
"""
Transforms Module
Camera matrix math: pose <-> 4x4 matrix, world-to-camera inversion and
the 3x3 pinhole intrinsic matrix.

Matrices are row-major with row vectors (v' = v * M), translation in
row 3. A pose matrix is Scale * Rotation * Translation in that order.
Rotators follow the pitch (Y) / yaw (Z) / roll (X) convention in degrees.
"""

import numpy as np

from .errors import DegenerateTransform
from .scene_data import CameraIntrinsics, Pose, Rotator


def rotator_to_matrix(rotator):
    """Build the 3x3 rotation matrix of a rotator

    Args:
        rotator: Rotator in degrees

    Returns:
        np.ndarray: 3x3 rotation matrix (rows are the rotated X, Y, Z axes)
    """
    p = np.radians(rotator.pitch)
    y = np.radians(rotator.yaw)
    r = np.radians(rotator.roll)
    sp, cp = np.sin(p), np.cos(p)
    sy, cy = np.sin(y), np.cos(y)
    sr, cr = np.sin(r), np.cos(r)

    return np.array([
        [cp * cy, cp * sy, sp],
        [sr * sp * cy - cr * sy, sr * sp * sy + cr * cy, -sr * cp],
        [-(cr * sp * cy + sr * sy), cy * sr - cr * sp * sy, cr * cp],
    ])


def rotation_matrix_to_rotator(rot):
    """Extract pitch/yaw/roll from a normalized 3x3 rotation matrix

    Args:
        rot: 3x3 rotation matrix (no scale)

    Returns:
        Rotator: Rotation in degrees
    """
    cp = np.sqrt(rot[0][0]**2 + rot[0][1]**2)

    if cp > 1e-6:
        # Normal case
        pitch = np.arctan2(rot[0][2], cp)
        yaw = np.arctan2(rot[0][1], rot[0][0])
        roll = np.arctan2(-rot[1][2], rot[2][2])
    else:
        # Gimbal lock case: fold yaw into roll
        sp = 1.0 if rot[0][2] > 0 else -1.0
        pitch = sp * np.pi / 2
        yaw = 0.0
        roll = np.arctan2(rot[1][0] * sp, rot[1][1])

    return Rotator(
        pitch=float(np.degrees(pitch)),
        yaw=float(np.degrees(yaw)),
        roll=float(np.degrees(roll))
    )


def quaternion_to_rotator(x, y, z, w):
    """Convert a unit quaternion to a rotator

    Args:
        x, y, z, w: Quaternion components (normalized internally)

    Returns:
        Rotator: Rotation in degrees
    """
    q = np.array([x, y, z, w], dtype=float)
    norm = np.linalg.norm(q)
    if norm == 0:
        return Rotator()
    x, y, z, w = q / norm

    x2, y2, z2 = x + x, y + y, z + z
    xx, xy, xz = x * x2, x * y2, x * z2
    yy, yz, zz = y * y2, y * z2, z * z2
    wx, wy, wz = w * x2, w * y2, w * z2

    rot = np.array([
        [1.0 - (yy + zz), xy + wz, xz - wy],
        [xy - wz, 1.0 - (xx + zz), yz + wx],
        [xz + wy, yz - wx, 1.0 - (xx + yy)],
    ])
    return rotation_matrix_to_rotator(rot)


def pose_to_matrix(pose):
    """Build the camera-to-world (forward) 4x4 matrix of a pose

    Args:
        pose: Pose with location, rotation and scale

    Returns:
        np.ndarray: 4x4 homogeneous matrix
    """
    m = np.identity(4)
    m[:3, :3] = np.diag(np.asarray(pose.scale, dtype=float)) @ rotator_to_matrix(pose.rotation)
    m[3, :3] = pose.location
    return m + 0.0


def to_world_to_camera_matrix(pose):
    """Invert a pose (including scale) into a world-to-camera matrix

    Args:
        pose: Camera world pose

    Returns:
        np.ndarray: 4x4 homogeneous world-to-camera matrix

    Raises:
        DegenerateTransform: If any scale axis is exactly zero
    """
    scale = np.asarray(pose.scale, dtype=float)
    if np.any(scale == 0.0):
        raise DegenerateTransform(f"Cannot invert pose with zero scale axis: {tuple(pose.scale)}")

    # (S R)^-1 = R^T S^-1
    inv_rot_scale = rotator_to_matrix(pose.rotation).T @ np.diag(1.0 / scale)

    m = np.identity(4)
    m[:3, :3] = inv_rot_scale
    m[3, :3] = -np.asarray(pose.location, dtype=float) @ inv_rot_scale

    # Normalize negative zeros so reports read 0.000000
    return m + 0.0


def to_intrinsic_matrix(intrinsics: CameraIntrinsics):
    """Build the pinhole intrinsic matrix K

    Args:
        intrinsics: CameraIntrinsics

    Returns:
        np.ndarray: [[fx, 0, cx], [0, fy, cy], [0, 0, 1]]
    """
    return np.array([
        [intrinsics.focal_length_x, 0.0, intrinsics.principal_point_x],
        [0.0, intrinsics.focal_length_y, intrinsics.principal_point_y],
        [0.0, 0.0, 1.0],
    ])


def decompose_matrix(matrix):
    """Decompose a 4x4 matrix into a Pose

    Args:
        matrix: 4x4 transformation matrix (row-major, translation in row 3)

    Returns:
        Pose: location, rotation and scale
    """
    m = np.array(matrix, dtype=float)

    # Extract translation (row 3 contains translation in row-major format)
    translation = (float(m[3][0]), float(m[3][1]), float(m[3][2]))

    # Extract scale from row lengths (rows are transformed basis vectors)
    sx = np.linalg.norm(m[0, :3])
    sy = np.linalg.norm(m[1, :3])
    sz = np.linalg.norm(m[2, :3])

    # Build normalized rotation matrix
    rot = np.zeros((3, 3))
    rot[0] = m[0, :3] / sx if sx > 0 else m[0, :3]
    rot[1] = m[1, :3] / sy if sy > 0 else m[1, :3]
    rot[2] = m[2, :3] / sz if sz > 0 else m[2, :3]

    return Pose(
        location=translation,
        rotation=rotation_matrix_to_rotator(rot),
        scale=(float(sx), float(sy), float(sz))
    )
