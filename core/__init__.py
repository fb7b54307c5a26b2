#!/usr/bin/env python3
"""
Core Module
Format-agnostic data structures, camera math and keypoint extraction.
"""

from .errors import (
    ExtractionError,
    InvalidSensorDimensions,
    InvalidFieldOfView,
    MissingRenderTarget,
    UnsupportedCameraKind,
    InconsistentArrayLength,
    FileWriteFailure,
    DegenerateTransform,
)
from .scene_data import (
    Vector3,
    ZERO_VECTOR,
    CaptureSource,
    Rotator,
    Pose,
    CameraIntrinsics,
    CineCameraParams,
    SceneCaptureParams,
    RenderTarget,
    SceneCamera,
    Keypoint,
    SkeletalBody,
    SceneActor,
    ExportTarget,
    ExportSettings,
    ExportContext,
)
from .transforms import to_world_to_camera_matrix, to_intrinsic_matrix
from .camera_model import compute_intrinsics, get_extrinsics
from .skeletal_extractor import SkeletalKeypointExtractor, resolve_world_position
from .camera_coordinator import SceneCameraCoordinator, CoordinatorState

__all__ = [
    'ExtractionError',
    'InvalidSensorDimensions',
    'InvalidFieldOfView',
    'MissingRenderTarget',
    'UnsupportedCameraKind',
    'InconsistentArrayLength',
    'FileWriteFailure',
    'DegenerateTransform',
    'Vector3',
    'ZERO_VECTOR',
    'CaptureSource',
    'Rotator',
    'Pose',
    'CameraIntrinsics',
    'CineCameraParams',
    'SceneCaptureParams',
    'RenderTarget',
    'SceneCamera',
    'Keypoint',
    'SkeletalBody',
    'SceneActor',
    'ExportTarget',
    'ExportSettings',
    'ExportContext',
    'to_world_to_camera_matrix',
    'to_intrinsic_matrix',
    'compute_intrinsics',
    'get_extrinsics',
    'SkeletalKeypointExtractor',
    'resolve_world_position',
    'SceneCameraCoordinator',
    'CoordinatorState',
]
