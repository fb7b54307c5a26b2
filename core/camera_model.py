#!/usr/bin/env python3
"""
Camera Model Module
Converts native camera parameters into a pinhole CameraIntrinsics.

Two camera kinds are supported, each with its own formula:
- CineCamera: focal length + filmback (sensor) size in mm
- SceneCapture: horizontal field of view in degrees
"""

import numpy as np

from .errors import (
    InvalidFieldOfView,
    InvalidSensorDimensions,
    MissingRenderTarget,
    UnsupportedCameraKind,
)
from .scene_data import CameraIntrinsics, CineCameraParams, SceneCaptureParams

DEFAULT_IMAGE_SIZE = (1920, 1080)


def compute_intrinsics(params, render_target_size=None, log=None,
                       default_image_size=DEFAULT_IMAGE_SIZE):
    """Compute pinhole intrinsics for a camera

    Args:
        params: CineCameraParams or SceneCaptureParams
        render_target_size: (width, height) of the render target, or None
        log: Optional function receiving warning messages
        default_image_size: Image size assumed for cine cameras without a render target

    Returns:
        CameraIntrinsics: Focal lengths and principal point in pixels

    Raises:
        InvalidSensorDimensions: Sensor or image size is not positive
        InvalidFieldOfView: Field of view outside (0, 180) degrees
        MissingRenderTarget: Scene capture camera without render target
        UnsupportedCameraKind: Any other parameter type
    """
    if isinstance(params, CineCameraParams):
        return _cine_camera_intrinsics(params, render_target_size, log, default_image_size)
    elif isinstance(params, SceneCaptureParams):
        return _scene_capture_intrinsics(params, render_target_size)
    else:
        raise UnsupportedCameraKind(
            f"Unsupported camera kind: {type(params).__name__}\n"
            f"Supported kinds: CineCamera, SceneCapture"
        )


def _cine_camera_intrinsics(params, render_target_size, log, default_image_size):
    if render_target_size is not None:
        width, height = render_target_size
    else:
        width, height = default_image_size
        if log:
            log(f"Warning: No render target provided for cine camera. "
                f"Using default image dimensions ({width}x{height}).")

    if (params.sensor_width <= 0 or params.sensor_height <= 0
            or width <= 0 or height <= 0):
        raise InvalidSensorDimensions(
            f"Invalid sensor or image dimensions: sensor={params.sensor_width}x{params.sensor_height}mm, "
            f"image={width}x{height}px"
        )

    # Focal length mm -> pixels
    fx = params.focal_length * width / params.sensor_width
    fy = params.focal_length * height / params.sensor_height

    return CameraIntrinsics(
        focal_length_x=float(fx),
        focal_length_y=float(fy),
        principal_point_x=width / 2.0,
        principal_point_y=height / 2.0,
        image_width=int(width),
        image_height=int(height)
    )


def _scene_capture_intrinsics(params, render_target_size):
    if render_target_size is None:
        raise MissingRenderTarget(
            "Scene capture camera requires a render target to calculate intrinsics"
        )

    width, height = render_target_size
    if width <= 0 or height <= 0:
        raise InvalidSensorDimensions(f"Invalid render target dimensions: {width}x{height}px")
    if not 0.0 < params.fov_angle < 180.0:
        raise InvalidFieldOfView(f"Field of view must be in (0, 180) degrees, got {params.fov_angle}")

    # Square pixels: the horizontal FOV fixes the focal length on both axes
    focal_length = (width / 2.0) / np.tan(np.radians(params.fov_angle) / 2.0)

    return CameraIntrinsics(
        focal_length_x=float(focal_length),
        focal_length_y=float(focal_length),
        principal_point_x=width / 2.0,
        principal_point_y=height / 2.0,
        image_width=int(width),
        image_height=int(height)
    )


def get_extrinsics(camera):
    """Get the camera's current world pose

    Args:
        camera: SceneCamera

    Returns:
        Pose: World pose (read only, never modified)
    """
    return camera.pose
