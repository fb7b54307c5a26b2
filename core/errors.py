#!/usr/bin/env python3
"""
Errors Module
Exception types raised while extracting camera and skeletal data.

Computation errors abort only the camera or partition they belong to.
Callers (coordinator, skeletal extractor, exporters) catch them, log, and
carry on with the remaining work.
"""


class ExtractionError(Exception):
    """Base class for all extraction/export errors"""
    pass


class InvalidSensorDimensions(ExtractionError):
    """Sensor or image dimensions are not positive"""
    pass


class InvalidFieldOfView(ExtractionError):
    """Field of view angle is outside the open interval (0, 180) degrees"""
    pass


class MissingRenderTarget(ExtractionError):
    """Camera kind needs a render target to derive its intrinsics"""
    pass


class UnsupportedCameraKind(ExtractionError):
    """Camera parameters are not one of the supported camera kinds"""
    pass


class InconsistentArrayLength(ExtractionError):
    """Bone name and bone location lists differ in length"""
    pass


class FileWriteFailure(ExtractionError):
    """A single output file could not be written"""
    pass


class DegenerateTransform(ExtractionError):
    """Transform cannot be inverted (a scale axis is exactly zero)"""
    pass
