#!/usr/bin/env python3
"""
Exporters Module
Writers for camera calibration data, bone locations and captured frames
"""

from .base_exporter import BaseExporter
from .bone_data_exporter import BoneDataExporter
from .camera_data_exporter import CameraDataExporter

__all__ = ['BaseExporter', 'BoneDataExporter', 'CameraDataExporter']
