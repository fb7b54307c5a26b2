#!/usr/bin/env python3
"""
Camera Data Exporter Module
Exports camera intrinsics/extrinsics to a text report and two JSON files

Output layout (relative to the output root):
- CameraData/<CameraName or custom>.txt
- CameraData/<CameraName>/Intrinsics_<CameraName>.json
- CameraData/<CameraName>/Extrinsics_<CameraName>.json
"""

import json

from .base_exporter import BaseExporter
from core.scene_data import ExportTarget
from core.transforms import to_intrinsic_matrix, to_world_to_camera_matrix

CAMERA_DATA_FOLDER = "CameraData"


class CameraDataExporter(BaseExporter):
    """Camera calibration exporter

    Writes three independent files per camera. Each one is attempted even
    if another fails (e.g. a degenerate pose breaks the extrinsic matrix
    but the intrinsics JSON is still written).
    """

    def get_format_name(self):
        return "Camera Data"

    def get_report_target(self, camera_name, filename=None):
        return ExportTarget(self.output_root, CAMERA_DATA_FOLDER,
                            filename if filename else f"{camera_name}.txt")

    def get_intrinsics_target(self, camera_name):
        return ExportTarget(self.output_root, f"{CAMERA_DATA_FOLDER}/{camera_name}",
                            f"Intrinsics_{camera_name}.json")

    def get_extrinsics_target(self, camera_name):
        return ExportTarget(self.output_root, f"{CAMERA_DATA_FOLDER}/{camera_name}",
                            f"Extrinsics_{camera_name}.json")

    def export(self, camera_name, extrinsics, intrinsics, filename=None):
        """Export camera data for one camera

        Args:
            camera_name: Camera name used in file names and documents
            extrinsics: Pose of the camera in world space
            intrinsics: CameraIntrinsics
            filename: Optional text report file name (default <camera_name>.txt)

        Returns:
            dict: Export results with keys:
                - 'success': bool, True if all three files were written
                - 'files': List of written file paths
                - 'failed': List of file paths that could not be written
                - 'message': Status message
        """
        result = self.new_result()

        outputs = [
            (self.get_report_target(camera_name, filename), "camera data",
             lambda: self.build_report(camera_name, extrinsics, intrinsics)),
            (self.get_intrinsics_target(camera_name), "intrinsic data",
             lambda: self.to_json(self.build_intrinsics_document(camera_name, intrinsics))),
            (self.get_extrinsics_target(camera_name), "extrinsic data",
             lambda: self.to_json(self.build_extrinsics_document(camera_name, extrinsics))),
        ]

        for target, description, build in outputs:
            file_path = target.resolve()
            try:
                content = build()
            except Exception as e:
                self.log(f"ERROR: Failed to build {description} for {camera_name}: {e}")
                result['failed'].append(str(file_path))
                continue

            if self.write_text_file(file_path, content, description):
                result['files'].append(str(file_path))
            else:
                result['failed'].append(str(file_path))

        return self.finish_result(result)

    def build_report(self, camera_name, extrinsics, intrinsics):
        """Build the combined human-readable report

        Args:
            camera_name: Camera name
            extrinsics: Pose
            intrinsics: CameraIntrinsics

        Returns:
            str: Report text
        """
        loc = extrinsics.location
        rot = extrinsics.rotation
        scale = extrinsics.scale

        extrinsic_lines = [
            "Extrinsics:",
            f"  Location: X={loc[0]:.6f}, Y={loc[1]:.6f}, Z={loc[2]:.6f}",
            f"  Rotation: Pitch={rot.pitch:.6f}, Yaw={rot.yaw:.6f}, Roll={rot.roll:.6f}",
            f"  Scale: X={scale[0]:.6f}, Y={scale[1]:.6f}, Z={scale[2]:.6f}",
        ]

        world_to_camera = to_world_to_camera_matrix(extrinsics)
        extrinsic_matrix_lines = ["Extrinsic Matrix (World to Camera, 4x4 homogenous):"]
        for row in world_to_camera:
            extrinsic_matrix_lines.append("  " + " ".join(f"{v:.6f}" for v in row))

        intrinsic_lines = [
            "Intrinsics:",
            f"  Focal Length (fx, fy): {intrinsics.focal_length_x:.6f}, {intrinsics.focal_length_y:.6f}",
            f"  Principal Point (cx, cy): {intrinsics.principal_point_x:.6f}, {intrinsics.principal_point_y:.6f}",
            f"  Image Dimensions: Width={intrinsics.image_width}, Height={intrinsics.image_height}",
        ]

        intrinsic_matrix = to_intrinsic_matrix(intrinsics)
        intrinsic_matrix_lines = ["Intrinsic Matrix (3x3):"]
        for row in intrinsic_matrix:
            intrinsic_matrix_lines.append("  " + " ".join(f"{v:.6f}" for v in row))

        sections = [
            f"Camera Name: {camera_name}",
            "\n".join(extrinsic_lines),
            "\n".join(extrinsic_matrix_lines),
            "\n".join(intrinsic_lines),
            "\n".join(intrinsic_matrix_lines),
        ]
        return "\n\n".join(sections) + "\n"

    def build_intrinsics_document(self, camera_name, intrinsics):
        """Build the intrinsics JSON document

        Returns:
            dict: {CameraName, Intrinsics: {FocalLength, PrincipalPoint,
                   ImageDimensions, IntrinsicMatrix}}
        """
        return {
            "CameraName": camera_name,
            "Intrinsics": {
                "FocalLength": {
                    "fx": intrinsics.focal_length_x,
                    "fy": intrinsics.focal_length_y
                },
                "PrincipalPoint": {
                    "cx": intrinsics.principal_point_x,
                    "cy": intrinsics.principal_point_y
                },
                "ImageDimensions": {
                    "Width": intrinsics.image_width,
                    "Height": intrinsics.image_height
                },
                "IntrinsicMatrix": to_intrinsic_matrix(intrinsics).tolist()
            }
        }

    def build_extrinsics_document(self, camera_name, extrinsics):
        """Build the extrinsics JSON document

        Returns:
            dict: {CameraName, Extrinsics: {Location, Rotation, Scale,
                   ExtrinsicMatrix (world to camera)}}
        """
        loc = extrinsics.location
        rot = extrinsics.rotation
        scale = extrinsics.scale

        return {
            "CameraName": camera_name,
            "Extrinsics": {
                "Location": {"X": float(loc[0]), "Y": float(loc[1]), "Z": float(loc[2])},
                "Rotation": {"Pitch": float(rot.pitch), "Yaw": float(rot.yaw), "Roll": float(rot.roll)},
                "Scale": {"X": float(scale[0]), "Y": float(scale[1]), "Z": float(scale[2])},
                "ExtrinsicMatrix": to_world_to_camera_matrix(extrinsics).tolist()
            }
        }

    @staticmethod
    def to_json(document):
        return json.dumps(document, indent=4) + "\n"
