#!/usr/bin/env python3
"""
Bone Data Exporter Module
Exports an ordered list of (bone name, world location) to text and JSON

File names are built from the owning actor name, the mesh type (region
tag or partition name) and the configured base names:
    <Actor>_<MeshType>_BoneLocations.txt
    <Actor>_<MeshType>_BoneLocations.json
"""

import json

from .base_exporter import BaseExporter
from core.errors import InconsistentArrayLength
from core.scene_data import ExportSettings, ExportTarget


class BoneDataExporter(BaseExporter):
    """Text + JSON exporter for skeletal keypoints"""

    def __init__(self, context, settings=None):
        super().__init__(context)
        self.settings = settings if settings is not None else ExportSettings()

    def get_format_name(self):
        return "Bone Data"

    def get_text_target(self, mesh_type, sub_folder=None, file_name=None):
        if not file_name:
            file_name = f"{self.context.display_name}_{mesh_type}_{self.settings.text_file_name_base}"
        return ExportTarget(self.output_root, sub_folder, file_name)

    def get_json_target(self, mesh_type, sub_folder=None):
        file_name = f"{self.context.display_name}_{mesh_type}_{self.settings.json_file_name_base}"
        return ExportTarget(self.output_root, sub_folder, file_name)

    def export(self, bone_names, bone_locations, mesh_type, sub_folder=None,
               text_file_name=None, title=None):
        """Export bone data to the enabled formats

        Args:
            bone_names: Ordered bone names
            bone_locations: World locations, same length and order as bone_names
            mesh_type: Region tag or partition name (JSON "MeshType")
            sub_folder: Optional folder below the output root
            text_file_name: Override for the text file name
            title: Override for the text file heading

        Returns:
            dict: Export results with keys:
                - 'success': bool
                - 'files': List of written file paths
                - 'failed': List of file paths that could not be written
                - 'message': Status message

        Raises:
            InconsistentArrayLength: If names and locations differ in length
                                     (nothing is written)
        """
        if len(bone_names) != len(bone_locations):
            raise InconsistentArrayLength(
                f"BoneNames ({len(bone_names)}) and BoneLocations ({len(bone_locations)}) "
                f"do not match in size for {mesh_type} mesh"
            )

        result = self.new_result()

        if self.settings.write_text_file:
            target = self.get_text_target(mesh_type, sub_folder, text_file_name)
            content = self.build_text(bone_names, bone_locations, title or f"{mesh_type} Bone Locations")
            self._record(result, target.resolve(), content, f"{mesh_type} bone data to text file")
        else:
            self.log(f"Text output disabled. Skipping text file for {mesh_type}.")

        if self.settings.write_json_file:
            target = self.get_json_target(mesh_type, sub_folder)
            content = self.build_json(bone_names, bone_locations, mesh_type)
            self._record(result, target.resolve(), content, f"{mesh_type} bone data to JSON file")
        else:
            self.log(f"JSON output disabled. Skipping JSON file for {mesh_type}.")

        return self.finish_result(result)

    def _record(self, result, file_path, content, description):
        if self.write_text_file(file_path, content, description):
            result['files'].append(str(file_path))
        else:
            result['failed'].append(str(file_path))

    def build_text(self, bone_names, bone_locations, title):
        """One line per bone: name + X/Y/Z to 4 decimals"""
        lines = [f"{title}:", ""]
        for name, loc in zip(bone_names, bone_locations):
            lines.append(f"Bone Name: {name}, World Location: X={loc[0]:.4f}, Y={loc[1]:.4f}, Z={loc[2]:.4f}")
        return "\n".join(lines) + "\n"

    def build_json(self, bone_names, bone_locations, mesh_type):
        """{MeshType, Keypoints: [{BoneName, WorldLocation: {X, Y, Z}}, ...]}"""
        document = {
            "MeshType": mesh_type,
            "Keypoints": [
                {
                    "BoneName": name,
                    "WorldLocation": {"X": float(loc[0]), "Y": float(loc[1]), "Z": float(loc[2])}
                }
                for name, loc in zip(bone_names, bone_locations)
            ]
        }
        return json.dumps(document, indent=4) + "\n"
