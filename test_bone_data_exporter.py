#!/usr/bin/env python3
"""
Bone data export tests
File naming, text/JSON layout and output switches
"""

import json

import pytest

from core.errors import InconsistentArrayLength
from core.scene_data import ExportContext, ExportSettings
from exporters.bone_data_exporter import BoneDataExporter

NAMES = ["root", "pelvis"]
LOCATIONS = [(0.0, 0.0, 0.0), (1.0, 2.5, -3.25)]


def make_exporter(tmp_path, **settings):
    return BoneDataExporter(ExportContext("BP_Actor", tmp_path, None), ExportSettings(**settings))


def test_default_file_names(tmp_path):
    result = make_exporter(tmp_path).export(NAMES, LOCATIONS, "Body")

    assert result['success']
    assert (tmp_path / "BP_Actor_Body_BoneLocations.txt").is_file()
    assert (tmp_path / "BP_Actor_Body_BoneLocations.json").is_file()


def test_text_layout(tmp_path):
    make_exporter(tmp_path).export(NAMES, LOCATIONS, "Body")
    text = (tmp_path / "BP_Actor_Body_BoneLocations.txt").read_text(encoding='utf-8')

    assert text == (
        "Body Bone Locations:\n"
        "\n"
        "Bone Name: root, World Location: X=0.0000, Y=0.0000, Z=0.0000\n"
        "Bone Name: pelvis, World Location: X=1.0000, Y=2.5000, Z=-3.2500\n"
    )


def test_json_layout(tmp_path):
    make_exporter(tmp_path).export(NAMES, LOCATIONS, "Body")
    with open(tmp_path / "BP_Actor_Body_BoneLocations.json") as f:
        document = json.load(f)

    assert document == {
        "MeshType": "Body",
        "Keypoints": [
            {"BoneName": "root", "WorldLocation": {"X": 0.0, "Y": 0.0, "Z": 0.0}},
            {"BoneName": "pelvis", "WorldLocation": {"X": 1.0, "Y": 2.5, "Z": -3.25}},
        ]
    }


def test_sub_folder_and_overrides(tmp_path):
    make_exporter(tmp_path).export(
        NAMES, LOCATIONS, "UpperBodySubset",
        sub_folder="UpperBodySubset",
        text_file_name="BP_Actor_UpperBodySubset_UpperBodyKeypoints.txt",
        title="Body YoloPose Upper Body Keypoint Locations"
    )

    text_path = tmp_path / "UpperBodySubset" / "BP_Actor_UpperBodySubset_UpperBodyKeypoints.txt"
    assert text_path.read_text(encoding='utf-8').startswith("Body YoloPose Upper Body Keypoint Locations:\n\n")
    assert (tmp_path / "UpperBodySubset" / "BP_Actor_UpperBodySubset_BoneLocations.json").is_file()


def test_mismatched_lengths_write_nothing(tmp_path):
    with pytest.raises(InconsistentArrayLength):
        make_exporter(tmp_path).export(NAMES, LOCATIONS[:1], "Body")

    assert list(tmp_path.iterdir()) == []


def test_disabled_formats(tmp_path):
    result = make_exporter(tmp_path, write_text_file=False).export(NAMES, LOCATIONS, "Face")

    assert not (tmp_path / "BP_Actor_Face_BoneLocations.txt").exists()
    assert (tmp_path / "BP_Actor_Face_BoneLocations.json").is_file()
    assert len(result['files']) == 1

    result = make_exporter(tmp_path / "none", write_text_file=False, write_json_file=False).export(
        NAMES, LOCATIONS, "Face")
    assert result['files'] == []
    assert not result['success']


def test_custom_base_names(tmp_path):
    make_exporter(tmp_path, text_file_name_base="Joints.txt", json_file_name_base="Joints.json").export(
        NAMES, LOCATIONS, "Body")

    assert (tmp_path / "BP_Actor_Body_Joints.txt").is_file()
    assert (tmp_path / "BP_Actor_Body_Joints.json").is_file()


def test_unwritable_output_is_reported(tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("not a directory")

    result = make_exporter(blocker).export(NAMES, LOCATIONS, "Body")

    assert not result['success']
    assert len(result['failed']) == 2
