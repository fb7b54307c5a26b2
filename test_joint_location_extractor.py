#!/usr/bin/env python3
"""
End-to-end extraction tests
Orchestrator and command line entry point on a JSON scene
"""

import json

import pytest

from core.keypoint_catalogs import FACE_KEYPOINTS, LOWER_BODY_KEYPOINTS, UPPER_BODY_KEYPOINTS
from extract_joints import main, parse_resolution
from joint_location_extractor import JointLocationExtractor


def bones(names):
    return [{"name": name, "location": [float(i), 0.0, float(i) * 10.0]}
            for i, name in enumerate(dict.fromkeys(names))]


@pytest.fixture
def scene_file(tmp_path):
    scene = {
        "cameras": [
            {"name": "Cam", "type": "CineCamera", "location": [0, -300, 150]},
            {"name": "Capture", "type": "SceneCapture", "fov_angle": 90.0}
        ],
        "actors": [
            {
                "name": "BP_Actor",
                "skeletal_meshes": [
                    {"name": "Body", "bones": bones(UPPER_BODY_KEYPOINTS + LOWER_BODY_KEYPOINTS)},
                    {"name": "Face", "bones": bones(FACE_KEYPOINTS)}
                ]
            }
        ]
    }
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(scene), encoding='utf-8')
    return path


def test_extract_scene(scene_file, tmp_path):
    messages = []
    output = tmp_path / "out"
    results = JointLocationExtractor(messages.append).extract(str(scene_file), str(output))

    assert results['success']
    assert results['actors']['BP_Actor']['Body']['success']
    assert results['actors']['BP_Actor']['Face']['success']
    assert (output / "BP_Actor_Body_BoneLocations.json").is_file()
    assert (output / "FaceSubset" / "BP_Actor_FaceSubset.txt").is_file()
    assert (output / "CameraData" / "Cam.txt").is_file()

    # Scene capture without a render target cannot derive intrinsics
    assert results['cameras']['cameras']['Cam']['success']
    assert not results['cameras']['cameras']['Capture']['success']
    assert any("Extraction Complete!" in m for m in messages)


def test_extract_with_delay(scene_file, tmp_path):
    from core.scene_data import ExportSettings

    output = tmp_path / "delayed"
    settings = ExportSettings(data_extraction_delay=0.01)
    results = JointLocationExtractor().extract(str(scene_file), str(output), settings, use_delay=True)

    assert results['cameras']['cameras']['Cam']['success']
    assert (output / "CameraData" / "Cam.txt").is_file()


def test_missing_input_is_reported(tmp_path):
    results = JointLocationExtractor().extract(str(tmp_path / "missing.json"), str(tmp_path / "out"))

    assert not results['success']
    assert results['message'].startswith("Extraction failed")


def test_cli(scene_file, tmp_path):
    output = tmp_path / "cli"
    main([str(scene_file), "--output-dir", str(output), "--no-text", "--camera-filename", "Calib.txt"])

    assert (output / "BP_Actor_Body_BoneLocations.json").is_file()
    assert not (output / "BP_Actor_Body_BoneLocations.txt").exists()
    assert (output / "CameraData" / "Calib.txt").is_file()


def test_cli_rejects_unsupported_format(tmp_path):
    path = tmp_path / "shot.abc"
    path.write_text("", encoding='utf-8')

    with pytest.raises(SystemExit) as excinfo:
        main([str(path), "--output-dir", str(tmp_path / "out")])
    assert excinfo.value.code == 1


def test_parse_resolution():
    assert parse_resolution("1280x720") == (1280, 720)


def test_cli_rejects_unsupported_format_before_extraction(tmp_path, capsys):
    path = tmp_path / "scene.txt"
    path.write_text("{}", encoding='utf-8')

    with pytest.raises(SystemExit):
        main([str(path), "--output-dir", str(tmp_path / "out")])

    assert ".json" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()
