#!/usr/bin/env python3
"""
Skeletal keypoint extraction tests
Partitions, unresolved joints, output layout and debug drawing
"""

import json

import pytest

from core.errors import InconsistentArrayLength
from core.keypoint_catalogs import FACE_KEYPOINTS, LOWER_BODY_KEYPOINTS, UPPER_BODY_KEYPOINTS
from core.scene_data import ExportContext, SceneActor, SkeletalBody, ZERO_VECTOR
from core.skeletal_extractor import (
    FACE_COLOR,
    SkeletalKeypointExtractor,
    resolve_keypoints,
    resolve_world_position,
)
from exporters.bone_data_exporter import BoneDataExporter


def make_bones(names):
    bones = []
    for i, name in enumerate(dict.fromkeys(names)):
        bones.append((name, (float(i + 1), float(i + 1) * 2.0, float(i + 1) * 3.0)))
    return bones


@pytest.fixture
def actor():
    body = SkeletalBody("Body", "BP_Actor", make_bones(("root",) + UPPER_BODY_KEYPOINTS + LOWER_BODY_KEYPOINTS))
    # Face skeleton is missing its first catalog joint
    face = SkeletalBody("Face", "BP_Actor", make_bones(("head",) + FACE_KEYPOINTS[1:]))
    return SceneActor("BP_Actor", [body, face])


@pytest.fixture
def messages():
    return []


@pytest.fixture
def context(tmp_path, messages):
    return ExportContext("BP_Actor", tmp_path, messages.append)


def test_resolve_world_position_missing_joint_is_zero():
    body = SkeletalBody("Body", "BP_Actor", [("pelvis", (1.0, 2.0, 3.0))])

    assert resolve_world_position(body, "pelvis") == (1.0, 2.0, 3.0)
    assert resolve_world_position(body, "does_not_exist") == ZERO_VECTOR


def test_resolve_world_position_follows_updated_pose():
    body = SkeletalBody("Body", "BP_Actor", [("pelvis", (1.0, 2.0, 3.0))])
    assert resolve_world_position(body, "pelvis") == (1.0, 2.0, 3.0)

    body.bones = [("pelvis", (9.0, 9.0, 9.0))]

    assert resolve_world_position(body, "pelvis") == (9.0, 9.0, 9.0)
    assert body.get_all_bone_locations() == [("pelvis", (9.0, 9.0, 9.0))]


def test_tick_draws_current_pose(context):
    body = SkeletalBody("Body", "BP_Actor", make_bones(UPPER_BODY_KEYPOINTS))
    extractor = SkeletalKeypointExtractor(context)
    extractor.extract_actor(SceneActor("BP_Actor", [body]))

    body.bones = [(name, (0.0, 0.0, 500.0)) for name, _ in body.bones]
    points = []
    extractor.tick(lambda location, size, color: points.append(location))

    assert points
    assert all(location == (0.0, 0.0, 500.0) for location in points)


def test_resolve_keypoints_keeps_order():
    keypoints, unresolved = resolve_keypoints({"a": (1.0, 1.0, 1.0), "c": (3.0, 3.0, 3.0)}, ["c", "b", "a"])

    assert [kp.name for kp in keypoints] == ["c", "b", "a"]
    assert [kp.found for kp in keypoints] == [True, False, True]
    assert keypoints[1].world_position == ZERO_VECTOR
    assert unresolved == ["b"]


def test_output_layout(actor, context, tmp_path):
    results = SkeletalKeypointExtractor(context).extract_actor(actor)

    assert set(results) == {"Body", "Face"}
    expected = [
        "BP_Actor_Body_BoneLocations.txt",
        "BP_Actor_Body_BoneLocations.json",
        "BP_Actor_Face_BoneLocations.txt",
        "BP_Actor_Face_BoneLocations.json",
        "FaceSubset/BP_Actor_FaceSubset.txt",
        "FaceSubset/BP_Actor_FaceSubset_BoneLocations.json",
        "UpperBodySubset/BP_Actor_UpperBodySubset_UpperBodyKeypoints.txt",
        "UpperBodySubset/BP_Actor_UpperBodySubset_BoneLocations.json",
        "LowerBodySubset/BP_Actor_LowerBodySubset_LowerBodyKeypoints.txt",
        "LowerBodySubset/BP_Actor_LowerBodySubset_BoneLocations.json",
    ]
    for relative in expected:
        assert (tmp_path / relative).is_file(), relative


def test_missing_face_joint_is_zero_and_reported(actor, context, messages, tmp_path):
    results = SkeletalKeypointExtractor(context).extract_actor(actor)

    assert results["Face"]["unresolved_joints"] == {"FaceSubset": [FACE_KEYPOINTS[0]]}
    assert results["Body"]["unresolved_joints"] == {}

    with open(tmp_path / "FaceSubset" / "BP_Actor_FaceSubset_BoneLocations.json") as f:
        document = json.load(f)
    assert document["MeshType"] == "FaceSubset"
    assert len(document["Keypoints"]) == len(FACE_KEYPOINTS)
    assert document["Keypoints"][0] == {
        "BoneName": FACE_KEYPOINTS[0],
        "WorldLocation": {"X": 0.0, "Y": 0.0, "Z": 0.0}
    }

    # Full dump still lists every bone the face skeleton actually has
    with open(tmp_path / "BP_Actor_Face_BoneLocations.json") as f:
        full = json.load(f)
    assert [kp["BoneName"] for kp in full["Keypoints"]] == ["head"] + list(FACE_KEYPOINTS[1:])

    warnings = [m for m in messages if m.startswith("Warning:") and FACE_KEYPOINTS[0] in m]
    assert len(warnings) == 1


def test_subset_title_and_order(actor, context, tmp_path):
    SkeletalKeypointExtractor(context).extract_actor(actor)
    text = (tmp_path / "UpperBodySubset" / "BP_Actor_UpperBodySubset_UpperBodyKeypoints.txt").read_text(
        encoding='utf-8')
    lines = text.splitlines()

    assert lines[0] == "Body YoloPose Upper Body Keypoint Locations:"
    assert lines[1] == ""
    names = [line.split(",")[0][len("Bone Name: "):] for line in lines[2:]]
    assert names == list(UPPER_BODY_KEYPOINTS)


def test_subsets_use_same_snapshot_as_full_dump(actor, context, tmp_path):
    SkeletalKeypointExtractor(context).extract_actor(actor)

    with open(tmp_path / "BP_Actor_Body_BoneLocations.json") as f:
        full = {kp["BoneName"]: kp["WorldLocation"] for kp in json.load(f)["Keypoints"]}
    with open(tmp_path / "LowerBodySubset" / "BP_Actor_LowerBodySubset_BoneLocations.json") as f:
        subset = json.load(f)["Keypoints"]

    for kp in subset:
        assert kp["WorldLocation"] == full[kp["BoneName"]]


class FailingForExporter(BoneDataExporter):
    """Bone exporter failing for one mesh type"""

    def __init__(self, context, failing_mesh_type):
        super().__init__(context)
        self.failing_mesh_type = failing_mesh_type

    def export(self, bone_names, bone_locations, mesh_type, **kwargs):
        if mesh_type == self.failing_mesh_type:
            raise InconsistentArrayLength("forced failure")
        return super().export(bone_names, bone_locations, mesh_type, **kwargs)


def test_partitions_are_independent(actor, context, messages, tmp_path):
    extractor = SkeletalKeypointExtractor(context, bone_exporter=FailingForExporter(context, "UpperBodySubset"))
    results = extractor.extract_actor(actor)

    body = results["Body"]
    assert not body["success"]
    assert not body["partitions"]["UpperBodySubset"]["success"]
    assert body["partitions"]["LowerBodySubset"]["success"]
    assert body["partitions"]["Body"]["success"]
    assert results["Face"]["partitions"]["FaceSubset"]["success"]
    assert not (tmp_path / "UpperBodySubset").exists()
    assert any(m.startswith("ERROR:") and "UpperBodySubset" in m for m in messages)


def test_missing_component_is_logged(context, messages, tmp_path):
    actor = SceneActor("BP_Actor", [SkeletalBody("Body", "BP_Actor", make_bones(UPPER_BODY_KEYPOINTS))])
    results = SkeletalKeypointExtractor(context).extract_actor(actor)

    assert set(results) == {"Body"}
    assert any(m.startswith("ERROR:") and "'Face'" in m for m in messages)
    assert results["Body"]["unresolved_joints"]["LowerBodySubset"] == list(LOWER_BODY_KEYPOINTS)


def test_actor_without_components(context, messages):
    results = SkeletalKeypointExtractor(context).extract_actor(SceneActor("Empty"))

    assert results == {}
    assert any(m.startswith("ERROR:") for m in messages)


def test_other_region_exports_only_full_dump(context, tmp_path):
    body = SkeletalBody("Hair", "BP_Actor", [("hair_root", (0.0, 0.0, 1.0))])
    result = SkeletalKeypointExtractor(context).extract_and_export(body)

    assert list(result["partitions"]) == ["Hair"]
    assert (tmp_path / "BP_Actor_Hair_BoneLocations.txt").is_file()


def test_tick_draws_resolved_keypoints(actor, context, messages):
    extractor = SkeletalKeypointExtractor(context)
    extractor.extract_actor(actor)
    points = []

    drawn = extractor.tick(lambda location, size, color: points.append((location, size, color)))

    assert drawn == len(FACE_KEYPOINTS) - 1 + len(UPPER_BODY_KEYPOINTS) + len(LOWER_BODY_KEYPOINTS)
    assert len(points) == drawn
    assert points[0][2] == FACE_COLOR
    assert any(m.startswith("ERROR:") and FACE_KEYPOINTS[0] in m for m in messages)


def test_tick_before_extraction_draws_nothing(context):
    assert SkeletalKeypointExtractor(context).tick(lambda *args: None) == 0


def test_partition_summaries_are_logged(actor, context, messages):
    SkeletalKeypointExtractor(context).extract_actor(actor)

    for partition in ("Body", "Face", "FaceSubset", "UpperBodySubset", "LowerBodySubset"):
        assert any(m.startswith(f"✓ Bone Data Export (BP_Actor/{partition})") for m in messages), partition
