#!/usr/bin/env python3
"""
Keypoint Catalogs Module
Curated skeletal joint subsets exported next to the full skeleton dump.

The names match the MetaHuman body and face skeletons. A renamed joint
is not an error: it resolves to nothing and is reported as unresolved.
"""

from collections import namedtuple


FACE_KEYPOINTS = (
    # Left Ear
    "FACIAL_L_Ear1",
    "FACIAL_L_Ear2",
    "FACIAL_L_Ear3",
    "FACIAL_L_Ear4",

    # Right Ear
    "FACIAL_R_Ear1",
    "FACIAL_R_Ear2",
    "FACIAL_R_Ear3",
    "FACIAL_R_Ear4",

    # Eyes
    "FACIAL_L_EyeParallel",
    "FACIAL_R_EyeParallel",

    # Nose Tip
    "FACIAL_C_12IPV_NoseTip1",
    "FACIAL_C_12IPV_NoseTip2",
    "FACIAL_C_12IPV_NoseTip3",
    "FACIAL_L_12IPV_NoseTip1",
    "FACIAL_L_12IPV_NoseTip2",
    "FACIAL_L_12IPV_NoseTip3",
    "FACIAL_R_12IPV_NoseTip1",
    "FACIAL_R_12IPV_NoseTip2",
    "FACIAL_R_12IPV_NoseTip3",
)

UPPER_BODY_KEYPOINTS = (
    # Spine
    "spine_01",
    "spine_02",
    "spine_03",
    "spine_04",
    "spine_05",

    # Left Arm
    "wrist_inner_l",
    "wrist_outer_l",
    "hand_l",
    "middle_01_mcp_l",
    "clavicle_l",
    "upperarm_l",
    "upperarm_correctiveRoot_l",
    "upperarm_bck_l",
    "upperarm_fwd_l",
    "upperarm_in_l",
    "upperarm_out_l",
    "lowerarm_l",
    "hand_l",
    "lowerarm_twist_02_l",
    "lowerarm_twist_01_l",
    "lowerarm_correctiveRoot_l",
    "lowerarm_in_l",
    "lowerarm_out_l",
    "lowerarm_fwd_l",
    "lowerarm_bck_l",
    "upperarm_twist_01_l",
    "upperarm_twistCor_01_l",
    "upperarm_twist_02_l",
    "upperarm_tricep_l",
    "upperarm_bicep_l",
    "upperarm_twistCor_02_l",
    "clavicle_out_l",
    "clavicle_scap_l",

    # Right Arm (mirror of left arm)
    "wrist_inner_r",
    "wrist_outer_r",
    "hand_r",
    "middle_01_mcp_r",
    "clavicle_r",
    "upperarm_r",
    "upperarm_correctiveRoot_r",
    "upperarm_bck_r",
    "upperarm_in_r",
    "upperarm_fwd_r",
    "upperarm_out_r",
    "lowerarm_r",
    "hand_r",
    "lowerarm_twist_02_r",
    "lowerarm_twist_01_r",
    "lowerarm_correctiveRoot_r",
    "lowerarm_out_r",
    "lowerarm_in_r",
    "lowerarm_fwd_r",
    "lowerarm_bck_r",
    "upperarm_twist_01_r",
    "upperarm_twistCor_01_r",
    "upperarm_twist_02_r",
    "upperarm_tricep_r",
    "upperarm_bicep_r",
    "upperarm_twistCor_02_r",
    "clavicle_out_r",
    "clavicle_scap_r",
)

LOWER_BODY_KEYPOINTS = (
    "thigh_r",

    # Toes
    "bigtoe_01_r",
    "bigtoe_01_l",
    "bigtoe_02_r",
    "bigtoe_02_l",

    # Right Leg
    "calf_r",
    "foot_r",
    "ankle_bck_r",
    "ankle_fwd_r",
    "calf_twist_02_r",
    "calf_twist_01_r",
    "calf_correctiveRoot_r",
    "calf_kneeBack_r",
    "calf_knee_r",
    "thigh_twist_01_r",
    "thigh_twistCor_01_r",
    "thigh_twist_02_r",
    "thigh_twistCor_02_r",
    "thigh_correctiveRoot_r",
    "thigh_fwd_r",
    "thigh_bck_r",
    "thigh_out_r",
    "thigh_in_r",
    "thigh_bck_lwr_r",
    "thigh_fwd_lwr_r",

    # Left Leg
    "thigh_l",
    "calf_l",
    "foot_l",
    "ankle_bck_l",
    "ankle_fwd_l",
    "calf_twist_02_l",
    "calf_twistCor_02_l",
    "calf_twist_01_l",
    "calf_correctiveRoot_l",
    "calf_kneeBack_l",
    "calf_knee_l",
    "thigh_twist_01_l",
    "thigh_twistCor_01_l",
    "thigh_twist_02_l",
    "thigh_twistCor_02_l",
    "thigh_correctiveRoot_l",
    "thigh_bck_l",
    "thigh_fwd_l",
    "thigh_out_l",
    "thigh_bck_lwr_l",
    "thigh_in_l",
    "thigh_fwd_lwr_l",
)


# Named subset exported into its own sub folder
#   name: Partition name, also the sub folder and JSON MeshType
#   keypoints: Catalog of joint names
#   text_file_template: Text file name, formatted with {actor}
#   title_template: Text file heading, formatted with {region}
SubsetPartition = namedtuple(
    'SubsetPartition', ['name', 'keypoints', 'text_file_template', 'title_template']
)

FACE_SUBSET = SubsetPartition(
    'FaceSubset', FACE_KEYPOINTS,
    '{actor}_FaceSubset.txt',
    '{region} YoloPose Keypoint Locations'
)
UPPER_BODY_SUBSET = SubsetPartition(
    'UpperBodySubset', UPPER_BODY_KEYPOINTS,
    '{actor}_UpperBodySubset_UpperBodyKeypoints.txt',
    '{region} YoloPose Upper Body Keypoint Locations'
)
LOWER_BODY_SUBSET = SubsetPartition(
    'LowerBodySubset', LOWER_BODY_KEYPOINTS,
    '{actor}_LowerBodySubset_LowerBodyKeypoints.txt',
    '{region} YoloPose Lower Body Keypoint Locations'
)

# Region tag -> curated subsets exported in addition to the full dump
SUBSET_PARTITIONS = {
    'Face': (FACE_SUBSET,),
    'Body': (UPPER_BODY_SUBSET, LOWER_BODY_SUBSET),
}


def get_subset_partitions(region_tag):
    """Get the curated subsets for a region

    Args:
        region_tag: Skeletal component name ("Body", "Face", ...)

    Returns:
        tuple: SubsetPartition entries, empty for regions without subsets
    """
    return SUBSET_PARTITIONS.get(region_tag, ())
