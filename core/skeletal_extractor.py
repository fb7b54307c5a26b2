#!/usr/bin/env python3
"""
Skeletal Extractor Module
Resolves joint names to world positions and exports each partition.

For every skeletal component the full skeleton is read ONCE into a
name -> location mapping. The "all bones" dump and the curated subsets
(face, upper body, lower body) are then filtered from that single
snapshot, so every file of a pass describes the same pose.
"""

from .errors import ExtractionError
from .keypoint_catalogs import (
    FACE_KEYPOINTS,
    LOWER_BODY_KEYPOINTS,
    UPPER_BODY_KEYPOINTS,
    get_subset_partitions,
)
from .scene_data import ExportSettings, Keypoint, ZERO_VECTOR

# Skeletal components scanned on every actor
EXTRACTED_COMPONENTS = ('Body', 'Face')

# Debug point colors (RGB)
FACE_COLOR = (255, 0, 0)
UPPER_BODY_COLOR = (0, 0, 255)
LOWER_BODY_COLOR = (0, 255, 0)
DEBUG_POINT_SIZE = 3.0


def resolve_world_position(body, joint_name):
    """Get world location of a joint, ZERO_VECTOR if it does not exist

    A returned zero vector cannot be told apart from a joint sitting at the
    origin; use resolve_keypoints() when the difference matters.

    Args:
        body: SkeletalBody
        joint_name: Joint to look up

    Returns:
        tuple: (x, y, z) world location
    """
    location = body.get_bone_location(joint_name)
    return location if location is not None else ZERO_VECTOR


def resolve_keypoints(bone_map, joint_names):
    """Resolve joint names against a name -> location snapshot

    Args:
        bone_map: dict of bone name -> (x, y, z)
        joint_names: Ordered joint names to resolve

    Returns:
        tuple: (keypoints, unresolved) where keypoints is a list of Keypoint in
               joint_names order (ZERO_VECTOR for missing joints) and unresolved
               lists the missing names
    """
    keypoints = []
    unresolved = []
    for name in joint_names:
        location = bone_map.get(name)
        if location is None:
            keypoints.append(Keypoint(name, ZERO_VECTOR, found=False))
            unresolved.append(name)
        else:
            keypoints.append(Keypoint(name, tuple(location)))
    return keypoints, unresolved


class SkeletalKeypointExtractor:
    """Extracts and saves bone locations for one actor

    Exports per skeletal component:
    - All bones (full skeleton dump), tagged with the component name
    - Face: FaceSubset partition
    - Body: UpperBodySubset and LowerBodySubset partitions

    Partitions are independent: a failure in one is logged and the others
    are still exported.
    """

    def __init__(self, context, settings=None, bone_exporter=None):
        """Initialize extractor

        Args:
            context: ExportContext of the owning actor
            settings: ExportSettings (defaults if None)
            bone_exporter: Exporter to use (defaults to BoneDataExporter)
        """
        self.context = context
        self.settings = settings if settings is not None else ExportSettings()
        if bone_exporter is None:
            from exporters.bone_data_exporter import BoneDataExporter
            bone_exporter = BoneDataExporter(context, self.settings)
        self.bone_exporter = bone_exporter

        self.body_mesh = None
        self.face_mesh = None

    def log(self, message):
        self.context.log(message)

    def extract_actor(self, actor):
        """Scan an actor for Body/Face components and export each

        Args:
            actor: SceneActor

        Returns:
            dict: Component name -> extract_and_export() result
        """
        results = {}
        self.log(f"SkeletalExtractor attached to Actor: {actor.name}")

        if not actor.skeletal_bodies:
            self.log(f"ERROR: No skeletal mesh components found on Actor: {actor.name}!")
            return results

        for body in actor.skeletal_bodies:
            self.log(f"  - Found component: '{body.name}' ({len(body.bones)} bones)")

        self.body_mesh = actor.find_body('Body')
        self.face_mesh = actor.find_body('Face')

        for component_name in EXTRACTED_COMPONENTS:
            body = actor.find_body(component_name)
            if body is None:
                self.log(f"ERROR: '{component_name}' skeletal mesh component NOT FOUND on {actor.name}. "
                         f"Bone extraction for {component_name} skipped.")
                continue
            results[component_name] = self.extract_and_export(body, component_name)

        return results

    def extract_and_export(self, body, region_tag=None):
        """Export the full skeleton and the region's curated subsets

        Args:
            body: SkeletalBody
            region_tag: Region tag (defaults to the component name)

        Returns:
            dict: Results with keys:
                - 'success': bool, True if every partition was exported
                - 'partitions': Partition name -> exporter result
                - 'unresolved_joints': Partition name -> missing joint names
        """
        region_tag = region_tag or body.name
        owner = self.context.display_name

        # Single snapshot of the pose for every partition
        all_bones = body.get_all_bone_locations()
        bone_map = dict(all_bones)

        self.log(f"Listing ALL bone names and world locations from '{body.name}' ({region_tag}) "
                 f"on Actor: {owner} (Total Bones: {len(all_bones)})")

        results = {
            'success': True,
            'partitions': {},
            'unresolved_joints': {}
        }

        names = [name for name, _ in all_bones]
        locations = [location for _, location in all_bones]
        results['partitions'][region_tag] = self._export_partition(
            region_tag, names, locations, region_tag
        )

        for subset in get_subset_partitions(region_tag):
            keypoints, unresolved = resolve_keypoints(bone_map, subset.keypoints)
            self.log(f"Extracting ONLY specified {subset.name} keypoints for '{body.name}' ({region_tag}) "
                     f"on Actor: {owner} (Total Keypoints: {len(keypoints)})")

            if unresolved:
                results['unresolved_joints'][subset.name] = unresolved
                self.log(f"Warning: {len(unresolved)} {subset.name} joint(s) not found on '{body.name}', "
                         f"exported as zero vectors: {', '.join(unresolved)}")

            results['partitions'][subset.name] = self._export_partition(
                subset.name,
                [kp.name for kp in keypoints],
                [kp.world_position for kp in keypoints],
                region_tag,
                sub_folder=subset.name,
                text_file_name=subset.text_file_template.format(actor=owner),
                title=subset.title_template.format(region=region_tag)
            )

        results['success'] = all(r.get('success') for r in results['partitions'].values())
        return results

    def _export_partition(self, mesh_type, names, locations, region_tag, **kwargs):
        try:
            result = self.bone_exporter.export(names, locations, mesh_type, **kwargs)
        except ExtractionError as e:
            self.log(f"ERROR: Failed to export {mesh_type} partition for {region_tag}: {e}")
            return {
                'success': False,
                'files': [],
                'failed': [],
                'message': str(e)
            }

        self.log(self.bone_exporter.get_export_summary(result, f"{self.context.display_name}/{mesh_type}"))
        return result

    def tick(self, draw_point):
        """Draw curated keypoints of the last extracted actor

        Face keypoints are drawn red from the Face component, upper body
        blue and lower body green from the Body component. Joints that do
        not resolve are logged and not drawn.

        Args:
            draw_point: Function(location, size, color) drawing one point

        Returns:
            int: Number of points drawn
        """
        drawn = 0
        groups = [
            (self.face_mesh, FACE_KEYPOINTS, FACE_COLOR, "Face"),
            (self.body_mesh, UPPER_BODY_KEYPOINTS, UPPER_BODY_COLOR, "Upper Body"),
            (self.body_mesh, LOWER_BODY_KEYPOINTS, LOWER_BODY_COLOR, "Lower Body"),
        ]

        for body, keypoints, color, label in groups:
            if body is None:
                continue
            for name in keypoints:
                location = body.get_bone_location(name)
                if location is None:
                    self.log(f"ERROR: {label} bone '{name}' not found on '{body.name}'!")
                    continue
                draw_point(location, DEBUG_POINT_SIZE, color)
                drawn += 1

        return drawn
