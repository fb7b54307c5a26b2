#!/usr/bin/env python3
"""
Scene Data Module
Format-agnostic data structures for camera and skeleton extraction.

This module defines the intermediate data structures that decouple
readers (scene files, USD stages, live hosts) from the extraction and
export pipeline. Readers build SceneCamera and SceneActor objects, the
core computes intrinsics/extrinsics and keypoints from them, and the
exporters serialize the results without knowledge of the source.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from .errors import MissingRenderTarget


Vector3 = Tuple[float, float, float]
ZERO_VECTOR: Vector3 = (0.0, 0.0, 0.0)


class CaptureSource(Enum):
    """What a scene capture writes into its render target"""
    FINAL_COLOR_LDR = "final_color_ldr"  # Tone-mapped, matches the viewport
    FINAL_COLOR_HDR = "final_color_hdr"
    SCENE_COLOR_HDR = "scene_color_hdr"
    SCENE_DEPTH = "scene_depth"


@dataclass(frozen=True)
class Rotator:
    """Euler rotation in degrees

    Attributes:
        pitch: Rotation around the right axis (Y)
        yaw: Rotation around the up axis (Z)
        roll: Rotation around the forward axis (X)
    """
    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0


@dataclass(frozen=True)
class Pose:
    """World transform of a scene object (rigid transform plus scale)

    Attributes:
        location: [x, y, z] world translation in scene units
        rotation: Pitch/yaw/roll rotator in degrees
        scale: [sx, sy, sz] scale multipliers
    """
    location: Vector3 = ZERO_VECTOR
    rotation: Rotator = field(default_factory=Rotator)
    scale: Vector3 = (1.0, 1.0, 1.0)


@dataclass(frozen=True)
class CameraIntrinsics:
    """Pinhole camera model in pixel units

    Attributes:
        focal_length_x: fx in pixels
        focal_length_y: fy in pixels
        principal_point_x: cx in pixels
        principal_point_y: cy in pixels
        image_width: Image width in pixels
        image_height: Image height in pixels
    """
    focal_length_x: float
    focal_length_y: float
    principal_point_x: float
    principal_point_y: float
    image_width: int
    image_height: int

    def is_valid(self) -> bool:
        return (self.image_width > 0 and self.image_height > 0
                and self.focal_length_x > 0 and self.focal_length_y > 0)


@dataclass(frozen=True)
class CineCameraParams:
    """Native parameters of a cine camera

    Attributes:
        focal_length: Current focal length in mm
        sensor_width: Filmback width in mm
        sensor_height: Filmback height in mm
    """
    focal_length: float
    sensor_width: float
    sensor_height: float


@dataclass(frozen=True)
class SceneCaptureParams:
    """Native parameters of a scene capture camera

    Attributes:
        fov_angle: Horizontal field of view in degrees
    """
    fov_angle: float


CameraKind = Union[CineCameraParams, SceneCaptureParams]


@dataclass
class RenderTarget:
    """Texture a camera captures into

    Attributes:
        width: Width in pixels
        height: Height in pixels
        capture_source: What the capture writes (LDR, HDR, depth)
        pixels: Captured image as uint8 array (H x W x 3 or 4), None until captured
    """
    width: int
    height: int
    capture_source: CaptureSource = CaptureSource.FINAL_COLOR_HDR
    pixels: Optional[object] = None

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass
class SceneCamera:
    """Camera object discovered in the scene

    Attributes:
        name: Object name
        params: CineCameraParams or SceneCaptureParams
        pose: Current world pose
        label: Editor label, preferred over name when not empty
        render_target: Render target the camera captures into, if any
        has_data_component: False when the camera is not set up for export
        capture_callback: Host hook that renders the scene into render_target
    """
    name: str
    params: object
    pose: Pose = field(default_factory=Pose)
    label: str = ""
    render_target: Optional[RenderTarget] = None
    has_data_component: bool = True
    capture_callback: Optional[Callable[['SceneCamera'], None]] = None

    @property
    def display_name(self) -> str:
        return self.label if self.label else self.name

    def capture_scene(self):
        """Force an immediate capture into the render target

        The capture source is normalized to tone-mapped LDR first so the
        exported frame looks like the viewport whatever the camera's
        configured mode is.

        Raises:
            MissingRenderTarget: If the camera has no render target
        """
        if self.render_target is None:
            raise MissingRenderTarget(f"Camera {self.display_name} has no render target")

        self.render_target.capture_source = CaptureSource.FINAL_COLOR_LDR
        if self.capture_callback:
            self.capture_callback(self)


@dataclass(frozen=True)
class Keypoint:
    """Named joint resolved to a world position

    Attributes:
        name: Joint name
        world_position: [x, y, z] world location, ZERO_VECTOR if not found
        found: False when the joint does not exist on the body
    """
    name: str
    world_position: Vector3
    found: bool = True


@dataclass
class SkeletalBody:
    """Skeletal mesh component posed in the world

    Attributes:
        name: Component name ("Body", "Face", ...), used as region tag
        owner_name: Name of the owning actor
        bones: (bone name, world location) for every bone, in skeleton order
    """
    name: str
    owner_name: str
    bones: List[Tuple[str, Vector3]] = field(default_factory=list)

    def get_bone_location(self, bone_name: str) -> Optional[Vector3]:
        """Get world location of a bone

        Args:
            bone_name: Bone to look up

        Returns:
            tuple: (x, y, z), or None if the skeleton has no such bone
        """
        for name, loc in self.bones:
            if name == bone_name:
                return tuple(loc)
        return None

    def get_bone_names(self) -> List[str]:
        return [name for name, _ in self.bones]

    def get_all_bone_locations(self) -> List[Tuple[str, Vector3]]:
        return [(name, tuple(loc)) for name, loc in self.bones]


@dataclass
class SceneActor:
    """Actor owning skeletal components

    Attributes:
        name: Object name
        skeletal_bodies: Skeletal mesh components attached to the actor
        label: Editor label
    """
    name: str
    skeletal_bodies: List[SkeletalBody] = field(default_factory=list)
    label: str = ""

    def find_body(self, component_name: str) -> Optional[SkeletalBody]:
        """Find skeletal component by name

        Args:
            component_name: Component name to find

        Returns:
            SkeletalBody if found, None otherwise
        """
        for body in self.skeletal_bodies:
            if body.name == component_name:
                return body
        return None


@dataclass(frozen=True)
class ExportTarget:
    """Where a single output file lands

    Attributes:
        base_directory: Output root
        sub_folder: Optional folder below the root
        file_name: File name
    """
    base_directory: Path
    sub_folder: Optional[str]
    file_name: str

    def resolve(self) -> Path:
        base = Path(self.base_directory)
        if self.sub_folder:
            return base / self.sub_folder / self.file_name
        return base / self.file_name


@dataclass
class ExportSettings:
    """Output configuration for a single extraction pass

    Attributes:
        write_text_file: Write human-readable text dumps
        write_json_file: Write JSON dumps
        text_file_name_base: Suffix for bone text files
        json_file_name_base: Suffix for bone JSON files
        camera_data_filename: Camera report file name, empty for <CameraName>.txt
        render_target_image_filename: Frame file name, empty for <CameraName>_Frame.png
        data_extraction_delay: Seconds to wait before the camera pass (legacy fallback)
        default_image_size: Image size assumed for cine cameras without a render target
        export_frames: Export the captured render target as PNG
    """
    write_text_file: bool = True
    write_json_file: bool = True
    text_file_name_base: str = "BoneLocations.txt"
    json_file_name_base: str = "BoneLocations.json"
    camera_data_filename: str = ""
    render_target_image_filename: str = ""
    data_extraction_delay: float = 1.0
    default_image_size: Tuple[int, int] = (1920, 1080)
    export_frames: bool = True


@dataclass
class ExportContext:
    """Explicit owner context passed into every extraction/export call

    Attributes:
        display_name: Owning actor name used in file names
        output_root: Root directory for every output file
        progress_callback: Optional function to call for progress updates
                          Signature: callback(message: str) -> None
    """
    display_name: str
    output_root: Path
    progress_callback: Optional[Callable[[str], None]] = None

    def log(self, message):
        """Send progress/status message"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    def for_owner(self, display_name: str) -> 'ExportContext':
        """Same output root and logger, different owner"""
        return ExportContext(display_name, self.output_root, self.progress_callback)
