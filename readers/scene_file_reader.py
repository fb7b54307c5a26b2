#!/usr/bin/env python3
"""
Scene File Reader Module
Reads a JSON scene description implementing the BaseReader interface

Layout:
{
    "render_resolution": [1920, 1080],
    "cameras": [
        {
            "name": "CineCameraActor_0", "label": "MainCam",
            "type": "CineCamera",
            "focal_length": 35.0, "sensor_width": 23.76, "sensor_height": 13.365,
            "location": [0, 0, 0],
            "rotation": {"pitch": 0, "yaw": 0, "roll": 0},
            "scale": [1, 1, 1],
            "render_target": {"width": 1920, "height": 1080, "image": "frame.png"},
            "camera_data_component": true
        },
        {"name": "SceneCapture2D_0", "type": "SceneCapture", "fov_angle": 90.0, ...}
    ],
    "actors": [
        {
            "name": "BP_MetaHuman_C_0",
            "skeletal_meshes": [
                {"name": "Body", "bones": [{"name": "root", "location": [0, 0, 0]}]}
            ]
        }
    ]
}

"rotation" may also be a quaternion: {"x": .., "y": .., "z": .., "w": ..}.
A render target "image" stands in for the renderer: capturing loads it.
"""

import json

import numpy as np

from .base_reader import BaseReader
from core.scene_data import (
    CaptureSource,
    CineCameraParams,
    Pose,
    RenderTarget,
    Rotator,
    SceneActor,
    SceneCamera,
    SceneCaptureParams,
    SkeletalBody,
)
from core.transforms import quaternion_to_rotator

CINE_CAMERA_TYPES = {'CineCamera', 'CineCameraActor'}
SCENE_CAPTURE_TYPES = {'SceneCapture', 'SceneCapture2D'}


class SceneFileReader(BaseReader):
    """JSON scene description reader"""

    def __init__(self, scene_file):
        """Load and parse the scene file

        Args:
            scene_file: Path to .json scene description

        Raises:
            ValueError: If the file is not a valid scene description
        """
        super().__init__(scene_file)
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                self.scene = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse scene file {scene_file}: {e}")

        if not isinstance(self.scene, dict):
            raise ValueError(f"Scene file must contain a JSON object: {scene_file}")

    def get_format_name(self):
        return "Scene JSON"

    def extract_render_resolution(self):
        resolution = self.scene.get('render_resolution')
        if resolution:
            return (int(resolution[0]), int(resolution[1]))
        return None

    def get_cameras(self):
        if self._cameras_cache is None:
            self._cameras_cache = []
            for entry in self.scene.get('cameras', []):
                camera = self._parse_camera(entry)
                if camera is not None:
                    self._cameras_cache.append(camera)
        return self._cameras_cache

    def get_actors(self):
        if self._actors_cache is None:
            self._actors_cache = [self._parse_actor(entry) for entry in self.scene.get('actors', [])]
        return self._actors_cache

    def _parse_camera(self, entry):
        name = entry.get('name', '')
        camera_type = entry.get('type', 'CineCamera')

        if camera_type in CINE_CAMERA_TYPES:
            params = CineCameraParams(
                focal_length=float(entry.get('focal_length', 35.0)),
                sensor_width=float(entry.get('sensor_width', 23.76)),
                sensor_height=float(entry.get('sensor_height', 13.365))
            )
        elif camera_type in SCENE_CAPTURE_TYPES:
            params = SceneCaptureParams(fov_angle=float(entry.get('fov_angle', 90.0)))
        else:
            self.warn(f"Camera {name} has unsupported type '{camera_type}'. Skipped.")
            return None

        render_target = None
        capture_callback = None
        rt_entry = entry.get('render_target')
        if rt_entry:
            render_target = RenderTarget(
                width=int(rt_entry['width']),
                height=int(rt_entry['height']),
                capture_source=CaptureSource(rt_entry.get('capture_source', 'final_color_hdr'))
            )
            if rt_entry.get('image'):
                capture_callback = self._make_image_capture(rt_entry['image'])

        return SceneCamera(
            name=name,
            label=entry.get('label', ''),
            params=params,
            pose=self._parse_pose(entry),
            render_target=render_target,
            has_data_component=bool(entry.get('camera_data_component', True)),
            capture_callback=capture_callback
        )

    def _parse_pose(self, entry):
        rotation = entry.get('rotation', {})
        if all(k in rotation for k in ('x', 'y', 'z', 'w')):
            rotator = quaternion_to_rotator(rotation['x'], rotation['y'], rotation['z'], rotation['w'])
        else:
            rotator = Rotator(
                pitch=float(rotation.get('pitch', 0.0)),
                yaw=float(rotation.get('yaw', 0.0)),
                roll=float(rotation.get('roll', 0.0))
            )

        return Pose(
            location=self._float3(entry.get('location', (0.0, 0.0, 0.0))),
            rotation=rotator,
            scale=self._float3(entry.get('scale', (1.0, 1.0, 1.0)))
        )

    def _parse_actor(self, entry):
        actor_name = entry.get('name', 'UnknownActor')
        bodies = []
        for mesh in entry.get('skeletal_meshes', []):
            bones = []
            for bone in mesh.get('bones', []):
                if isinstance(bone, dict):
                    bones.append((bone['name'], self._float3(bone['location'])))
                else:
                    bones.append((bone[0], self._float3(bone[1])))
            bodies.append(SkeletalBody(name=mesh.get('name', ''), owner_name=actor_name, bones=bones))

        return SceneActor(name=actor_name, label=entry.get('label', ''), skeletal_bodies=bodies)

    def _make_image_capture(self, image_path):
        """Capture callback loading a pre-rendered frame into the render target"""
        path = self.file_path.parent / image_path

        def capture(camera):
            from PIL import Image
            with Image.open(path) as image:
                camera.render_target.pixels = np.array(image.convert('RGBA'))

        return capture

    @staticmethod
    def _float3(value):
        """Extract three floats from a value, handling nested lists"""
        if isinstance(value, (list, tuple)) and len(value) > 0 and isinstance(value[0], (list, tuple)):
            value = value[0]
        return (float(value[0]), float(value[1]), float(value[2]))
