#!/usr/bin/env python3
"""
USD Reader Module
Centralized USD reading utilities implementing the BaseReader interface

UsdGeom.Camera prims are read as cine cameras (focal length and apertures
are both in millimeters). UsdSkel.Skeleton prims are read as skeletal
components, grouped into actors by their parent prim.
"""

import numpy as np
from typing import List, Optional, Tuple

from .base_reader import BaseReader
from core.scene_data import CineCameraParams, RenderTarget, SceneActor, SceneCamera, SkeletalBody
from core.transforms import decompose_matrix


class USDReader(BaseReader):
    """USD file reader implementing BaseReader interface

    Reads USD files (.usd, .usda, .usdc) and samples every camera and
    skeleton at a single time code.
    """

    def __init__(self, usd_file: str, time_code: Optional[float] = None):
        """Open USD stage and initialize

        Args:
            usd_file: Path to USD file (.usd, .usda, .usdc)
            time_code: Time code to sample (None for the default time)
        """
        super().__init__(usd_file)

        # Import USD libraries
        try:
            from pxr import Usd, UsdGeom, UsdSkel
            self.Usd = Usd
            self.UsdGeom = UsdGeom
            self.UsdSkel = UsdSkel
        except ImportError as e:
            raise ImportError(
                f"USD Python library (pxr) not found: {e}\n"
                "Install with: pip install usd-core"
            )

        self.stage = Usd.Stage.Open(str(self.file_path))
        if not self.stage:
            raise ValueError(f"Failed to open USD file: {usd_file}")

        if time_code is None:
            self.time_code = Usd.TimeCode.Default()
        else:
            self.time_code = Usd.TimeCode(time_code)

    def get_format_name(self) -> str:
        """Return human-readable format name"""
        return "USD"

    def get_cameras(self) -> List[SceneCamera]:
        """Get all camera prims as cine cameras (cached)"""
        if self._cameras_cache is None:
            resolution = self.extract_render_resolution()
            xform_cache = self.UsdGeom.XformCache(self.time_code)
            self._cameras_cache = []
            for prim in self.stage.Traverse():
                if prim.IsA(self.UsdGeom.Camera):
                    self._cameras_cache.append(self._read_camera(prim, xform_cache, resolution))
        return self._cameras_cache

    def _read_camera(self, prim, xform_cache, resolution):
        camera = self.UsdGeom.Camera(prim)

        focal_length = camera.GetFocalLengthAttr().Get(self.time_code)
        h_aperture_mm = camera.GetHorizontalApertureAttr().Get(self.time_code)
        v_aperture_mm = camera.GetVerticalApertureAttr().Get(self.time_code)

        # Provide defaults if not set
        if focal_length is None:
            focal_length = 35.0
        if h_aperture_mm is None:
            h_aperture_mm = 36.0
        if v_aperture_mm is None:
            v_aperture_mm = 24.0

        world_matrix = np.array(xform_cache.GetLocalToWorldTransform(prim))

        render_target = None
        if resolution is not None:
            render_target = RenderTarget(width=resolution[0], height=resolution[1])

        return SceneCamera(
            name=prim.GetName(),
            params=CineCameraParams(
                focal_length=float(focal_length),
                sensor_width=float(h_aperture_mm),
                sensor_height=float(v_aperture_mm)
            ),
            pose=decompose_matrix(world_matrix),
            render_target=render_target
        )

    def get_actors(self) -> List[SceneActor]:
        """Get skeletons grouped by parent prim (cached)"""
        if self._actors_cache is None:
            skel_cache = self.UsdSkel.Cache()
            xform_cache = self.UsdGeom.XformCache(self.time_code)
            actors = {}

            for prim in self.stage.Traverse():
                if not prim.IsA(self.UsdSkel.Skeleton):
                    continue
                body = self._read_skeleton(prim, skel_cache, xform_cache)
                if body is None:
                    continue
                if body.owner_name not in actors:
                    actors[body.owner_name] = SceneActor(name=body.owner_name, skeletal_bodies=[])
                actors[body.owner_name].skeletal_bodies.append(body)

            self._actors_cache = list(actors.values())
        return self._actors_cache

    def _read_skeleton(self, prim, skel_cache, xform_cache) -> Optional[SkeletalBody]:
        owner = prim.GetParent()
        owner_name = owner.GetName() if owner and not owner.IsPseudoRoot() else prim.GetName()

        query = skel_cache.GetSkelQuery(self.UsdSkel.Skeleton(prim))
        if not query:
            self.warn(f"Skeleton {prim.GetPath()} could not be queried. Skipped.")
            return None

        joints = query.GetJointOrder()
        xforms = query.ComputeJointWorldTransforms(xform_cache)
        if xforms is None or len(xforms) != len(joints):
            self.warn(f"Skeleton {prim.GetPath()} has no valid joint transforms. Skipped.")
            return None

        bones = []
        for joint, xform in zip(joints, xforms):
            # Joint paths look like "root/pelvis/spine_01"
            name = str(joint).split('/')[-1]
            t = xform.ExtractTranslation()
            bones.append((name, (float(t[0]), float(t[1]), float(t[2]))))

        return SkeletalBody(name=prim.GetName(), owner_name=owner_name, bones=bones)

    def extract_render_resolution(self) -> Optional[Tuple[int, int]]:
        """Extract render resolution from the first UsdRender settings prim

        Returns:
            tuple: (width, height) in pixels, or None if the stage has none
        """
        from pxr import UsdRender

        for prim in self.stage.Traverse():
            if prim.IsA(UsdRender.Settings):
                resolution = UsdRender.Settings(prim).GetResolutionAttr().Get()
                if resolution is not None:
                    return (int(resolution[0]), int(resolution[1]))
        return None
