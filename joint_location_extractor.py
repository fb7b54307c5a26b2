#!/usr/bin/env python3
"""
Joint Location Extractor - Main Orchestrator Module
Coordinates keypoint and camera data extraction using modular readers and exporters
Supports JSON scene descriptions (.json) and USD (.usd, .usda, .usdc) input

Every actor's skeletal components are exported first, then one synchronized
camera pass captures each camera's frame and writes its intrinsics and
extrinsics next to the keypoints.
"""

import asyncio
from pathlib import Path

from readers import create_reader, get_file_type
from core.scene_data import ExportContext, ExportSettings
from core.skeletal_extractor import SkeletalKeypointExtractor
from core.camera_coordinator import SceneCameraCoordinator, CoordinatorState


class JointLocationExtractor:
    """Scene keypoint and camera data extractor (orchestrator/facade)

    This class coordinates the extraction process:
    1. Read input scene ONCE (via readers module)
    2. Export bone locations of every actor (via SkeletalKeypointExtractor)
    3. Run the synchronized camera pass (via SceneCameraCoordinator)

    Output layout under the output directory:
    - <Actor>_<Region>_BoneLocations.txt/.json (all bones)
    - <Subset>/... (curated face, upper body and lower body keypoints)
    - CameraData/<Camera>.txt and CameraData/<Camera>/*.json
    - CameraFrames/<Camera>_Frame.png
    """

    def __init__(self, progress_callback=None):
        """Initialize extractor

        Args:
            progress_callback: Optional function to call for progress updates
                              Signature: callback(message: str) -> None
        """
        self.progress_callback = progress_callback

    def log(self, message):
        """Send progress updates to callback"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    def extract(self, input_file, output_dir, settings=None, use_delay=False):
        """Extract keypoints and camera data from a scene

        Args:
            input_file: Path to input scene file (.json, .usd, .usda, .usdc)
            output_dir: Output root directory
            settings: ExportSettings (defaults if None)
            use_delay: Wait settings.data_extraction_delay seconds before the
                       camera pass instead of running it as soon as the scene is read

        Returns:
            dict: Results with keys:
                - 'success': bool
                - 'actors': Actor name -> component results
                - 'cameras': Camera pass results
                - 'message': Summary message
        """
        settings = settings if settings is not None else ExportSettings()

        try:
            input_path = Path(input_file)
            file_type = get_file_type(str(input_path))
            format_name = "USD" if file_type == 'usd' else "Scene JSON"

            self.log(f"\n{'='*60}")
            self.log(f"Joint Location Extractor")
            self.log(f"{'='*60}")
            self.log(f"Input: {input_file} ({format_name})")
            self.log(f"Output: {output_dir}")
            self.log(f"{'='*60}\n")

            results = {
                'success': False,
                'actors': {},
                'cameras': None,
                'message': ''
            }

            output_path = Path(output_dir)
            output_path.mkdir(parents=True, exist_ok=True)
            context = ExportContext("Scene", output_path, self.progress_callback)

            # Step 1: Read input file ONCE (auto-detect format)
            self.log(f"Step 1/3: Reading {format_name} file...")
            reader = create_reader(input_file)
            self.log(f"  Reader: {reader.get_format_name()}")
            actors = reader.get_actors()
            cameras = reader.get_cameras()
            for warning in reader.warnings:
                self.log(f"Warning: {warning}")
            self.log(f"  - Actors: {len(actors)}")
            self.log(f"  - Cameras: {len(cameras)}")

            # Step 2: Bone locations per actor
            self.log("\nStep 2/3: Extracting skeletal keypoints...")
            for actor in actors:
                self.log(f"\n--- {actor.name} ---")
                extractor = SkeletalKeypointExtractor(context.for_owner(actor.name), settings)
                results['actors'][actor.name] = extractor.extract_actor(actor)

            # Step 3: Synchronized camera pass
            self.log("\nStep 3/3: Extracting camera data...")
            coordinator = SceneCameraCoordinator(reader, context, settings)
            if use_delay:
                self.log(f"  Waiting {settings.data_extraction_delay}s before capture...")
                results['cameras'] = asyncio.run(self._run_delayed(coordinator))
            else:
                results['cameras'] = coordinator.notify_scene_ready()

            # Summary
            self.log(f"\n{'='*60}")
            self.log(f"Extraction Complete!")
            self.log(f"{'='*60}")

            component_results = [r for actor in results['actors'].values() for r in actor.values()]
            actors_ok = sum(1 for r in component_results if r.get('success'))
            cameras_ok = 0
            if results['cameras']:
                cameras_ok = sum(1 for r in results['cameras']['cameras'].values() if r.get('success'))

            files_written = sum(len(p.get('files', [])) for r in component_results for p in r['partitions'].values())
            if results['cameras']:
                files_written += sum(len(r['files']) for r in results['cameras']['cameras'].values())

            results['success'] = actors_ok > 0 or cameras_ok > 0
            results['message'] = (f"Exported {actors_ok}/{len(component_results)} skeletal component(s), "
                                  f"{cameras_ok} camera(s), {files_written} file(s)")

            self.log(f"\nSummary:")
            for actor_name, components in results['actors'].items():
                if not components:
                    self.log(f"  ✗ {actor_name}: no Body/Face components")
                for component_name, component in components.items():
                    status = "✓" if component.get('success') else "✗"
                    missing = sum(len(v) for v in component['unresolved_joints'].values())
                    self.log(f"  {status} {actor_name}/{component_name}: "
                             f"{len(component['partitions'])} partition(s), {missing} unresolved joint(s)")
            if results['cameras']:
                for camera_name, camera in results['cameras']['cameras'].items():
                    status = "✓" if camera.get('success') else "✗"
                    self.log(f"  {status} Camera {camera_name}: {camera.get('message', 'N/A')}")
                for camera_name in results['cameras']['skipped']:
                    self.log(f"  - Camera {camera_name}: skipped")

            self.log(f"\n{results['message']}")
            self.log(f"{'='*60}\n")

            return results

        except Exception as e:
            self.log(f"\nERROR: {str(e)}")
            import traceback
            self.log(traceback.format_exc())
            return {
                'success': False,
                'message': f"Extraction failed: {str(e)}"
            }

    @staticmethod
    async def _run_delayed(coordinator):
        """Arm the delayed pass on the running loop and wait for it"""
        coordinator.begin_play(asyncio.get_running_loop())
        while coordinator.state != CoordinatorState.IDLE:
            await asyncio.sleep(0.05)
        return coordinator.last_results
