#!/usr/bin/env python3
"""
Camera Coordinator Module
Runs one synchronized capture-then-export pass over every scene camera.

State machine:  IDLE -> SCHEDULED -> EXTRACTING -> IDLE

The pass starts either when the scene signals readiness
(notify_scene_ready) or, as a legacy fallback, after a fixed delay armed by
begin_play(). It runs exactly once and is never re-armed automatically;
extract_and_save_all_camera_data() is the explicit manual trigger.
"""

from enum import Enum

from .camera_model import compute_intrinsics, get_extrinsics
from .errors import ExtractionError
from .scene_data import ExportSettings


class CoordinatorState(Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    EXTRACTING = "extracting"


class SceneCameraCoordinator:
    """Synchronized camera data extraction for a whole scene

    For each camera the render target is captured BEFORE intrinsics and
    extrinsics are read, so the exported frame and the exported matrices
    describe the same instant.
    """

    def __init__(self, reader, context, settings=None,
                 camera_exporter=None, frame_exporter=None):
        """Initialize coordinator

        Args:
            reader: Scene reader providing get_cameras()
            context: ExportContext (output root + logger)
            settings: ExportSettings (defaults if None)
            camera_exporter: Camera data exporter (defaults to CameraDataExporter)
            frame_exporter: Frame exporter (defaults to FrameExporter)
        """
        self.reader = reader
        self.context = context
        self.settings = settings if settings is not None else ExportSettings()

        if camera_exporter is None:
            from exporters.camera_data_exporter import CameraDataExporter
            camera_exporter = CameraDataExporter(context)
        if frame_exporter is None:
            from exporters.frame_exporter import FrameExporter
            frame_exporter = FrameExporter(context)
        self.camera_exporter = camera_exporter
        self.frame_exporter = frame_exporter

        self.state = CoordinatorState.IDLE
        self._timer_handle = None
        self._pass_done = False
        self.last_results = None

    def log(self, message):
        self.context.log(message)

    def begin_play(self, scheduler):
        """Arm the one-shot delayed extraction (legacy fallback)

        Args:
            scheduler: Object with call_later(delay, callback), e.g. an asyncio loop
        """
        if self.state != CoordinatorState.IDLE or self._pass_done:
            return
        self.state = CoordinatorState.SCHEDULED
        self._timer_handle = scheduler.call_later(
            self.settings.data_extraction_delay, self._on_timer
        )

    def notify_scene_ready(self):
        """Run the pass now, the scene reports every object is initialized

        Returns:
            dict: Pass results, or None if the pass already ran
        """
        if self._pass_done or self.state == CoordinatorState.EXTRACTING:
            return None
        if self._timer_handle is not None and hasattr(self._timer_handle, 'cancel'):
            self._timer_handle.cancel()
        self._timer_handle = None
        return self.extract_and_save_all_camera_data()

    def _on_timer(self):
        self._timer_handle = None
        if self._pass_done:
            return None
        return self.extract_and_save_all_camera_data()

    def extract_and_save_all_camera_data(self):
        """Capture and export every supported camera in the scene

        Returns:
            dict: Results with keys:
                - 'success': bool, True if at least one camera was exported
                - 'cameras': Camera name -> per-camera result
                - 'skipped': Camera names skipped (no data component)
                - 'duplicates': Camera names seen more than once (last one wins)
                - 'message': Summary message
        """
        self.state = CoordinatorState.EXTRACTING
        results = {
            'success': False,
            'cameras': {},
            'skipped': [],
            'duplicates': [],
            'message': ''
        }

        try:
            self.log("Starting synchronized camera data extraction.")
            cameras = self.reader.get_cameras()
            self.log(f"Found {len(cameras)} candidate camera actors.")

            if not cameras:
                self.log("Warning: No cine camera or scene capture actors found in the scene to process.")
                results['message'] = "No cameras found"
                return results

            for camera in cameras:
                camera_name = camera.display_name
                if not camera.has_data_component:
                    self.log(f"Warning: Camera actor {camera_name} does not have a camera data component. "
                             f"Skipping data save.")
                    results['skipped'].append(camera_name)
                    continue

                if camera_name in results['cameras']:
                    self.log(f"Warning: Duplicate camera name {camera_name}. "
                             f"Its earlier camera data files will be overwritten.")
                    results['duplicates'].append(camera_name)

                results['cameras'][camera_name] = self._process_camera(camera)

            exported = sum(1 for r in results['cameras'].values() if r['success'])
            results['success'] = exported > 0
            results['message'] = (f"Exported {exported}/{len(results['cameras'])} camera(s), "
                                  f"skipped {len(results['skipped'])}")
            self.log("Finished synchronized camera data extraction.")
            return results
        finally:
            self._pass_done = True
            self.state = CoordinatorState.IDLE
            self.last_results = results

    def _process_camera(self, camera):
        camera_name = camera.display_name
        result = {
            'success': False,
            'files': [],
            'message': ''
        }

        render_target = camera.render_target
        if render_target is not None:
            # Capture first so the frame matches the exported pose
            try:
                camera.capture_scene()
            except Exception as e:
                self.log(f"ERROR: Scene capture failed for actor: {camera_name} ({e}). Skipping data save.")
                result['message'] = str(e)
                return result
        else:
            self.log(f"Warning: Render target is invalid for actor: {camera_name}. "
                     f"Exporting camera data without a frame.")

        try:
            extrinsics = get_extrinsics(camera)
            intrinsics = compute_intrinsics(
                camera.params,
                render_target.size if render_target is not None else None,
                log=self.log,
                default_image_size=self.settings.default_image_size
            )
        except ExtractionError as e:
            self.log(f"ERROR: Failed to get intrinsics for actor: {camera_name} ({e})")
            result['message'] = str(e)
            return result

        data_result = self.camera_exporter.export(
            camera_name, extrinsics, intrinsics,
            filename=self.settings.camera_data_filename or None
        )
        self.log(self.camera_exporter.get_export_summary(data_result, camera_name))
        result['files'].extend(data_result['files'])
        result['intrinsics'] = intrinsics
        result['extrinsics'] = extrinsics

        if render_target is not None and self.settings.export_frames:
            frame_name = self.settings.render_target_image_filename or f"{camera_name}_Frame.png"
            frame_result = self.frame_exporter.export(render_target, frame_name)
            self.log(self.frame_exporter.get_export_summary(frame_result, camera_name))
            result['files'].extend(frame_result['files'])

        result['success'] = data_result['success']
        result['message'] = data_result['message']
        if result['success']:
            self.log(f"✓ Saved synchronized data for: {camera_name}")
        return result
