#!/usr/bin/env python3
"""
Frame Exporter Module
Exports a captured render target to CameraFrames/<filename>.png
"""

import numpy as np
from PIL import Image

from .base_exporter import BaseExporter

CAMERA_FRAMES_FOLDER = "CameraFrames"


class FrameExporter(BaseExporter):
    """Render target to PNG exporter"""

    def get_format_name(self):
        return "Camera Frame"

    def export(self, render_target, filename):
        """Export render target pixels as PNG

        Args:
            render_target: RenderTarget with captured pixels
            filename: File name (".png" appended if missing)

        Returns:
            dict: Export results with keys 'success', 'files', 'failed', 'message'
        """
        result = self.new_result()

        if render_target is None or render_target.pixels is None:
            self.log(f"Warning: Render target has no captured pixels. Skipping frame {filename}.")
            result['message'] = "No captured pixels"
            return result

        if not filename.lower().endswith('.png'):
            filename = f"{filename}.png"
        file_path = self.output_root / CAMERA_FRAMES_FOLDER / filename

        try:
            self.validate_output_path(file_path.parent)
            pixels = np.asarray(render_target.pixels)
            if pixels.dtype != np.uint8:
                # Float render targets are stored in [0, 1]
                pixels = (np.clip(pixels, 0.0, 1.0) * 255).astype(np.uint8)
            Image.fromarray(pixels).save(str(file_path), format='PNG')
        except Exception as e:
            self.log(f"ERROR: Failed to export render target to: {file_path} ({e})")
            result['failed'].append(str(file_path))
            return self.finish_result(result)

        self.log(f"Exporting RenderTarget to: {file_path}")
        result['files'].append(str(file_path))
        return self.finish_result(result)
