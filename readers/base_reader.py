#!/usr/bin/env python3
"""
Base Reader Module
Abstract interface for reading scenes (scene description files, USD, etc.)
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Tuple

from core.scene_data import SceneActor, SceneCamera


class BaseReader(ABC):
    """Abstract base class for scene readers

    Provides a consistent interface for the scene collaborators the
    extraction pipeline needs: camera discovery and skeletal actors.
    All format-specific readers must implement these methods.
    """

    def __init__(self, file_path: str):
        """Initialize reader with file path

        Args:
            file_path: Path to the scene file
        """
        self.file_path = Path(file_path)
        self._cameras_cache = None
        self._actors_cache = None
        self.warnings: List[str] = []

    @abstractmethod
    def get_format_name(self) -> str:
        """Return human-readable format name (e.g., 'Scene JSON', 'USD')"""
        pass

    @abstractmethod
    def get_cameras(self) -> List[SceneCamera]:
        """Get all cine camera and scene capture objects in the scene (cached)

        Returns:
            list: SceneCamera objects
        """
        pass

    @abstractmethod
    def get_actors(self) -> List[SceneActor]:
        """Get all actors owning skeletal components (cached)

        Returns:
            list: SceneActor objects
        """
        pass

    def extract_render_resolution(self) -> Optional[Tuple[int, int]]:
        """Extract render resolution from scene metadata

        Returns:
            tuple: (width, height) in pixels, or None if the scene has none
        """
        return None  # Default implementation - override if supported

    def warn(self, message: str):
        """Record a non-fatal problem found while reading"""
        self.warnings.append(message)
