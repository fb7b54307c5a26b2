#!/usr/bin/env python3
"""
Readers Module
Scene readers for different formats (JSON scene description, USD)
"""

from pathlib import Path

from .base_reader import BaseReader
from .scene_file_reader import SceneFileReader

# Supported file extensions
SCENE_EXTENSIONS = {'.json'}
USD_EXTENSIONS = {'.usd', '.usda', '.usdc'}
SUPPORTED_EXTENSIONS = SCENE_EXTENSIONS | USD_EXTENSIONS


def create_reader(input_file):
    """Factory function to create appropriate reader based on file extension

    Args:
        input_file: Path to input scene file

    Returns:
        BaseReader: SceneFileReader or USDReader instance

    Raises:
        ValueError: If file extension is not supported
    """
    path = Path(input_file)
    ext = path.suffix.lower()

    if ext in SCENE_EXTENSIONS:
        return SceneFileReader(input_file)
    elif ext in USD_EXTENSIONS:
        # Lazy import to avoid requiring USD for scene description files
        from .usd_reader import USDReader
        return USDReader(input_file)
    else:
        raise ValueError(
            f"Unsupported file format: {ext}\n"
            f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )


def get_file_type(input_file):
    """Get the file type string for a given file

    Args:
        input_file: Path to input scene file

    Returns:
        str: 'scene', 'usd', or 'unknown'
    """
    ext = Path(input_file).suffix.lower()
    if ext in SCENE_EXTENSIONS:
        return 'scene'
    elif ext in USD_EXTENSIONS:
        return 'usd'
    return 'unknown'


def is_supported_format(input_file):
    """Check if a file has a supported format

    Args:
        input_file: Path to input scene file

    Returns:
        bool: True if format is supported
    """
    ext = Path(input_file).suffix.lower()
    return ext in SUPPORTED_EXTENSIONS


__all__ = [
    'BaseReader',
    'SceneFileReader',
    'SUPPORTED_EXTENSIONS',
    'create_reader',
    'get_file_type',
    'is_supported_format',
]
