#!/usr/bin/env python3
"""
Base Exporter Module
Abstract base class ensuring consistent interface across all exporters

Exporters receive an ExportContext (owner name, output root, logger)
instead of reaching into scene state. Every file is written on its own:
a failed write is logged and reported, and never stops sibling files.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from core.errors import FileWriteFailure

if TYPE_CHECKING:
    from core.scene_data import ExportContext


class BaseExporter(ABC):
    """Abstract base class for all data exporters

    Provides consistent interface and common utilities for all exporters.
    Each exporter (camera data, bone data, frames) inherits from this class.

    Key principles:
    - Single Responsibility: Each exporter handles ONE kind of output
    - Consistent Interface: All exporters return the same result dict
    - Shared Utilities: Logging, directory creation, file writes provided here
    - Independent Writes: One failed file never blocks the others
    """

    def __init__(self, context: 'ExportContext'):
        """Initialize exporter

        Args:
            context: ExportContext with owner display name, output root and
                     progress callback
        """
        self.context = context

    @property
    def output_root(self):
        return Path(self.context.output_root)

    def log(self, message):
        """Send progress/status message

        Args:
            message: Message to log
        """
        self.context.log(message)

    @abstractmethod
    def get_format_name(self):
        """Return human-readable format name

        Returns:
            str: Format name (e.g., "Camera Data", "Bone Data")
        """
        pass

    def validate_output_path(self, output_path):
        """Validate and create output directory if needed

        Args:
            output_path: Directory path to validate

        Returns:
            Path: Validated Path object

        Raises:
            FileWriteFailure: If the directory cannot be created
        """
        path = Path(output_path)

        # Create directory if it doesn't exist
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileWriteFailure(f"Cannot create output directory {path}: {e}")

        # Verify we can write to the directory
        if not path.is_dir():
            raise FileWriteFailure(f"Output path is not a directory: {path}")

        return path

    def write_text_file(self, file_path, content, description):
        """Write a string to a file, creating its directory first

        Args:
            file_path: Destination path
            content: Text to write
            description: What is being written, for log messages

        Returns:
            bool: True if the file was written
        """
        file_path = Path(file_path)
        try:
            self.validate_output_path(file_path.parent)
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except (OSError, FileWriteFailure) as e:
            self.log(f"ERROR: Failed to save {description} to: {file_path} ({e})")
            return False

        self.log(f"Successfully saved {description} to: {file_path}")
        return True

    def new_result(self):
        """Empty result dict shared by all exporters"""
        return {
            'success': False,
            'files': [],
            'failed': [],
            'message': ''
        }

    def finish_result(self, result):
        """Fill success flag and message from the file lists"""
        result['success'] = bool(result['files']) and not result['failed']
        result['message'] = f"{len(result['files'])} file(s) written, {len(result['failed'])} failed"
        return result

    def get_export_summary(self, result, subject=None):
        """Generate human-readable summary of export results

        Args:
            result: Export result dict from export() method
            subject: What was exported (defaults to the owner display name)

        Returns:
            str: Formatted summary text
        """
        lines = []
        status = "✓" if result.get('success') else "✗"
        lines.append(f"{status} {self.get_format_name()} Export ({subject or self.context.display_name})")

        files = result.get('files', [])
        lines.append(f"  Files created: {len(files)}")
        for file_path in files:
            lines.append(f"    - {Path(file_path).name}")

        for file_path in result.get('failed', []):
            lines.append(f"    ✗ {Path(file_path).name}")

        if result.get('message'):
            lines.append(f"  {result['message']}")

        return "\n".join(lines)
