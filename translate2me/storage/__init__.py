"""Recording file storage."""

from .file_manager import RecordingFileManager

__all__ = [
    "RecordingFileManager",
]
