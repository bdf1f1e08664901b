"""File management for per-session recording files."""

import logging
import random
import shutil
import string
import tempfile
from pathlib import Path
from datetime import datetime
from typing import Optional


logger = logging.getLogger(__name__)


class RecordingFileManager:
    """Allocates a unique audio file per recording session and removes it afterwards."""

    def __init__(self, recordings_dir: Optional[str] = None, keep_recordings: bool = False):
        """Initialize file manager.

        Args:
            recordings_dir: Directory for recordings. None uses a fresh
                            directory under the system temp directory.
            keep_recordings: If True, discard() leaves files in place
        """
        self.is_temporary = recordings_dir is None
        if recordings_dir is None:
            recordings_dir = tempfile.mkdtemp(prefix="translate2me_")
        self.recordings_dir = Path(recordings_dir)
        self.keep_recordings = keep_recordings

        self.recordings_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"RecordingFileManager initialized with recordings_dir: {self.recordings_dir}")

    def new_session_id(self) -> str:
        """Create a new session ID with timestamp and random suffix.

        Returns:
            Session ID (YYYYMMDD_HHMMSS_xxxx)
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        random_suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=4))
        return f"{timestamp}_{random_suffix}"

    def allocate_recording_path(self, session_id: str) -> Path:
        """Get the audio file path for a session.

        Existing files are never reused; a clashing ID gets a fresh suffix.
        """
        path = self.recordings_dir / f"recording_{session_id}.wav"
        while path.exists():
            logger.warning(f"Recording file already exists, picking a new name: {path}")
            path = self.recordings_dir / f"recording_{self.new_session_id()}.wav"
        logger.debug(f"Allocated recording path: {path}")
        return path

    def discard(self, path: Path) -> bool:
        """Remove a recording once it has been transcribed.

        Returns:
            True if the file was deleted
        """
        if self.keep_recordings:
            logger.debug(f"Keeping recording: {path}")
            return False

        try:
            Path(path).unlink()
            logger.debug(f"Deleted recording: {path}")
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Could not delete recording {path}: {e}")
            return False

    def cleanup(self) -> None:
        """Remove the recordings directory if it was created under the temp directory.

        Configured directories and kept recordings are left alone.
        """
        if not self.is_temporary or self.keep_recordings:
            return

        try:
            shutil.rmtree(self.recordings_dir)
            logger.debug(f"Removed recordings directory: {self.recordings_dir}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove recordings directory {self.recordings_dir}: {e}")
