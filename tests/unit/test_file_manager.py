"""Unit tests for RecordingFileManager class."""

import pytest
from pathlib import Path

from translate2me.storage.file_manager import RecordingFileManager


@pytest.mark.unit
class TestRecordingFileManager:
    """Test cases for RecordingFileManager class."""

    def test_initialization(self, temp_data_dir):
        fm = RecordingFileManager(temp_data_dir)

        assert fm.recordings_dir == Path(temp_data_dir)
        assert fm.recordings_dir.exists()
        assert fm.keep_recordings is False

    def test_initialization_creates_missing_directory(self, temp_data_dir):
        target = Path(temp_data_dir) / "nested" / "recordings"
        fm = RecordingFileManager(str(target))

        assert fm.recordings_dir.is_dir()

    def test_initialization_default_uses_temp_directory(self):
        fm = RecordingFileManager()

        assert fm.recordings_dir.exists()
        assert fm.recordings_dir.name.startswith("translate2me_")
        fm.recordings_dir.rmdir()

    def test_new_session_id_format(self, temp_data_dir):
        fm = RecordingFileManager(temp_data_dir)

        session_id = fm.new_session_id()

        # YYYYMMDD_HHMMSS_xxxx
        assert len(session_id) == 20
        assert session_id.count("_") == 2

    def test_allocate_recording_path_is_unique_per_session(self, temp_data_dir):
        fm = RecordingFileManager(temp_data_dir)

        first = fm.allocate_recording_path("20240101_120000_aaaa")
        second = fm.allocate_recording_path("20240101_120000_bbbb")

        assert first != second
        assert first.parent == fm.recordings_dir
        assert first.suffix == ".wav"

    def test_allocate_recording_path_never_reuses_existing_file(self, temp_data_dir):
        fm = RecordingFileManager(temp_data_dir)
        existing = fm.allocate_recording_path("20240101_120000_aaaa")
        existing.write_bytes(b"old")

        path = fm.allocate_recording_path("20240101_120000_aaaa")

        assert path != existing
        assert not path.exists()
        assert existing.read_bytes() == b"old"

    def test_discard_deletes_file(self, temp_data_dir):
        fm = RecordingFileManager(temp_data_dir)
        path = fm.allocate_recording_path(fm.new_session_id())
        path.write_bytes(b"data")

        assert fm.discard(path) is True
        assert not path.exists()

    def test_discard_missing_file(self, temp_data_dir):
        fm = RecordingFileManager(temp_data_dir)

        assert fm.discard(Path(temp_data_dir) / "missing.wav") is False

    def test_discard_keeps_file_when_configured(self, temp_data_dir):
        fm = RecordingFileManager(temp_data_dir, keep_recordings=True)
        path = fm.allocate_recording_path(fm.new_session_id())
        path.write_bytes(b"data")

        assert fm.discard(path) is False
        assert path.exists()

    def test_cleanup_removes_temporary_directory(self):
        fm = RecordingFileManager()
        path = fm.allocate_recording_path(fm.new_session_id())
        path.write_bytes(b"data")

        fm.cleanup()

        assert fm.is_temporary is True
        assert not fm.recordings_dir.exists()

    def test_cleanup_keeps_configured_directory(self, temp_data_dir):
        fm = RecordingFileManager(temp_data_dir)

        fm.cleanup()

        assert fm.is_temporary is False
        assert Path(temp_data_dir).exists()

    def test_cleanup_keeps_temporary_directory_with_kept_recordings(self):
        fm = RecordingFileManager(keep_recordings=True)

        fm.cleanup()

        assert fm.recordings_dir.exists()
        fm.recordings_dir.rmdir()
