"""Shared test fixtures for mediacompat."""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from mediacompat.domain.models import AudioTrack, MediaMetadataRecord


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def make_record():
    """Factory for records that pass every check of the default policy.

    Keyword arguments override individual fields.
    """

    def _make(**overrides) -> MediaMetadataRecord:
        fields = {
            "file_path": "/media/movies/Movie (2020).mp4",
            "container": "MP4",
            "video_codec": "H.264",
            "video_codec_tag": "avc1",
            "is_codec_tag_correct": True,
            "bit_depth": 8,
            "width": 1920,
            "height": 1080,
            "frame_rate": 23.976,
            "is_hdr": True,
            "hdr_type": "HDR10",
            "is_fast_start": True,
            "audio_tracks": (AudioTrack(codec="AAC", channels=6, language="English"),),
            "subtitle_tracks": (),
            "file_size": 2_000_000_000,
            "duration_seconds": 7200.0,
        }
        fields.update(overrides)
        return MediaMetadataRecord(**fields)

    return _make


@pytest.fixture
def write_file(temp_dir: Path):
    """Write text to a file under temp_dir and return its path."""

    def _write(name: str, content: str) -> Path:
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test reconfigures them."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
