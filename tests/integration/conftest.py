"""Fixtures for CLI tests."""

import json

import pytest
from click.testing import CliRunner

from mediacompat.cli import main
from mediacompat.config.models import AppConfig, LoggingConfig
from mediacompat.jobs.batch import BatchSummary, ItemResult

_CLEAN_RECORD = {
    "file_path": "/media/movies/Movie (2020).mp4",
    "container": "MP4",
    "video_codec": "H.264",
    "video_codec_tag": "avc1",
    "bit_depth": 8,
    "width": 1920,
    "height": 1080,
    "is_hdr": True,
    "hdr_type": "HDR10",
    "is_fast_start": True,
    "audio_tracks": [{"Codec": "AAC", "Channels": 6, "Language": "English"}],
    "file_size": 2000000000,
    "duration_seconds": 7200,
}


@pytest.fixture
def clean_record() -> dict:
    """A record document that passes every check of the default policy."""
    return dict(_CLEAN_RECORD)


@pytest.fixture
def app_config() -> AppConfig:
    """Configuration injected into the CLI context, logging errors only."""
    return AppConfig(logging=LoggingConfig(level="error"))


@pytest.fixture
def invoke(app_config, restore_root_logger):
    """Run the CLI with an injected configuration."""

    def _invoke(*args: str, config: AppConfig | None = None):
        runner = CliRunner()
        return runner.invoke(
            main, list(args), obj={"config": config or app_config}
        )

    return _invoke


@pytest.fixture
def write_json(write_file):
    """Write a JSON document under the temp dir and return its path."""

    def _write(name: str, data) -> str:
        return str(write_file(name, json.dumps(data)))

    return _write


@pytest.fixture
def cancel_last():
    """Wrap a batch function so its last item comes back cancelled."""

    def _wrap(run):
        def wrapper(items, *args, **kwargs):
            summary = run(items, *args, **kwargs)
            cancelled = ItemResult(item=items[-1], success=False, cancelled=True)
            return BatchSummary(results=(*summary.results[:-1], cancelled))

        return wrapper

    return _wrap
