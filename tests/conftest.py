import pytest
from typer.testing import CliRunner
from pathlib import Path
import os

from vidproxy.domain.interfaces.video_service import VideoService
from vidproxy.domain.models.common import VideoId, VideoInfo, VideoSummary
from vidproxy.infrastructure.config import settings
from vidproxy.infrastructure.monitoring.event_sinks import RecordingEventSink

@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keeps user config files, .env files and VIDPROXY_* variables out of tests."""
    for name in list(os.environ):
        if name.startswith(settings.ENV_PREFIX):
            monkeypatch.delenv(name)
    monkeypatch.setattr(settings, "_config", {})
    monkeypatch.setattr(settings, "_loaded", True)
    settings.clear_test_config()
    yield
    settings.clear_test_config()

@pytest.fixture
def recorder():
    """An in-memory event sink."""
    return RecordingEventSink()

@pytest.fixture
def mock_delegate(mocker):
    """A VideoService test double whose calls are counted on every operation."""
    mock = mocker.MagicMock(spec=VideoService)
    mock.list_videos.return_value = [VideoSummary(VideoId("v1"), "One"), VideoSummary(VideoId("v2"), "Two")]
    mock.get_video_info.side_effect = lambda video_id: VideoInfo(video_id=video_id, title=f"Title {video_id}", duration_seconds=61)
    mock.download_video.side_effect = lambda video_id: f"payload-{video_id}".encode()
    return mock

@pytest.fixture
def catalog_file(tmp_path: Path):
    """Writes a small YAML catalog and returns its path."""
    path = tmp_path / "catalog.yaml"
    path.write_text(
        "videos:\n"
        "  - id: alpha\n"
        "    title: Alpha Video\n"
        "    duration_seconds: 3725\n"
        "    description: First one\n"
        "    content: alpha-bytes\n"
        "  - id: beta\n"
        "    title: Beta Video\n"
        "    size_bytes: 10\n",
        encoding="utf-8",
    )
    return path
