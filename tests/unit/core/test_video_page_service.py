import hashlib
import pytest
from unittest.mock import MagicMock

from vidproxy.core.services.video_page_service import VideoPageService, format_duration
from vidproxy.domain.exceptions import VideoNotFoundError
from vidproxy.domain.models.common import VideoId
from vidproxy.infrastructure.cache.caching_proxy import CachingVideoServiceProxy
from vidproxy.infrastructure.video.simulated_service import SimulatedVideoService

@pytest.mark.parametrize("seconds, expected", [
    (0, "0:00"),
    (61, "1:01"),
    (3599, "59:59"),
    (3725, "1:02:05"),
    (-5, "0:00"),
])
def test_format_duration(seconds: int, expected: str):
    assert format_duration(seconds) == expected

def test_render_video_page(mock_delegate: MagicMock):
    service = VideoPageService(video_service=mock_delegate)
    page = service.render_video_page(VideoId("a"))

    mock_delegate.get_video_info.assert_called_once_with("a")
    assert page.title == "Title a"
    assert page.duration == "1:01"
    assert page.description is None

def test_render_catalog(mock_delegate: MagicMock):
    service = VideoPageService(video_service=mock_delegate)
    assert [v.video_id for v in service.render_catalog()] == ["v1", "v2"]

def test_fetch_video_summarizes_payload(mock_delegate: MagicMock):
    service = VideoPageService(video_service=mock_delegate)
    result = service.fetch_video(VideoId("a"))

    assert result.size_bytes == len(b"payload-a")
    assert result.sha256 == hashlib.sha256(b"payload-a").hexdigest()

def test_errors_propagate(mock_delegate: MagicMock):
    mock_delegate.get_video_info.side_effect = VideoNotFoundError("x")
    service = VideoPageService(video_service=mock_delegate)
    with pytest.raises(VideoNotFoundError):
        service.render_video_page(VideoId("x"))

@pytest.mark.parametrize("cached", [False, True])
def test_same_results_with_or_without_proxy(cached: bool):
    """The consumer behaves identically whichever VideoService it is given."""
    backend = SimulatedVideoService()
    video_service = CachingVideoServiceProxy(backend) if cached else backend
    service = VideoPageService(video_service=video_service)

    page = service.render_video_page(VideoId("42"))
    assert page.title == "Demo"
    assert page.duration == "0:42"
    assert page.description == "The answer, in video form."
    assert service.fetch_video(VideoId("42")).size_bytes == 512
    assert len(service.render_catalog()) == 4
