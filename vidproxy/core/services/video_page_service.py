"""Application service for video pages, listings and downloads.

Depends only on the VideoService interface; whether calls are answered by
the upstream service directly or through the caching proxy is decided in
the composition root.
"""

import hashlib
import logging
from typing import List

from vidproxy.domain.interfaces.video_service import VideoService
from vidproxy.domain.models.common import DownloadResult, VideoId, VideoPage, VideoSummary

logger = logging.getLogger(__name__)

def format_duration(total_seconds: int) -> str:
    """Formats seconds as M:SS, or H:MM:SS for an hour or more."""
    minutes, seconds = divmod(max(0, int(total_seconds)), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"

class VideoPageService:
    """Builds user-facing views on top of a VideoService."""

    def __init__(self, video_service: VideoService):
        self.video_service = video_service

    def render_catalog(self) -> List[VideoSummary]:
        """Returns the list of available videos."""
        videos = self.video_service.list_videos()
        logger.debug(f"Catalog contains {len(videos)} videos")
        return videos

    def render_video_page(self, video_id: VideoId) -> VideoPage:
        """Builds the page model for one video.

        Raises:
            VideoNotFoundError: If the id is unknown upstream.
        """
        info = self.video_service.get_video_info(video_id)
        return VideoPage(
            video_id=info.video_id,
            title=info.title,
            duration=format_duration(info.duration_seconds),
            description=info.description or None,
        )

    def fetch_video(self, video_id: VideoId) -> DownloadResult:
        """Downloads a video and summarizes the payload.

        Raises:
            VideoNotFoundError: If the id is unknown upstream.
        """
        payload = self.video_service.download_video(video_id)
        checksum = hashlib.sha256(payload).hexdigest()
        logger.debug(f"Fetched {len(payload)} bytes for video {video_id}")
        return DownloadResult(video_id=video_id, size_bytes=len(payload), sha256=checksum)
