"""Interface for video services.

Both the real (upstream) service and the caching proxy implement this
contract, so consumers can be wired to either one without knowing which.
"""

import abc
from typing import List

from vidproxy.domain.models.common import VideoId, VideoInfo, VideoSummary


class VideoService(abc.ABC):
    """Abstract Base Class for the three video operations."""

    @abc.abstractmethod
    def list_videos(self) -> List[VideoSummary]:
        """Lists the videos available upstream.

        Returns:
            A list of video summaries.
        """
        pass

    @abc.abstractmethod
    def get_video_info(self, video_id: VideoId) -> VideoInfo:
        """Fetches metadata for a single video.

        Args:
            video_id: The upstream identifier of the video.

        Returns:
            The video's metadata.

        Raises:
            VideoNotFoundError: If the id is unknown upstream.
        """
        pass

    @abc.abstractmethod
    def download_video(self, video_id: VideoId) -> bytes:
        """Downloads the content of a single video.

        Args:
            video_id: The upstream identifier of the video.

        Returns:
            The video's byte payload.

        Raises:
            VideoNotFoundError: If the id is unknown upstream.
        """
        pass
