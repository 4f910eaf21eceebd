"""Simulated upstream implementation of the VideoService interface.

Stands in for a remote video library: every call does the full lookup,
optionally sleeps to mimic network latency, and reports what it did.
It keeps no results between calls.
"""

import logging
import time
from typing import Dict, Iterable, List, Optional

from vidproxy.domain.events.cache_events import (
    BackendOperationPerformed,
    OP_DOWNLOAD,
    OP_INFO,
    OP_LIST,
)
from vidproxy.domain.exceptions import VideoNotFoundError
from vidproxy.domain.interfaces.event_sink import EventSink
from vidproxy.domain.interfaces.video_service import VideoService
from vidproxy.domain.models.common import VideoId, VideoInfo, VideoSummary
from vidproxy.infrastructure.video.catalog import CatalogEntry, DEFAULT_CATALOG

logger = logging.getLogger(__name__)

class SimulatedVideoService(VideoService):
    """VideoService backed by an in-memory catalog."""

    def __init__(
        self,
        catalog: Optional[Iterable[CatalogEntry]] = None,
        event_sink: Optional[EventSink] = None,
        simulated_latency: float = 0.0,
    ):
        """Initializes the simulated backend.

        Args:
            catalog: Entries to serve. The built-in catalog is used if None.
            event_sink: Receives a BackendOperationPerformed event per call.
            simulated_latency: Seconds to sleep on every call.
        """
        entries = DEFAULT_CATALOG if catalog is None else catalog
        self._catalog: Dict[str, CatalogEntry] = {entry.video_id: entry for entry in entries}
        self.event_sink = event_sink
        self.simulated_latency = simulated_latency
        logger.info(f"SimulatedVideoService initialized with {len(self._catalog)} videos (latency={simulated_latency}s)")

    def _simulate_cost(self) -> None:
        if self.simulated_latency > 0:
            time.sleep(self.simulated_latency)

    def _record(self, operation: str, key: Optional[str], summary) -> None:
        logger.debug(f"Backend performed {operation} key={key}")
        if self.event_sink:
            self.event_sink.emit(BackendOperationPerformed(operation=operation, key=key, result_summary=summary))

    def _lookup(self, video_id: VideoId) -> CatalogEntry:
        entry = self._catalog.get(video_id)
        if entry is None:
            logger.debug(f"Backend has no video with id: {video_id}")
            raise VideoNotFoundError(video_id)
        return entry

    def list_videos(self) -> List[VideoSummary]:
        self._simulate_cost()
        videos = [entry.to_summary() for entry in self._catalog.values()]
        self._record(OP_LIST, None, len(videos))
        return videos

    def get_video_info(self, video_id: VideoId) -> VideoInfo:
        self._simulate_cost()
        info = self._lookup(video_id).to_info()
        self._record(OP_INFO, video_id, info.title)
        return info

    def download_video(self, video_id: VideoId) -> bytes:
        self._simulate_cost()
        payload = self._lookup(video_id).payload()
        self._record(OP_DOWNLOAD, video_id, len(payload))
        return payload
