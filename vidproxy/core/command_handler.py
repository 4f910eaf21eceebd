"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), delegates the work
to VideoPageService and renders results through the UserInterface. Errors
are caught here, logged and shown to the user; each handler returns
whether the command succeeded so the CLI can choose an exit code.
"""

import logging
from typing import Optional

from vidproxy.core.services.video_page_service import VideoPageService
from vidproxy.domain.exceptions import VideoNotFoundError
from vidproxy.domain.interfaces.user_interface import UserInterface
from vidproxy.domain.models.common import VideoId
from vidproxy.infrastructure.cache.caching_proxy import CachingVideoServiceProxy

logger = logging.getLogger(__name__)

class CommandHandler:
    """Handles incoming commands and delegates to the page service."""

    def __init__(
        self,
        page_service: VideoPageService,
        ui: UserInterface,
        cache_proxy: Optional[CachingVideoServiceProxy] = None,
    ):
        """Initializes the CommandHandler.

        Args:
            page_service: Consumer of the configured VideoService.
            ui: Where results and errors are displayed.
            cache_proxy: The proxy in front of the backend, if caching is enabled.
                Used only for administrative calls (refresh, stats).
        """
        self.page_service = page_service
        self.ui = ui
        self.cache_proxy = cache_proxy

    def handle_list(self, repeat: int = 1) -> bool:
        """Handles the 'list' command."""
        logger.info(f"Handling 'list' command (repeat={repeat})")
        try:
            for _ in range(max(1, repeat)):
                videos = self.page_service.render_catalog()
        except Exception as e:
            logger.error(f"List command failed: {e}", exc_info=True)
            self.ui.display_error(f"List command failed: {e}")
            return False
        self.ui.display_table("Videos", ["ID", "Title"], [[v.video_id, v.title] for v in videos])
        return True

    def handle_info(self, video_id: str, repeat: int = 1) -> bool:
        """Handles the 'info' command."""
        logger.info(f"Handling 'info' command for video: {video_id} (repeat={repeat})")
        try:
            for _ in range(max(1, repeat)):
                page = self.page_service.render_video_page(VideoId(video_id))
        except VideoNotFoundError as e:
            logger.warning(f"Info requested for unknown video: {e.video_id}")
            self.ui.display_error(str(e))
            return False
        except Exception as e:
            logger.error(f"Info command failed: {e}", exc_info=True)
            self.ui.display_error(f"Info command failed: {e}")
            return False
        body = f"**Duration:** {page.duration}"
        if page.description:
            body += f"\n\n{page.description}"
        self.ui.display_output(body, title=page.title)
        return True

    def handle_download(self, video_id: str, repeat: int = 1) -> bool:
        """Handles the 'download' command."""
        logger.info(f"Handling 'download' command for video: {video_id} (repeat={repeat})")
        try:
            for _ in range(max(1, repeat)):
                result = self.page_service.fetch_video(VideoId(video_id))
        except VideoNotFoundError as e:
            logger.warning(f"Download requested for unknown video: {e.video_id}")
            self.ui.display_error(str(e))
            return False
        except Exception as e:
            logger.error(f"Download command failed: {e}", exc_info=True)
            self.ui.display_error(f"Download command failed: {e}")
            return False
        self.ui.display_info(f"Downloaded {result.video_id}: {result.size_bytes} bytes (sha256 {result.sha256})")
        return True

    def handle_demo(self, video_id: str) -> bool:
        """Runs info twice, forces a refresh, then runs info once more."""
        if self.cache_proxy is None:
            self.ui.display_warning("Caching is disabled; every call goes straight to the backend.")
        try:
            for step in ("first call", "second call"):
                self.page_service.render_video_page(VideoId(video_id))
                self.ui.display_info(f"info({video_id}) {step}: {self._hit_miss_summary()}")
            if self.cache_proxy is not None:
                self.cache_proxy.force_refresh()
                self.ui.display_info("force_refresh() called")
            self.page_service.render_video_page(VideoId(video_id))
            self.ui.display_info(f"info({video_id}) after refresh: {self._hit_miss_summary()}")
        except VideoNotFoundError as e:
            self.ui.display_error(str(e))
            return False
        except Exception as e:
            logger.error(f"Demo command failed: {e}", exc_info=True)
            self.ui.display_error(f"Demo command failed: {e}")
            return False
        return True

    def handle_cache_stats(self) -> None:
        """Displays the proxy's counters, if a proxy is in use."""
        if self.cache_proxy is None:
            return
        self.ui.display_stats(self.cache_proxy.stats().as_dict())

    def _hit_miss_summary(self) -> str:
        if self.cache_proxy is None:
            return "no cache"
        stats = self.cache_proxy.stats()
        return f"hits={stats.hits}, misses={stats.misses}"
