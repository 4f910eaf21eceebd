"""Caching proxy for any VideoService.

Wraps a delegate VideoService and keeps three independent caches: the
video listing (unkeyed), per-video info and per-video content. A result
is stored only after the delegate returns successfully; delegate errors
propagate unchanged and leave the cache as it was.

What force_refresh() does depends on the InvalidationPolicy:

- STICKY: sets invalidate_all, which is never cleared, so every later call
  goes to the delegate (the cache is effectively disabled until clear()).
- SINGLE_SHOT: every entry cached at refresh time is marked stale and is
  refetched once on its next access; refresh_pending stays true until no
  stale entries remain.

A fetch that started before a refresh or clear returns its result to the
caller but is not cached.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from vidproxy.domain.events.cache_events import (
    CacheHit,
    CacheInvalidated,
    CacheMiss,
    DelegateInvoked,
    DomainEvent,
    OP_DOWNLOAD,
    OP_INFO,
    OP_LIST,
    ProxyCallReceived,
)
from vidproxy.domain.interfaces.event_sink import EventSink
from vidproxy.domain.interfaces.video_service import VideoService
from vidproxy.domain.models.common import VideoId, VideoInfo, VideoSummary
from vidproxy.infrastructure.cache.slots import KeyedSlot, SingleValueSlot

logger = logging.getLogger(__name__)


class InvalidationPolicy(str, Enum):
    """How force_refresh() invalidates cached entries."""
    STICKY = "sticky"
    SINGLE_SHOT = "single_shot"


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time counters for a CachingVideoServiceProxy."""
    policy: InvalidationPolicy
    hits: int
    misses: int
    delegate_calls: int
    delegate_failures: int
    list_cached: bool
    info_entries: int
    content_entries: int
    invalidate_all: bool
    refresh_pending: bool

    def as_dict(self) -> Dict[str, Any]:
        return {
            "policy": self.policy.value,
            "hits": self.hits,
            "misses": self.misses,
            "delegate calls": self.delegate_calls,
            "delegate failures": self.delegate_failures,
            "list cached": self.list_cached,
            "info entries": self.info_entries,
            "content entries": self.content_entries,
            "invalidate all": self.invalidate_all,
            "refresh pending": self.refresh_pending,
        }


class CachingVideoServiceProxy(VideoService):
    """VideoService that serves repeated requests from memory."""

    def __init__(
        self,
        delegate: VideoService,
        policy: InvalidationPolicy = InvalidationPolicy.SINGLE_SHOT,
        event_sink: Optional[EventSink] = None,
    ):
        """Initializes the proxy.

        Args:
            delegate: The service consulted on a cache miss.
            policy: Invalidation policy applied by force_refresh().
            event_sink: Receives trace events for every call.
        """
        self._delegate = delegate
        self.policy = InvalidationPolicy(policy)
        self.event_sink = event_sink

        self._list_cache: SingleValueSlot[Tuple[VideoSummary, ...]] = SingleValueSlot()
        self._info_cache: KeyedSlot[VideoId, VideoInfo] = KeyedSlot()
        self._content_cache: KeyedSlot[VideoId, bytes] = KeyedSlot()
        self._sticky_invalidated = False
        self._generation = 0  # bumped by force_refresh() and clear()
        self._lock = threading.Lock()

        self._hits = 0
        self._misses = 0
        self._delegate_calls = 0
        self._delegate_failures = 0
        logger.info(f"CachingVideoServiceProxy initialized around {type(delegate).__name__} (policy={self.policy.value})")

    @property
    def delegate(self) -> VideoService:
        return self._delegate

    @property
    def invalidate_all(self) -> bool:
        """True while every lookup is forced to bypass cached entries (STICKY only)."""
        with self._lock:
            return self._sticky_invalidated

    @property
    def refresh_pending(self) -> bool:
        """True while entries marked stale by a SINGLE_SHOT refresh await refetching."""
        with self._lock:
            return self._stale_entries() > 0

    def _stale_entries(self) -> int:
        return self._list_cache.stale_count + self._info_cache.stale_count + self._content_cache.stale_count

    def _emit(self, event: DomainEvent) -> None:
        if self.event_sink:
            self.event_sink.emit(event)

    # --- Lookup ---

    def _resolve(
        self,
        operation: str,
        key: Optional[str],
        peek: Callable[[], Tuple[bool, Any, bool]],
        store: Callable[[Any, bool], Any],
        fetch: Callable[[], Any],
    ) -> Any:
        """Serves from cache or calls fetch and stores its result."""
        self._emit(ProxyCallReceived(operation=operation, key=key))

        with self._lock:
            generation = self._generation
            found, value, stale = peek()
            invalidated = found and (stale or self._sticky_invalidated)
            if found and not invalidated:
                self._hits += 1
            else:
                self._misses += 1
                self._delegate_calls += 1

        if found and not invalidated:
            logger.debug(f"Cache hit: {operation} key={key}")
            self._emit(CacheHit(operation=operation, key=key))
            return value

        reason = "invalidated" if invalidated else "absent"
        logger.debug(f"Cache miss ({reason}): {operation} key={key}. Calling delegate.")
        self._emit(CacheMiss(operation=operation, key=key, reason=reason))

        started = time.perf_counter()
        try:
            result = fetch()
        except Exception as e:
            latency_ms = (time.perf_counter() - started) * 1000
            with self._lock:
                self._delegate_failures += 1
            logger.debug(f"Delegate {operation} key={key} failed with {type(e).__name__}: {e}")
            self._emit(DelegateInvoked(operation=operation, key=key, succeeded=False,
                                       latency_ms=latency_ms, error_type=type(e).__name__))
            raise
        latency_ms = (time.perf_counter() - started) * 1000
        self._emit(DelegateInvoked(operation=operation, key=key, latency_ms=latency_ms))

        with self._lock:
            if generation != self._generation:
                # A refresh or clear ran while fetching; the result predates it
                logger.debug(f"Not caching {operation} key={key}: fetched before the last refresh")
                return result
            return store(result, self._sticky_invalidated)

    # --- VideoService Interface Implementation ---

    def list_videos(self) -> List[VideoSummary]:
        # Cached as a tuple; each caller gets its own list
        videos = self._resolve(
            OP_LIST,
            None,
            self._list_cache.peek,
            lambda value, overwrite: self._list_cache.store(tuple(value), overwrite=overwrite),
            self._delegate.list_videos,
        )
        return list(videos)

    def get_video_info(self, video_id: VideoId) -> VideoInfo:
        return self._resolve(
            OP_INFO,
            video_id,
            lambda: self._info_cache.peek(video_id),
            lambda value, overwrite: self._info_cache.store(video_id, value, overwrite=overwrite),
            lambda: self._delegate.get_video_info(video_id),
        )

    def download_video(self, video_id: VideoId) -> bytes:
        return self._resolve(
            OP_DOWNLOAD,
            video_id,
            lambda: self._content_cache.peek(video_id),
            lambda value, overwrite: self._content_cache.store(video_id, value, overwrite=overwrite),
            lambda: self._delegate.download_video(video_id),
        )

    # --- Administrative Operations (not part of VideoService) ---

    def force_refresh(self) -> None:
        """Forces the next lookups to go to the delegate, as set by the policy."""
        with self._lock:
            self._generation += 1
            if self.policy is InvalidationPolicy.STICKY:
                self._sticky_invalidated = True
                stale = len(self._info_cache) + len(self._content_cache) + (1 if self._list_cache.is_filled else 0)
            else:
                stale = (self._list_cache.mark_stale()
                         + self._info_cache.mark_stale()
                         + self._content_cache.mark_stale())
        logger.info(f"Cache refresh forced (policy={self.policy.value}, entries affected={stale})")
        self._emit(CacheInvalidated(policy=self.policy.value, stale_entries=stale))

    def clear(self) -> None:
        """Drops every cached entry and resets the invalidation flag."""
        with self._lock:
            dropped = len(self._info_cache) + len(self._content_cache) + (1 if self._list_cache.is_filled else 0)
            self._list_cache.clear()
            self._info_cache.clear()
            self._content_cache.clear()
            self._sticky_invalidated = False
            self._generation += 1
        logger.info(f"Cache cleared ({dropped} entries dropped)")
        self._emit(CacheInvalidated(policy=self.policy.value, stale_entries=dropped, cleared=True))

    def stats(self) -> CacheStats:
        """Returns a snapshot of counters and entry counts."""
        with self._lock:
            return CacheStats(
                policy=self.policy,
                hits=self._hits,
                misses=self._misses,
                delegate_calls=self._delegate_calls,
                delegate_failures=self._delegate_failures,
                list_cached=self._list_cache.is_filled,
                info_entries=len(self._info_cache),
                content_entries=len(self._content_cache),
                invalidate_all=self._sticky_invalidated,
                refresh_pending=self._stale_entries() > 0,
            )
