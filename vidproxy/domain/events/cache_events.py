"""Domain Events related to proxy calls and cache decisions.

Emitted through an EventSink so callers (and tests) can observe hits,
misses and delegate invocations without scraping console output.
"""

from dataclasses import dataclass, field
import time
from typing import Any, Optional

# Base Event Class
@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass

# --- Operation names shared by events ---
OP_LIST = "list_videos"
OP_INFO = "get_video_info"
OP_DOWNLOAD = "download_video"

# --- Proxy Events ---

@dataclass
class ProxyCallReceived(DomainEvent):
    """Event triggered when the proxy receives a call, before any cache lookup."""
    operation: str
    key: Optional[str] = None # None for the unkeyed list cache
    timestamp: float = field(default_factory=time.time)

@dataclass
class CacheHit(DomainEvent):
    """Event triggered when a result is served from cache."""
    operation: str
    key: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

@dataclass
class CacheMiss(DomainEvent):
    """Event triggered when no usable cache entry exists."""
    operation: str
    key: Optional[str] = None
    reason: str = "absent" # 'absent' or 'invalidated'
    timestamp: float = field(default_factory=time.time)

@dataclass
class DelegateInvoked(DomainEvent):
    """Event triggered when the proxy forwards a call to its delegate."""
    operation: str
    key: Optional[str] = None
    succeeded: bool = True
    latency_ms: float = 0.0
    error_type: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

@dataclass
class CacheInvalidated(DomainEvent):
    """Event triggered when force_refresh() or clear() is called."""
    policy: str
    stale_entries: int = 0
    cleared: bool = False
    timestamp: float = field(default_factory=time.time)

# --- Backend Events ---

@dataclass
class BackendOperationPerformed(DomainEvent):
    """Event triggered by the real service each time it does the full work."""
    operation: str
    key: Optional[str] = None
    result_summary: Optional[Any] = None # e.g., item count or byte size
    timestamp: float = field(default_factory=time.time)
