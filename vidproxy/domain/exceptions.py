"""Domain error types.

VideoNotFoundError is the only error a VideoService raises on purpose. Any
other exception coming out of a backend is treated as an opaque upstream
failure and passed through untouched.
"""

from typing import Optional


class VidProxyError(Exception):
    """Base class for all vidproxy errors."""


class VideoNotFoundError(VidProxyError, LookupError):
    """Raised when a video id has no corresponding upstream item."""

    def __init__(self, video_id: str, message: Optional[str] = None):
        self.video_id = video_id
        super().__init__(message or f"Video not found: {video_id}")


class CatalogError(VidProxyError):
    """Raised when a catalog file cannot be parsed into video entries."""
