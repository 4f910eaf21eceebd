"""Defines common Value Objects used across different domain contexts.

These objects represent simple values or concepts like video identifiers,
summaries and metadata, ensuring consistency and type safety.
"""

from dataclasses import dataclass
from typing import NewType, Optional

# === Core Value Objects ===

# Using NewType for semantic clarity; a VideoId is a plain str at runtime.
VideoId = NewType("VideoId", str)  # Upstream identifier of a video

# === Catalog Context ===

@dataclass(frozen=True)
class VideoSummary:
    """One row of the upstream video listing."""
    video_id: VideoId
    title: str

@dataclass(frozen=True)
class VideoInfo:
    """Metadata describing a single video."""
    video_id: VideoId
    title: str
    duration_seconds: int = 0
    description: str = ""
    size_bytes: int = 0

# === Consumer Context ===

@dataclass(frozen=True)
class VideoPage:
    """Render model for a video page built from VideoInfo."""
    video_id: VideoId
    title: str
    duration: str # Formatted as H:MM:SS or M:SS
    description: Optional[str] = None

@dataclass(frozen=True)
class DownloadResult:
    """Summary of a completed download."""
    video_id: VideoId
    size_bytes: int
    sha256: str
