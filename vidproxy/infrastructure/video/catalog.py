"""Catalog of videos served by the simulated backend.

A catalog file is YAML of the form:

    videos:
      - id: intro
        title: Introduction
        duration_seconds: 95
        description: Short welcome video
        size_bytes: 2048        # optional, payload is generated when no content is given
        content: "..."          # optional, used verbatim as the payload
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from vidproxy.domain.exceptions import CatalogError
from vidproxy.domain.models.common import VideoId, VideoInfo, VideoSummary

logger = logging.getLogger(__name__)

DEFAULT_SIZE_BYTES = 1024

@dataclass(frozen=True)
class CatalogEntry:
    """A single video known to the simulated backend."""
    video_id: VideoId
    title: str
    duration_seconds: int = 0
    description: str = ""
    size_bytes: int = DEFAULT_SIZE_BYTES
    content: Optional[str] = None

    def to_summary(self) -> VideoSummary:
        return VideoSummary(video_id=self.video_id, title=self.title)

    def to_info(self) -> VideoInfo:
        return VideoInfo(
            video_id=self.video_id,
            title=self.title,
            duration_seconds=self.duration_seconds,
            description=self.description,
            size_bytes=len(self.payload()),
        )

    def payload(self) -> bytes:
        """Returns the deterministic byte content for this video."""
        if self.content is not None:
            return self.content.encode("utf-8")
        seed = f"{self.video_id}:".encode("utf-8")
        repeats = self.size_bytes // len(seed) + 1
        return (seed * repeats)[:self.size_bytes]


DEFAULT_CATALOG: List[CatalogEntry] = [
    CatalogEntry(VideoId("intro"), "Introduction to Proxies", 95, "Why put something between a client and a service.", 2048),
    CatalogEntry(VideoId("lazy-init"), "Lazy Initialization", 312, "Creating expensive objects only when needed.", 4096),
    CatalogEntry(VideoId("caching"), "Caching Results", 1830, "Serving repeated requests without asking upstream.", 8192),
    CatalogEntry(VideoId("42"), "Demo", 42, "The answer, in video form.", 512),
]

def _parse_entry(raw: Any, index: int) -> CatalogEntry:
    if not isinstance(raw, dict):
        raise CatalogError(f"Catalog entry #{index} is not a mapping")
    video_id = raw.get("id")
    title = raw.get("title")
    if video_id is None or not title:
        raise CatalogError(f"Catalog entry #{index} needs both 'id' and 'title'")
    try:
        duration = int(raw.get("duration_seconds", 0))
        size = int(raw.get("size_bytes", DEFAULT_SIZE_BYTES))
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Catalog entry '{video_id}' has a non-numeric field: {e}") from e
    if duration < 0 or size < 0:
        raise CatalogError(f"Catalog entry '{video_id}' has a negative duration or size")
    content = raw.get("content")
    return CatalogEntry(
        video_id=VideoId(str(video_id)),
        title=str(title),
        duration_seconds=duration,
        description=str(raw.get("description", "")),
        size_bytes=size,
        content=None if content is None else str(content),
    )

def parse_catalog(data: Any) -> List[CatalogEntry]:
    """Builds catalog entries from already-decoded YAML data.

    Raises:
        CatalogError: If the structure is wrong or an id appears twice.
    """
    if not isinstance(data, dict) or not isinstance(data.get("videos"), list):
        raise CatalogError("Catalog must be a mapping with a 'videos' list")
    entries = [_parse_entry(raw, i) for i, raw in enumerate(data["videos"], 1)]
    seen: Dict[str, int] = {}
    for entry in entries:
        seen[entry.video_id] = seen.get(entry.video_id, 0) + 1
    duplicates = sorted(vid for vid, count in seen.items() if count > 1)
    if duplicates:
        raise CatalogError(f"Duplicate video ids in catalog: {', '.join(duplicates)}")
    return entries

def load_catalog(path: Optional[Path] = None) -> List[CatalogEntry]:
    """Loads a catalog from a YAML file, or returns the built-in one when path is None."""
    if path is None:
        logger.debug(f"Using built-in catalog with {len(DEFAULT_CATALOG)} videos")
        return list(DEFAULT_CATALOG)
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read catalog file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Catalog file {path} is not valid YAML: {e}") from e
    entries = parse_catalog(data)
    logger.info(f"Loaded {len(entries)} videos from catalog {path}")
    return entries
