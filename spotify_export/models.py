"""
Data models for exported listening data.

Uses frozen dataclasses for the per-item record and enums for the
user-selectable time range and output format.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

# Spotify caps the top-items endpoint at 50 items per page.
MAX_ITEM_COUNT = 50


def clamp_count(count: int) -> int:
    """Clamp a requested item count to what Spotify can return."""
    return max(0, min(count, MAX_ITEM_COUNT))


class TimeRange(Enum):
    """Time window for the user's top items."""

    SHORT = ("short", "short_term")
    MEDIUM = ("medium", "medium_term")
    LONG = ("long", "long_term")

    @property
    def cli_name(self) -> str:
        return self.value[0]

    @property
    def api_value(self) -> str:
        return self.value[1]

    @classmethod
    def from_name(cls, name: str) -> "TimeRange":
        for time_range in cls:
            if time_range.cli_name == name.lower():
                return time_range
        raise ValueError(f"Unknown time range: {name}")


class OutputFormat(Enum):
    """Document formats the renderer can produce."""

    MARKDOWN = "markdown"
    HTML = "html"
    MARKDOWN_WWW = "markdown-www"
    JSON = "json"

    @property
    def cli_name(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "OutputFormat":
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(f"Unknown output format: {name}") from None


@dataclass(frozen=True)
class ExportRecord:
    """One ranked item of an export."""

    rank: int
    name: str
    artists: Tuple[str, ...] = ()
    album: str = ""
    url: Optional[str] = None
    preview_url: Optional[str] = None

    @classmethod
    def from_spotify(cls, spotify_track: dict, rank: int) -> "ExportRecord":
        """Create an ExportRecord from a Spotify track object."""
        artists = tuple(a["name"] for a in spotify_track.get("artists") or [])
        album = (spotify_track.get("album") or {}).get("name") or ""
        url = (spotify_track.get("external_urls") or {}).get("spotify")

        return cls(
            rank=rank,
            name=spotify_track.get("name", ""),
            artists=artists,
            album=album,
            url=url,
            preview_url=spotify_track.get("preview_url"),
        )


def convert_tracks(tracks: Iterable[dict], max_count: int) -> List[ExportRecord]:
    """Convert Spotify tracks to ranked records, keeping at most max_count."""
    records: List[ExportRecord] = []
    if max_count <= 0:
        return records

    for rank, track in enumerate(tracks, 1):
        records.append(ExportRecord.from_spotify(track, rank))
        if len(records) >= max_count:
            break

    return records
