"""
Spotify API client wrapper.

Turns the paginated top-items endpoints into lazily produced sequences.
"""

import logging
from typing import Callable, Iterator, Optional

import spotipy

from .models import MAX_ITEM_COUNT, TimeRange

logger = logging.getLogger(__name__)


class SpotifyClient:
    """Wrapper for an authorized Spotify session with paginated fetching."""

    def __init__(
        self,
        session: spotipy.Spotify,
        progress_callback: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the client.

        Args:
            session: Authorized Spotify client
            progress_callback: Optional callback for progress messages
        """
        self.session = session
        self._progress_callback = progress_callback

    def _log_progress(self, message: str):
        """Report progress if callback is available."""
        if self._progress_callback:
            self._progress_callback(message)
        else:
            logger.debug(message)

    def iter_top_tracks(
        self, time_range: TimeRange, page_size: int = MAX_ITEM_COUNT
    ) -> Iterator[dict]:
        """
        Yield the user's top tracks for a time range, in ranked order.

        Errors raised by the API propagate to the caller unchanged.
        """
        results = self.session.current_user_top_tracks(
            limit=page_size, offset=0, time_range=time_range.api_value
        )
        fetched = 0

        while True:
            for track in results["items"]:
                if not track:
                    continue
                fetched += 1
                yield track

            self._log_progress(f"Fetching top tracks: {fetched} tracks...")

            if not results.get("next"):
                break
            results = self.session.next(results)
