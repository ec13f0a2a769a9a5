"""
Export commands.

A command fetches a result set from Spotify into memory (``execute``) and
later writes it as a single formatted document (``output``). Commands are
built from a tagged selection by ``make_command``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, BinaryIO, Callable, Dict, List, Protocol, Type

from .models import OutputFormat, TimeRange, clamp_count, convert_tracks
from .renderer import render_document
from .spotify_client import SpotifyClient

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Base class for export failures raised by this package."""


class CommandStateError(ExportError):
    """A command method was called in a state that does not allow it."""


class ExportWriteError(ExportError):
    """Writing the rendered document to the sink failed."""


class CommandState(Enum):
    CREATED = "created"
    EXECUTED = "executed"
    OUTPUT_WRITTEN = "output_written"
    FAILED = "failed"


class Command(Protocol):
    """Fetch-then-write unit of work."""

    state: CommandState

    def execute(self, client: SpotifyClient) -> None: ...

    def output(self, sink: BinaryIO, fmt: OutputFormat) -> None: ...


class TopTracksCommand:
    """Exports the user's top tracks over a time range."""

    def __init__(self, time_range: TimeRange, count: int):
        self.time_range = time_range
        self.count = clamp_count(count)
        self.state = CommandState.CREATED
        self._saved_result: List[dict] = []

    def execute(self, client: SpotifyClient) -> None:
        if self.state is not CommandState.CREATED:
            raise CommandStateError(
                f"Cannot execute a command in state '{self.state.value}'"
            )

        buffer: List[dict] = []
        try:
            for track in client.iter_top_tracks(self.time_range):
                buffer.append(track)
        except Exception:
            self.state = CommandState.FAILED
            raise

        self._saved_result = buffer
        self.state = CommandState.EXECUTED
        logger.debug(f"Fetched {len(buffer)} top tracks ({self.time_range.api_value})")

    def output(self, sink: BinaryIO, fmt: OutputFormat) -> None:
        if self.state not in (CommandState.EXECUTED, CommandState.OUTPUT_WRITTEN):
            raise CommandStateError(
                f"Cannot write output for a command in state '{self.state.value}'"
            )

        records = convert_tracks(self._saved_result, self.count)
        document = render_document(records, fmt)

        try:
            sink.write(document.encode("utf-8"))
        except (OSError, ValueError) as e:
            raise ExportWriteError(str(e)) from e

        self.state = CommandState.OUTPUT_WRITTEN
        logger.debug(f"Wrote {len(records)} records as {fmt.cli_name}")


@dataclass(frozen=True)
class TopTracksSelection:
    """User selection for the top-tracks export."""

    time_range: TimeRange
    count: int = 50


COMMAND_BUILDERS: Dict[Type[Any], Callable[[Any], Command]] = {
    TopTracksSelection: lambda s: TopTracksCommand(s.time_range, s.count),
}


def make_command(selection: Any) -> Command:
    """Build the command for a selection."""
    builder = COMMAND_BUILDERS.get(type(selection))
    if builder is None:
        raise TypeError(f"No command for selection {selection!r}")
    return builder(selection)
