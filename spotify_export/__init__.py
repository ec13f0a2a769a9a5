"""
spotify-export - Export your Spotify listening data.

Features:
- Top tracks for short, medium and long term
- Markdown, HTML, web-linked Markdown and JSON output
- OAuth login with token caching
"""

import logging

from .commands import (
    Command,
    CommandState,
    CommandStateError,
    ExportError,
    ExportWriteError,
    TopTracksCommand,
    TopTracksSelection,
    make_command,
)
from .models import ExportRecord, OutputFormat, TimeRange, convert_tracks
from .renderer import render_document, render_record
from .spotify_client import SpotifyClient

__all__ = [
    "Command",
    "CommandState",
    "CommandStateError",
    "ExportError",
    "ExportRecord",
    "ExportWriteError",
    "OutputFormat",
    "SpotifyClient",
    "TimeRange",
    "TopTracksCommand",
    "TopTracksSelection",
    "convert_tracks",
    "make_command",
    "render_document",
    "render_record",
]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
