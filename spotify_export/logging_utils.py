"""
Terminal output for the spotify-export CLI.

ExportLogger prints timestamped, optionally colored status lines; UserErrors
holds the error messages shown before the CLI exits.
"""

import sys
from datetime import datetime
from enum import Enum


class LogLevel(Enum):
    """Log levels as (label, icon, ANSI color)."""

    DEBUG = ("DEBUG", "🔍", "\033[90m")  # Gray
    SUCCESS = ("SUCCESS", "✓", "\033[92m")  # Green
    WARNING = ("WARNING", "⚠️", "\033[93m")  # Yellow
    ERROR = ("ERROR", "❌", "\033[91m")  # Red
    PROGRESS = ("PROGRESS", "→", "\033[96m")  # Cyan

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def icon(self) -> str:
        return self.value[1]

    @property
    def color(self) -> str:
        return self.value[2]


RESET = "\033[0m"


def format_line(level: LogLevel, message: str, use_color: bool, now=None) -> str:
    """Format one status line for the terminal."""
    stamp = f"[{(now or datetime.now()).strftime('%H:%M:%S')}]"
    if use_color:
        return f"{level.color}{stamp} {level.icon} {message}{RESET}"
    return f"{stamp} [{level.label}] {message}"


class ExportLogger:
    """
    Status output for one CLI run.

    --verbose adds DEBUG lines, --quiet keeps only errors. Colors are used
    only when stdout is a terminal.
    """

    def __init__(
        self, verbose: bool = False, quiet: bool = False, use_color: bool = True
    ):
        self.verbose = verbose
        self.quiet = quiet
        self.use_color = use_color and sys.stdout.isatty()

    def _emit(self, level: LogLevel, message: str):
        if self.quiet and level is not LogLevel.ERROR:
            return
        if level is LogLevel.DEBUG and not self.verbose:
            return
        print(format_line(level, message, self.use_color))

    def debug(self, message: str):
        self._emit(LogLevel.DEBUG, message)

    def progress(self, message: str):
        self._emit(LogLevel.PROGRESS, message)

    def success(self, message: str):
        self._emit(LogLevel.SUCCESS, message)

    def warning(self, message: str):
        self._emit(LogLevel.WARNING, message)

    def error(self, message: str):
        self._emit(LogLevel.ERROR, message)


class UserErrors:
    """User-facing error messages with a hint on what to do next."""

    @staticmethod
    def spotify_auth_failed(original_error: str) -> str:
        return (
            f"❌ Spotify authentication failed: {original_error}\n\n"
            "💡 Try these steps:\n"
            "   1. Check SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET\n"
            "   2. Verify redirect URI matches your Spotify app settings\n"
            "   3. Delete the token cache file and try again to force re-auth"
        )

    @staticmethod
    def config_not_found(path: str) -> str:
        return (
            f"❌ Configuration file not found: {path}\n\n"
            "💡 Create a config.yml file with your Spotify credentials,\n"
            "   or set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET."
        )

    @staticmethod
    def invalid_config(path: str, original_error: str) -> str:
        return (
            f"❌ Configuration file {path} is not valid YAML: {original_error}\n\n"
            "💡 Compare it with config.example.yml."
        )

    @staticmethod
    def network_error(original_error: str) -> str:
        return (
            f"❌ Network error: {original_error}\n\n"
            "💡 Check your internet connection and try again."
        )

    @staticmethod
    def rate_limited() -> str:
        return (
            "⚠️ Rate limited by the Spotify API.\n\n"
            "💡 Wait a few minutes and try again."
        )

    @staticmethod
    def fetch_failed(original_error: str) -> str:
        return (
            f"❌ Could not fetch data from Spotify: {original_error}\n\n"
            "💡 Nothing was written. Use --verbose for more details."
        )

    @staticmethod
    def write_failed(path: str, original_error: str) -> str:
        return (
            f"❌ Could not write export to {path}: {original_error}\n\n"
            "💡 Check that the directory exists and is writable."
        )
