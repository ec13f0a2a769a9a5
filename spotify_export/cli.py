"""
Command-line interface for spotify-export.

Fetches the user's listening data, then writes it as a single document.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import spotipy
import yaml

from .auth import open_spotify_session
from .commands import ExportWriteError, TopTracksSelection, make_command
from .logging_utils import ExportLogger, UserErrors
from .models import MAX_ITEM_COUNT, OutputFormat, TimeRange
from .spotify_client import SpotifyClient

DEFAULT_CONFIG = "config.yml"


def load_config(config_path: str) -> dict:
    """Load configuration from YAML file."""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def non_negative_int(value: str) -> int:
    """argparse type for counts: a whole number of zero or more."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"count must not be negative: {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all CLI options."""
    parser = argparse.ArgumentParser(
        prog="spotify-export",
        description="Export Spotify user data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  spotify-export -o top.md -f markdown top-tracks short
  spotify-export -o top.html -f html top-tracks long --count 20
  spotify-export -o top.json -f json top-tracks medium

Credentials are read from config.yml (spotify.client_id / client_secret)
or from SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET.
""",
    )

    parser.add_argument("--output", "-o", required=True, help="Output path")
    parser.add_argument(
        "--format",
        "-f",
        required=True,
        dest="output_format",
        choices=[fmt.cli_name for fmt in OutputFormat],
        help="Output format",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG,
        help=f"Path to config file (default: {DEFAULT_CONFIG})",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose debug output"
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Quiet mode - only show errors"
    )
    parser.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    top_tracks = subparsers.add_parser("top-tracks", help="List user's top tracks")
    top_tracks.add_argument(
        "time",
        choices=[time_range.cli_name for time_range in TimeRange],
        help="The time range to collect",
    )
    top_tracks.add_argument(
        "--count",
        "-n",
        type=non_negative_int,
        default=MAX_ITEM_COUNT,
        help=f"Number of items to retrieve (max {MAX_ITEM_COUNT})",
    )

    return parser


def build_selection(args: argparse.Namespace) -> TopTracksSelection:
    """Turn parsed arguments into a command selection."""
    if args.command == "top-tracks":
        return TopTracksSelection(
            time_range=TimeRange.from_name(args.time), count=args.count
        )
    raise ValueError(f"Unknown command: {args.command}")


def describe_fetch_error(error: Exception) -> str:
    """Pick a user-facing message for a failed fetch."""
    if isinstance(error, spotipy.SpotifyException) and error.http_status == 429:
        return UserErrors.rate_limited()

    error_str = str(error).lower()
    if "rate" in error_str and "limit" in error_str:
        return UserErrors.rate_limited()
    if "connection" in error_str or "network" in error_str:
        return UserErrors.network_error(str(error))
    return UserErrors.fetch_failed(str(error))


def main(argv: Optional[List[str]] = None):
    parser = create_parser()
    args = parser.parse_args(argv)

    logger = ExportLogger(
        verbose=args.verbose,
        quiet=args.quiet,
        use_color=not args.no_color,
    )
    logger.debug(f"Arguments: {vars(args)}")

    try:
        config = load_config(args.config)
    except yaml.YAMLError as e:
        logger.error(UserErrors.invalid_config(args.config, str(e)))
        sys.exit(1)
    if not config and not Path(args.config).exists():
        if args.config != DEFAULT_CONFIG:
            logger.error(UserErrors.config_not_found(args.config))
            sys.exit(1)
        else:
            logger.debug("No config.yml found, using environment variables")

    selection = build_selection(args)
    if selection.count > MAX_ITEM_COUNT:
        logger.warning(
            f"Spotify returns at most {MAX_ITEM_COUNT} items, "
            f"exporting {MAX_ITEM_COUNT}"
        )
    output_format = OutputFormat.from_name(args.output_format)

    logger.progress("Connecting to Spotify...")
    try:
        spotify = open_spotify_session(config.get("spotify") or {})
        client = SpotifyClient(spotify, progress_callback=logger.debug)
    except Exception as e:
        logger.error(UserErrors.spotify_auth_failed(str(e)))
        sys.exit(1)

    command = make_command(selection)

    logger.progress(f"Fetching top tracks ({selection.time_range.cli_name} term)...")
    try:
        command.execute(client)
    except KeyboardInterrupt:
        logger.warning("Export cancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error(describe_fetch_error(e))
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    try:
        with open(args.output, "wb") as sink:
            command.output(sink, output_format)
    except (OSError, ExportWriteError) as e:
        logger.error(UserErrors.write_failed(args.output, str(e)))
        sys.exit(1)

    logger.success(f"Exported {output_format.cli_name} to {args.output}")


if __name__ == "__main__":
    main()
