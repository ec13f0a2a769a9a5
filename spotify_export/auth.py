"""
Authentication helpers for Spotify.
"""

import logging
import os
from typing import Optional

import spotipy
from spotipy.oauth2 import SpotifyOAuth

logger = logging.getLogger(__name__)

DEFAULT_REDIRECT_URI = "http://127.0.0.1:8888/callback"

SPOTIFY_SCOPES = (
    "user-top-read "
    "user-read-recently-played "
    "user-library-read "
    "user-read-currently-playing "
    "user-read-playback-state "
    "user-read-playback-position "
    "playlist-read-collaborative "
    "playlist-read-private"
)


def open_spotify_session(
    config: dict, cache_path: Optional[str] = None
) -> spotipy.Spotify:
    """
    Open a Spotify session using OAuth.

    Config can contain:
        - client_id: Spotify app client ID
        - client_secret: Spotify app client secret
        - redirect_uri: OAuth redirect URI (default: http://127.0.0.1:8888/callback)
        - username: Spotify username (optional)
        - open_browser: Whether to open browser for auth (default: True)

    Args:
        config: Configuration dictionary
        cache_path: Path to store OAuth token cache (default: spotipy's .cache)
    """
    client_id = config.get("client_id") or os.environ.get("SPOTIFY_CLIENT_ID")
    client_secret = config.get("client_secret") or os.environ.get(
        "SPOTIFY_CLIENT_SECRET"
    )
    redirect_uri = (
        config.get("redirect_uri")
        or os.environ.get("SPOTIFY_REDIRECT_URI")
        or DEFAULT_REDIRECT_URI
    )

    if not client_id or not client_secret:
        raise ValueError(
            "Spotify client_id and client_secret are required. "
            "Set them in config.yml or via SPOTIFY_CLIENT_ID and "
            "SPOTIFY_CLIENT_SECRET env vars. "
            "Get them from https://developer.spotify.com/dashboard"
        )

    auth_manager = SpotifyOAuth(
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=redirect_uri,
        scope=SPOTIFY_SCOPES,
        username=config.get("username"),
        open_browser=config.get("open_browser", True),
        cache_path=cache_path or config.get("cache_path"),
    )
    logger.debug(f"Using Spotify redirect URI {redirect_uri}")

    return spotipy.Spotify(auth_manager=auth_manager)
