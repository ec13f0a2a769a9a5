import pytest


@pytest.fixture
def sample_track():
    """Sample Spotify track object."""
    return {
        "id": "spotify123",
        "name": "Test Song",
        "artists": [{"name": "Test Artist"}, {"name": "Guest"}],
        "album": {"name": "Test Album", "id": "album123"},
        "duration_ms": 180000,
        "external_urls": {"spotify": "https://open.spotify.com/track/spotify123"},
        "preview_url": "https://p.scdn.co/mp3-preview/abc",
    }
