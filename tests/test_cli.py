from __future__ import annotations

import json
from pathlib import Path

import pytest
import spotipy

import spotify_export.cli as cli

from fakes import FakeSpotify, make_track


@pytest.fixture(autouse=True)
def _isolated_cwd(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)


def _use_spotify(monkeypatch, spotify):
    monkeypatch.setattr(cli, "open_spotify_session", lambda *_a, **_k: spotify)


def test_load_config_missing_file_returns_empty(tmp_path: Path):
    assert cli.load_config(str(tmp_path / "nope.yml")) == {}


def test_load_config_reads_yaml(tmp_path: Path):
    p = tmp_path / "config.yml"
    p.write_text("spotify: {client_id: x, client_secret: y}\n")
    cfg = cli.load_config(str(p))
    assert cfg["spotify"]["client_id"] == "x"


def test_parser_reads_top_tracks_arguments():
    args = cli.create_parser().parse_args(
        ["-o", "out.md", "-f", "markdown-www", "top-tracks", "long", "--count", "7"]
    )
    selection = cli.build_selection(args)

    assert args.output == "out.md"
    assert args.output_format == "markdown-www"
    assert selection.time_range.api_value == "long_term"
    assert selection.count == 7


def test_parser_rejects_unknown_format():
    with pytest.raises(SystemExit):
        cli.create_parser().parse_args(["-o", "x", "-f", "pdf", "top-tracks", "short"])


def test_main_writes_json_export(monkeypatch, tmp_path: Path, capsys):
    spotify = FakeSpotify([make_track(i) for i in range(1, 6)], page_size=2)
    _use_spotify(monkeypatch, spotify)
    out = tmp_path / "top.json"

    cli.main(
        ["-o", str(out), "-f", "json", "--no-color", "top-tracks", "short", "-n", "3"]
    )

    data = json.loads(out.read_text(encoding="utf-8"))
    assert [item["position"] for item in data] == [1, 2, 3]
    assert spotify.top_tracks_calls[0]["time_range"] == "short_term"
    assert "Exported json" in capsys.readouterr().out


def test_main_warns_when_count_exceeds_limit(monkeypatch, tmp_path: Path, capsys):
    _use_spotify(monkeypatch, FakeSpotify([make_track(1)]))
    out = tmp_path / "top.md"

    cli.main(["-o", str(out), "-f", "markdown", "top-tracks", "medium", "-n", "80"])

    assert out.read_text(encoding="utf-8").startswith("1. Song 1 (Artist 1)\n")
    assert "at most 50" in capsys.readouterr().out


def test_main_fetch_error_exits_without_creating_output(
    monkeypatch, tmp_path: Path, capsys
):
    tracks = [make_track(i) for i in range(4)]
    spotify = FakeSpotify(tracks, page_size=2, fail_on_next=1)
    _use_spotify(monkeypatch, spotify)
    out = tmp_path / "top.html"

    with pytest.raises(SystemExit) as e:
        cli.main(["-o", str(out), "-f", "html", "top-tracks", "short"])

    assert e.value.code == 1
    assert not out.exists()
    assert "Could not fetch data from Spotify" in capsys.readouterr().out


def test_main_rate_limit_message(monkeypatch, tmp_path: Path, capsys):
    class _RateLimited:
        def current_user_top_tracks(self, **_kwargs):
            raise spotipy.SpotifyException(429, -1, "too many requests")

    _use_spotify(monkeypatch, _RateLimited())

    with pytest.raises(SystemExit):
        cli.main(
            ["-o", str(tmp_path / "x.md"), "-f", "markdown", "top-tracks", "short"]
        )

    assert "Rate limited" in capsys.readouterr().out


def test_main_auth_failure_exits(monkeypatch, tmp_path: Path, capsys):
    def _fail(*_a, **_k):
        raise ValueError("Spotify client_id and client_secret are required.")

    monkeypatch.setattr(cli, "open_spotify_session", _fail)

    with pytest.raises(SystemExit) as e:
        cli.main(
            ["-o", str(tmp_path / "x.md"), "-f", "markdown", "top-tracks", "short"]
        )

    assert e.value.code == 1
    assert "authentication failed" in capsys.readouterr().out


def test_main_unwritable_output_exits(monkeypatch, tmp_path: Path, capsys):
    _use_spotify(monkeypatch, FakeSpotify([make_track(1)]))
    out = tmp_path / "missing-dir" / "top.md"

    with pytest.raises(SystemExit) as e:
        cli.main(["-o", str(out), "-f", "markdown", "top-tracks", "short"])

    assert e.value.code == 1
    assert "Could not write export" in capsys.readouterr().out


def test_main_errors_when_user_config_missing(tmp_path: Path):
    missing = tmp_path / "missing.yml"

    with pytest.raises(SystemExit) as e:
        cli.main(
            ["-c", str(missing), "-o", "x.md", "-f", "markdown", "top-tracks", "short"]
        )

    assert e.value.code == 1


def test_main_passes_spotify_config_section(monkeypatch, tmp_path: Path):
    config_path = tmp_path / "custom.yml"
    config_path.write_text("spotify:\n  client_id: abc\n  client_secret: def\n")
    seen = {}

    def _open(config, *_a, **_k):
        seen.update(config)
        return FakeSpotify([])

    monkeypatch.setattr(cli, "open_spotify_session", _open)
    out = tmp_path / "empty.html"

    cli.main(
        ["-c", str(config_path), "-o", str(out), "-f", "html", "top-tracks", "long"]
    )

    assert seen == {"client_id": "abc", "client_secret": "def"}
    assert out.read_text(encoding="utf-8") == "<ol></ol>"


def test_main_bare_spotify_section_falls_back_to_env(monkeypatch, tmp_path: Path):
    config_path = tmp_path / "custom.yml"
    config_path.write_text("spotify:\n")
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "env-id")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "env-secret")
    seen = []

    def _open(config, *_a, **_k):
        seen.append(config)
        assert config.get("client_id") is None
        return FakeSpotify([make_track(1)])

    monkeypatch.setattr(cli, "open_spotify_session", _open)
    out = tmp_path / "top.md"

    argv = ["-c", str(config_path), "-o", str(out), "-f", "markdown"]
    cli.main(argv + ["top-tracks", "short"])

    assert seen == [{}]
    assert out.exists()


def test_main_invalid_yaml_exits_with_message(tmp_path: Path, capsys):
    config_path = tmp_path / "broken.yml"
    config_path.write_text("spotify: [unclosed\n")

    with pytest.raises(SystemExit) as e:
        cli.main(
            ["-c", str(config_path), "-o", "x.md", "-f", "markdown"]
            + ["top-tracks", "short"]
        )

    assert e.value.code == 1
    assert "not valid YAML" in capsys.readouterr().out


@pytest.mark.parametrize("count", ["-1", "ten"])
def test_parser_rejects_invalid_count(count):
    with pytest.raises(SystemExit) as e:
        cli.create_parser().parse_args(
            ["-o", "x", "-f", "json", "top-tracks", "short", "--count", count]
        )

    assert e.value.code == 2


def test_parser_accepts_zero_count():
    args = cli.create_parser().parse_args(
        ["-o", "x", "-f", "json", "top-tracks", "short", "--count", "0"]
    )
    assert args.count == 0
