"""Rendering of export records into Markdown, HTML and JSON documents."""

from __future__ import annotations

import html
import json
from typing import Callable, Dict, Iterable, Sequence

from .models import ExportRecord, OutputFormat

AUDIO_FALLBACK_TEXT = "Your browser does not support the audio element."


def join_artists(artists: Sequence[str], sep: str = ", ") -> str:
    """Join artist names for display."""
    return sep.join(artists)


def _escape(value: str) -> str:
    return html.escape(value, quote=True)


def render_markdown(record: ExportRecord) -> str:
    parts = [
        f"{record.rank}. {record.name} ({join_artists(record.artists)})\n",
        f"* Album: {record.album}\n",
    ]
    if record.preview_url is not None:
        parts.append(f"* [Preview]({record.preview_url})\n")
    if record.url is not None:
        parts.append(f"* [Spotify Link]({record.url})")
    parts.append("\n\n")
    return "".join(parts)


def render_html(record: ExportRecord) -> str:
    parts = [
        f"<li>{_escape(record.name)}</li>\n",
        f"<ul><li>By: {_escape(join_artists(record.artists))}</li>\n",
        f"<li>Album: {_escape(record.album)}</li>\n",
    ]
    if record.url is not None:
        parts.append(f'<li><a href="{_escape(record.url)}">Spotify Link</a></li>')
    if record.preview_url is not None:
        parts.append(
            "<li><audio controls>"
            f'<source src="{_escape(record.preview_url)}" type="audio/mpeg">'
            f"{AUDIO_FALLBACK_TEXT}</audio></li>"
        )
    parts.append("</ul>")
    return "".join(parts)


def render_markdown_www(record: ExportRecord) -> str:
    title = f"{record.name} ({join_artists(record.artists)})"
    if record.url is not None:
        return f"{record.rank}. [{title}]({record.url})\n"
    return f"{record.rank}. {title}\n"


def render_json(record: ExportRecord) -> str:
    return json.dumps(
        {
            "position": record.rank,
            "name": record.name,
            "artists": join_artists(record.artists),
            "url": record.url,
            "preview_url": record.preview_url,
        },
        ensure_ascii=False,
    )


RECORD_RENDERERS: Dict[OutputFormat, Callable[[ExportRecord], str]] = {
    OutputFormat.MARKDOWN: render_markdown,
    OutputFormat.HTML: render_html,
    OutputFormat.MARKDOWN_WWW: render_markdown_www,
    OutputFormat.JSON: render_json,
}


def render_record(record: ExportRecord, fmt: OutputFormat) -> str:
    """Render a single record as a fragment of the given format."""
    return RECORD_RENDERERS[fmt](record)


def render_document(records: Iterable[ExportRecord], fmt: OutputFormat) -> str:
    """
    Render records into a complete document.

    Markdown fragments terminate themselves and are concatenated as-is.
    HTML fragments go inside a single ordered list, JSON fragments inside a
    single array.
    """
    fragments = [render_record(record, fmt) for record in records]

    if fmt is OutputFormat.HTML:
        return f"<ol>{''.join(fragments)}</ol>"
    if fmt is OutputFormat.JSON:
        return "[" + ",\n".join(fragments) + "]"
    return "".join(fragments)
