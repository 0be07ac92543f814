"""Markdown link helpers."""

from __future__ import annotations

_TITLE_ESCAPES = {
    '"': "&#34;",
    "(": "&#40;",
    ")": "&#41;",
}
_TITLE_TRANSLATION = str.maketrans(_TITLE_ESCAPES)


def escape_link_title(value: str) -> str:
    """Escape characters that would terminate a markdown link title early."""
    return value.translate(_TITLE_TRANSLATION)


def markdown_link(label: str, url: str, title: str | None = None) -> str:
    """Render ``[label](url "title")``; only ``title`` is escaped."""
    if title is None:
        return f"[{label}]({url})"
    return f'[{label}]({url} "{escape_link_title(title)}")'
