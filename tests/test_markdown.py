"""Markdown link title escaping."""

from __future__ import annotations

import pytest

from social_activity.markdown import escape_link_title, markdown_link


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('say "hi"', "say &#34;hi&#34;"),
        ("f(x)", "f&#40;x&#41;"),
        (')("', "&#41;&#40;&#34;"),
        ("plain text", "plain text"),
        ("", ""),
    ],
)
def test_escape_link_title(raw: str, expected: str) -> None:
    assert escape_link_title(raw) == expected


def test_escape_link_title_leaves_no_breaking_characters() -> None:
    escaped = escape_link_title('a "(b)" ) ( "" c')
    assert '"' not in escaped
    assert "(" not in escaped
    assert ")" not in escaped


def test_escape_link_title_is_distinct_per_character() -> None:
    outputs = {escape_link_title(char) for char in '"()'}
    assert len(outputs) == 3


def test_markdown_link_escapes_title_only() -> None:
    link = markdown_link('a "label"', "https://example.com/(x)", 'View "it"')
    assert link == '[a "label"](https://example.com/(x) "View &#34;it&#34;")'


def test_markdown_link_without_title() -> None:
    assert markdown_link("x", "https://x.co") == "[x](https://x.co)"
