"""Rewrite mentions, hashtags, URLs and media references into markdown links."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import re

from linkify_it import LinkifyIt

from social_activity.markdown import markdown_link

TWITTER_ROOT = "https://twitter.com"
GITHUB_ROOT = "https://github.com"

QUOTED_REPLY_MARKER = "\n\n> On"

# Scheme-qualified links only; bare domains and emails stay plain text.
_LINK_FINDER = LinkifyIt(options={"fuzzy_link": False, "fuzzy_email": False, "fuzzy_ip": False})
_LINK_SCHEMAS = ("http:", "https:")
_MENTION_RE = re.compile(r"(?<![\w@/\[])@([\w-]+)")


@dataclass(frozen=True)
class MentionEntity:
    screen_name: str


@dataclass(frozen=True)
class HashtagEntity:
    text: str


@dataclass(frozen=True)
class UrlEntity:
    url: str
    display_url: str
    expanded_url: str


@dataclass(frozen=True)
class MediaEntity:
    url: str
    display_url: str | None = None


@dataclass(frozen=True)
class TextEntities:
    mentions: tuple[MentionEntity, ...] = ()
    hashtags: tuple[HashtagEntity, ...] = ()
    urls: tuple[UrlEntity, ...] = ()
    media: tuple[MediaEntity, ...] = ()


def link_tweet_entities(
    text: str,
    entities: TextEntities | None = None,
    extended_media: Sequence[MediaEntity] = (),
) -> str:
    """Replace every literal occurrence of each entity with its markdown link."""
    entities = entities or TextEntities()

    for screen_name in _distinct(mention.screen_name for mention in entities.mentions):
        text = text.replace(
            f"@{screen_name}",
            markdown_link(
                f"@{screen_name}",
                f"{TWITTER_ROOT}/{screen_name}",
                f"View @{screen_name} on Twitter",
            ),
        )

    for tag in _distinct(hashtag.text for hashtag in entities.hashtags):
        text = text.replace(
            f"#{tag}",
            markdown_link(f"#{tag}", f"{TWITTER_ROOT}/hashtag/{tag}", f"View #{tag} on Twitter"),
        )

    seen_urls: set[str] = set()
    for url in entities.urls:
        if not url.url or url.url in seen_urls:
            continue
        seen_urls.add(url.url)
        text = text.replace(
            url.url,
            markdown_link(url.display_url, url.expanded_url, f"View {url.display_url}"),
        )

    # Only native (extended) media gets a link; plain media urls are dropped.
    extended_display = {
        media.url: media.display_url
        for media in reversed(tuple(extended_media))
        if media.url and media.display_url
    }
    for media_url in _distinct(media.url for media in (*extended_media, *entities.media)):
        if not media_url:
            continue
        display_url = extended_display.get(media_url)
        if display_url:
            target = f"https://{display_url}"
            replacement = markdown_link(target, target, "View this media on Twitter")
        else:
            replacement = ""
        text = text.replace(media_url, replacement)

    return text


def link_free_text(text: str, profile_root: str = GITHUB_ROOT) -> str:
    """Link bare URLs and @mentions in user-written text.

    Text after a quoted email reply marker is dropped. Mentions are only linked
    outside URL spans. Hashtags are left alone since on GitHub they usually
    reference issues, possibly in another repository.
    """
    text = text.split(QUOTED_REPLY_MARKER, 1)[0]

    parts: list[str] = []
    cursor = 0
    for start, end in find_url_spans(text):
        parts.append(_link_mentions(text, cursor, start, profile_root))
        url = text[start:end]
        if is_already_linked(text, start):
            parts.append(url)
        else:
            parts.append(markdown_link(url, url, f"View {url}"))
        cursor = end
    parts.append(_link_mentions(text, cursor, len(text), profile_root))
    return "".join(parts)


def find_url_spans(text: str) -> list[tuple[int, int]]:
    """``(start, end)`` offsets of every http(s) link in ``text``, in order."""
    matches = _LINK_FINDER.match(text) or []
    return [(match.index, match.last_index) for match in matches if match.schema in _LINK_SCHEMAS]


def is_already_linked(text: str, start: int) -> bool:
    """True when the token at ``start`` is a link target (``](``) or label (``[``)."""
    if start >= 2 and text[start - 2 : start] == "](":
        return True
    return start >= 1 and text[start - 1] == "["


def _link_mentions(text: str, start: int, end: int, profile_root: str) -> str:
    # Scanning the full string keeps the lookbehind accurate at segment edges.
    parts: list[str] = []
    cursor = start
    for match in _MENTION_RE.finditer(text, start, end):
        name = match.group(1)
        parts.append(text[cursor : match.start()])
        parts.append(markdown_link(f"@{name}", f"{profile_root}/{name}", f"View @{name} on GitHub"))
        cursor = match.end()
    parts.append(text[cursor:end])
    return "".join(parts)


def _distinct(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered
