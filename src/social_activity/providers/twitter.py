"""Twitter timeline ingestion and tweet-to-markdown conversion."""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from social_activity.config import Settings
from social_activity.errors import SchemaError
from social_activity.http import HttpClient
from social_activity.linker import (
    TWITTER_ROOT,
    HashtagEntity,
    MediaEntity,
    MentionEntity,
    TextEntities,
    UrlEntity,
    link_tweet_entities,
)
from social_activity.markdown import markdown_link
from social_activity.models import ActivityCategory, ActivityItem
from social_activity.providers.base import ProviderBatch, convert_records, expect_list, validate_record
from social_activity.timestamps import TWITTER_FORMAT, parse_timestamp

logger = logging.getLogger(__name__)

USER_TIMELINE_URL = "https://api.twitter.com/1.1/statuses/user_timeline.json"
ACTION_LABEL = "Tweeted"
# Reposts nest one level in practice; the cap only guards malformed data.
MAX_REPOST_DEPTH = 3


class _TweetModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TwitterUrl(_TweetModel):
    url: str
    display_url: str
    expanded_url: str
    indices: Optional[tuple[int, int]] = None


class TwitterHashtag(_TweetModel):
    text: str
    indices: Optional[tuple[int, int]] = None


class TwitterMention(_TweetModel):
    screen_name: str
    id_str: str = ""
    indices: Optional[tuple[int, int]] = None


class TwitterMedia(_TweetModel):
    url: str
    display_url: str
    id_str: str = ""
    expanded_url: str = ""


class TwitterEntities(_TweetModel):
    hashtags: list[TwitterHashtag] = Field(default_factory=list)
    user_mentions: list[TwitterMention] = Field(default_factory=list)
    urls: list[TwitterUrl] = Field(default_factory=list)
    media: Optional[list[TwitterMedia]] = None


class TwitterExtendedEntities(_TweetModel):
    media: list[TwitterMedia] = Field(default_factory=list)


class TwitterUser(_TweetModel):
    screen_name: str


class Tweet(_TweetModel):
    id_str: str
    full_text: str
    user: TwitterUser
    created_at: str
    lang: str = ""
    entities: TwitterEntities = Field(default_factory=TwitterEntities)
    extended_entities: Optional[TwitterExtendedEntities] = None
    # Kept raw so a malformed repost never invalidates the outer tweet.
    retweeted_status: Optional[dict[str, Any]] = None

    @property
    def permalink(self) -> str:
        return f"{TWITTER_ROOT}/{self.user.screen_name}/status/{self.id_str}"

    def reposted(self) -> Optional["Tweet"]:
        if self.retweeted_status is None:
            return None
        try:
            return validate_record(Tweet, self.retweeted_status)
        except SchemaError as exc:
            logger.warning("repost_ignored tweet_id=%s reason=%s", self.id_str, exc)
            return None

    def text_entities(self) -> TextEntities:
        return TextEntities(
            mentions=tuple(MentionEntity(m.screen_name) for m in self.entities.user_mentions),
            hashtags=tuple(HashtagEntity(h.text) for h in self.entities.hashtags),
            urls=tuple(
                UrlEntity(url=u.url, display_url=u.display_url, expanded_url=u.expanded_url)
                for u in self.entities.urls
            ),
            media=tuple(MediaEntity(url=m.url) for m in self.entities.media or ()),
        )

    def extended_media(self) -> tuple[MediaEntity, ...]:
        if self.extended_entities is None:
            return ()
        return tuple(
            MediaEntity(url=m.url, display_url=m.display_url) for m in self.extended_entities.media
        )


def tweet_content(tweet: Tweet, depth: int = 0) -> str:
    """Markdown content for a tweet, expanding a repost into ``RT @author ...``."""
    original = tweet.reposted() if depth < MAX_REPOST_DEPTH else None
    if original is not None:
        handle = original.user.screen_name
        author_link = markdown_link(f"@{handle}", f"{TWITTER_ROOT}/{handle}", f"View {handle} on Twitter")
        return f"RT {author_link} {tweet_content(original, depth + 1)}"

    return link_tweet_entities(tweet.full_text, tweet.text_entities(), tweet.extended_media())


def tweet_to_activity(raw: Any) -> ActivityItem:
    tweet = validate_record(Tweet, raw)
    return ActivityItem(
        category=ActivityCategory.TWITTER,
        content=tweet_content(tweet),
        occurred_at=parse_timestamp(tweet.created_at, TWITTER_FORMAT),
        source_url=tweet.permalink,
        action_label=ACTION_LABEL,
    )


class TwitterProvider:
    """Fetch the configured user's recent tweets."""

    name = ActivityCategory.TWITTER.value

    def __init__(self, settings: Settings, client: Optional[HttpClient] = None):
        self.settings = settings
        self.client = client or HttpClient(timeout=settings.http_timeout, user_agent=settings.user_agent)

    def fetch(self) -> ProviderBatch:
        token = self.settings.require("twitter_bearer_token")
        screen_name = self.settings.require("twitter_screen_name")

        payload, _ = self.client.get_json(
            USER_TIMELINE_URL,
            params={
                "tweet_mode": "extended",
                "count": str(self.settings.twitter_count),
                "screen_name": screen_name,
            },
            headers={"Authorization": f"Bearer {token}"},
        )
        records = expect_list(payload, self.name)
        logger.info("twitter_fetch screen_name=%s records=%d", screen_name, len(records))
        return convert_records(self.name, records, tweet_to_activity)
