"""Dribbble shot ingestion."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from social_activity.config import Settings
from social_activity.errors import StoreError
from social_activity.http import HttpClient
from social_activity.markdown import markdown_link
from social_activity.models import ActivityCategory, ActivityItem
from social_activity.providers.base import ProviderBatch, convert_records, expect_list, validate_record
from social_activity.storage import write_file
from social_activity.timestamps import ISO8601_UTC_FORMAT, parse_timestamp

logger = logging.getLogger(__name__)

SHOTS_URL = "https://api.dribbble.com/v2/user/shots"
DRIBBBLE_ROOT = "https://dribbble.com"
SHOTS_CACHE_FILENAME = "dribbble.json"
ACTION_LABEL = "Shot"


class ShotImages(BaseModel):
    model_config = ConfigDict(extra="ignore")

    teaser: str
    normal: str
    hidpi: Optional[str] = None


class Shot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    html_url: str
    images: ShotImages
    published_at: str
    updated_at: Optional[str] = None
    description: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    tags: list[str] = Field(default_factory=list)


def tag_link(username: str, tag: str) -> str:
    return markdown_link(
        f"#{tag}",
        f"{DRIBBBLE_ROOT}/{username}/tags/{quote(tag, safe='')}",
        f"View shots tagged {tag} on Dribbble",
    )


def shot_content(shot: Shot, username: str) -> str:
    title = f"View {shot.title} on Dribbble"
    headline = markdown_link(shot.title, shot.html_url, title)
    teaser = markdown_link(f"![{shot.title}]({shot.images.teaser})", shot.html_url, title)
    tags = " ".join(tag_link(username, tag) for tag in shot.tags)
    return f"Unveiled a new Shot: {headline} {teaser}\n\n{tags}"


def shot_to_activity(raw: Any, username: str) -> ActivityItem:
    shot = validate_record(Shot, raw)
    return ActivityItem(
        category=ActivityCategory.DRIBBBLE,
        content=shot_content(shot, username),
        occurred_at=parse_timestamp(shot.published_at, ISO8601_UTC_FORMAT),
        source_url=shot.html_url,
        action_label=ACTION_LABEL,
    )


class DribbbleProvider:
    """Fetch the authenticated user's shots and cache the raw response."""

    name = ActivityCategory.DRIBBBLE.value

    def __init__(
        self,
        settings: Settings,
        client: Optional[HttpClient] = None,
        cache_dir: Optional[Path] = None,
    ):
        self.settings = settings
        self.client = client or HttpClient(timeout=settings.http_timeout, user_agent=settings.user_agent)
        self.cache_dir = cache_dir

    def fetch(self) -> ProviderBatch:
        token = self.settings.require("dribbble_access_token")
        username = self.settings.require("dribbble_username")

        payload, body = self.client.get_json(SHOTS_URL, params={"access_token": token})
        records = expect_list(payload, self.name)
        self._cache_shots(body)

        logger.info("dribbble_fetch username=%s records=%d", username, len(records))
        return convert_records(self.name, records, lambda raw: shot_to_activity(raw, username))

    def _cache_shots(self, body: str) -> None:
        if self.cache_dir is None:
            return
        try:
            write_file(self.cache_dir / SHOTS_CACHE_FILENAME, body)
        except StoreError as exc:
            logger.error("dribbble_cache_failed reason=%s", exc)
