"""Activity records, provider outcomes and the result of a feed build."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ActivityCategory(str, Enum):
    TWITTER = "twitter"
    GITHUB = "github"
    DRIBBBLE = "dribbble"


@dataclass(frozen=True)
class ActivityItem:
    category: ActivityCategory
    content: str
    occurred_at: datetime
    source_url: str = ""
    action_label: str = ""


@dataclass(frozen=True)
class ProviderOutcome:
    provider: str
    ok: bool
    item_count: int
    dropped_count: int = 0
    error: str | None = None


@dataclass(frozen=True)
class FeedResult:
    items: tuple[ActivityItem, ...]
    outcomes: tuple[ProviderOutcome, ...]
    output_path: str | None = None

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.ok)
