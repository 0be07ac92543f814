"""Feed assembly, serialization and the end-to-end build run."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
import json
import logging
from typing import Optional

from social_activity.config import Settings
from social_activity.http import HttpClient
from social_activity.models import ActivityItem, FeedResult, ProviderOutcome
from social_activity.providers.base import Provider, ProviderBatch
from social_activity.providers.dribbble import DribbbleProvider
from social_activity.providers.github import GitHubProvider
from social_activity.providers.twitter import TwitterProvider
from social_activity.storage import write_file
from social_activity.timestamps import humanize_since, utc_now

logger = logging.getLogger(__name__)

FEED_FILENAME = "activities.json"
DEFAULT_FEED_LIMIT = 12


def assemble_feed(
    batches: Iterable[Sequence[ActivityItem]],
    limit: int = DEFAULT_FEED_LIMIT,
) -> tuple[ActivityItem, ...]:
    """Merge provider batches newest first and keep the most recent ``limit`` items."""
    merged: list[ActivityItem] = []
    for batch in batches:
        merged.extend(batch)

    merged.sort(key=lambda item: item.occurred_at, reverse=True)
    return tuple(merged[: max(0, limit)])


def run_providers(
    providers: Sequence[Provider],
    *,
    max_workers: int = 1,
) -> tuple[list[ProviderBatch], list[ProviderOutcome]]:
    """Run every provider; a failing provider contributes nothing and is reported."""
    if max_workers > 1 and len(providers) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(_run_one, providers))
    else:
        results = [_run_one(provider) for provider in providers]

    batches = [batch for batch, _ in results if batch is not None]
    outcomes = [outcome for _, outcome in results]
    return batches, outcomes


def _run_one(provider: Provider) -> tuple[Optional[ProviderBatch], ProviderOutcome]:
    try:
        batch = provider.fetch()
    except Exception as exc:
        logger.error("provider_failed provider=%s error=%s", provider.name, exc)
        return None, ProviderOutcome(provider=provider.name, ok=False, item_count=0, error=str(exc))

    return batch, ProviderOutcome(
        provider=provider.name,
        ok=True,
        item_count=len(batch.items),
        dropped_count=batch.dropped,
    )


def activity_to_dict(item: ActivityItem, now: Optional[datetime] = None) -> dict[str, object]:
    return {
        "type": item.category.value,
        "content": item.content,
        "datetime": {
            "url": item.source_url,
            "action": item.action_label,
            "ts": humanize_since(item.occurred_at, now),
        },
    }


def render_feed_json(items: Sequence[ActivityItem], now: Optional[datetime] = None) -> str:
    reference = now or utc_now()
    return json.dumps([activity_to_dict(item, reference) for item in items], ensure_ascii=False)


def default_providers(
    settings: Settings,
    client: Optional[HttpClient] = None,
    *,
    write_caches: bool = True,
) -> list[Provider]:
    """Twitter, GitHub and Dribbble providers; raw responses are cached only with ``write_caches``."""
    cache_dir = settings.require_activity_path() if write_caches else None
    return [
        TwitterProvider(settings, client),
        GitHubProvider(settings, client, cache_dir=cache_dir),
        DribbbleProvider(settings, client, cache_dir=cache_dir),
    ]


def build_feed(
    settings: Settings,
    *,
    providers: Optional[Sequence[Provider]] = None,
    client: Optional[HttpClient] = None,
    now: Optional[datetime] = None,
    limit: Optional[int] = None,
    max_workers: int = 1,
    dry_run: bool = False,
) -> FeedResult:
    """Fetch every provider, assemble the feed and write ``activities.json``.

    Raises:
        ConfigError: when the output directory is not configured.
        StoreError: when the feed file cannot be written.
    """
    output_dir = settings.require_activity_path()
    if providers is None:
        providers = default_providers(settings, client, write_caches=not dry_run)
    active_providers = list(providers)

    batches, outcomes = run_providers(active_providers, max_workers=max_workers)
    feed_limit = limit if limit is not None else settings.feed_limit
    items = assemble_feed((batch.items for batch in batches), limit=feed_limit)

    output_path = None
    if not dry_run:
        written = write_file(output_dir / FEED_FILENAME, render_feed_json(items, now))
        output_path = str(written)

    logger.info(
        "feed_built items=%d providers_ok=%d providers_failed=%d output=%s",
        len(items),
        sum(1 for outcome in outcomes if outcome.ok),
        sum(1 for outcome in outcomes if not outcome.ok),
        output_path or "-",
    )
    return FeedResult(items=items, outcomes=tuple(outcomes), output_path=output_path)
