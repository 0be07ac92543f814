from __future__ import annotations

from datetime import datetime
import json

import pytest

from helpers import FakeHttpClient, load_fixture, load_fixture_text
from social_activity.errors import ConfigError, SchemaError, TransportError
from social_activity.models import ActivityCategory
from social_activity.providers.base import convert_records
from social_activity.providers.twitter import (
    USER_TIMELINE_URL,
    Tweet,
    TwitterProvider,
    tweet_content,
    tweet_to_activity,
)


def _tweet(**overrides):
    raw = {
        "id_str": "77",
        "full_text": "plain words",
        "created_at": "Wed Oct 10 20:19:24 +0000 2018",
        "user": {"screen_name": "builder"},
    }
    raw.update(overrides)
    return raw


def test_tweet_to_activity_links_entities() -> None:
    raw = load_fixture("tweets.json")[0]

    item = tweet_to_activity(raw)

    assert item.category is ActivityCategory.TWITTER
    assert item.content == (
        'Hello [@alice](https://twitter.com/alice "View @alice on Twitter") '
        'check [#cool](https://twitter.com/hashtag/cool "View #cool on Twitter") '
        '[x.co](https://x.co "View x.co")'
    )
    assert item.occurred_at == datetime(2018, 10, 10, 20, 19, 24)
    assert item.source_url == "https://twitter.com/builder/status/1001"
    assert item.action_label == "Tweeted"


def test_retweet_expands_original_author_and_media() -> None:
    raw = load_fixture("tweets.json")[1]

    item = tweet_to_activity(raw)

    assert item.content == (
        'RT [@bob](https://twitter.com/bob "View bob on Twitter") '
        'Shipping "v2" today '
        '[https://pic.twitter.com/pic](https://pic.twitter.com/pic "View this media on Twitter")'
    )
    assert item.source_url == "https://twitter.com/builder/status/1002"
    assert item.occurred_at == datetime(2018, 10, 11, 8, 0, 0)


def test_malformed_retweet_falls_back_to_outer_text() -> None:
    raw = _tweet(full_text="RT @bob: hi", retweeted_status={"id_str": "1"})

    item = tweet_to_activity(raw)

    assert item.content == "RT @bob: hi"


def test_tweet_without_user_is_a_schema_error() -> None:
    raw = load_fixture("tweets.json")[2]
    with pytest.raises(SchemaError, match="user"):
        tweet_to_activity(raw)


def test_nested_reposts_stop_at_depth_cap() -> None:
    innermost = _tweet(id_str="1", full_text="core", user={"screen_name": "d"})
    raw = innermost
    for depth, name in enumerate(("c", "b", "a", "z")):
        raw = _tweet(id_str=str(depth + 2), full_text=f"outer {name}", user={"screen_name": name}, retweeted_status=raw)

    content = tweet_content(Tweet.model_validate(raw))

    assert content.count("RT ") == 3
    assert content.endswith("outer c")


def test_convert_batch_drops_bad_records_and_keeps_good_ones() -> None:
    batch = convert_records("twitter", load_fixture("tweets.json"), tweet_to_activity)

    assert [item.source_url.rsplit("/", 1)[-1] for item in batch.items] == ["1001", "1002"]
    assert batch.dropped == 2


def test_provider_requests_timeline_with_bearer_token(settings) -> None:
    client = FakeHttpClient({USER_TIMELINE_URL: load_fixture_text("tweets.json")})

    batch = TwitterProvider(settings, client).fetch()

    assert len(batch.items) == 2
    assert batch.dropped == 2
    call = client.calls[0]
    assert call["params"] == {"tweet_mode": "extended", "count": "10", "screen_name": "builder"}
    assert call["headers"] == {"Authorization": "Bearer tw-token"}


def test_provider_requires_token(settings) -> None:
    settings = settings.model_copy(update={"twitter_bearer_token": ""})
    client = FakeHttpClient()

    with pytest.raises(ConfigError, match="SOCIAL_TWITTER_BEARER_TOKEN"):
        TwitterProvider(settings, client).fetch()
    assert client.calls == []


def test_provider_rejects_non_list_payload(settings) -> None:
    client = FakeHttpClient({USER_TIMELINE_URL: json.dumps({"errors": [{"code": 89}]})})

    with pytest.raises(TransportError, match="JSON array"):
        TwitterProvider(settings, client).fetch()


def test_out_of_range_timestamp_drops_only_that_tweet() -> None:
    good = load_fixture("tweets.json")[0]
    edge = _tweet(id_str="78", created_at="Mon Jan 01 00:00:00 +0100 0001")

    batch = convert_records("twitter", [good, edge], tweet_to_activity)

    assert [item.source_url for item in batch.items] == ["https://twitter.com/builder/status/1001"]
    assert batch.dropped == 1
