from __future__ import annotations

from datetime import datetime

import pytest

from helpers import FakeHttpClient, load_fixture, load_fixture_text
from social_activity.errors import SchemaError, TransportError
from social_activity.providers.dribbble import (
    SHOTS_CACHE_FILENAME,
    SHOTS_URL,
    DribbbleProvider,
    shot_to_activity,
    tag_link,
)


def test_shot_to_activity_renders_headline_teaser_and_tags() -> None:
    item = shot_to_activity(load_fixture("dribbble_shots.json")[0], "octo")

    title = 'View Weather &#40;&#34;Beta&#34;&#41; App on Dribbble'
    url = "https://dribbble.com/shots/471756-Weather-App"
    assert item.content == (
        f'Unveiled a new Shot: [Weather ("Beta") App]({url} "{title}") '
        f'[![Weather ("Beta") App](https://cdn.dribbble.com/shots/471756/teaser.png)]({url} "{title}")'
        "\n\n"
        '[#ui](https://dribbble.com/octo/tags/ui "View shots tagged ui on Dribbble") '
        "[#user interface](https://dribbble.com/octo/tags/user%20interface "
        '"View shots tagged user interface on Dribbble")'
    )
    assert item.occurred_at == datetime(2019, 3, 1, 16, 30, 0)
    assert item.source_url == url
    assert item.action_label == "Shot"


def test_tag_link_quotes_path_segment() -> None:
    assert "/tags/c%2B%2B%2Fui " in tag_link("octo", "c++/ui")


def test_shot_without_images_is_rejected() -> None:
    with pytest.raises(SchemaError, match="images"):
        shot_to_activity(load_fixture("dribbble_shots.json")[1], "octo")


def test_provider_caches_raw_body_and_passes_token(settings, tmp_path) -> None:
    body = load_fixture_text("dribbble_shots.json")
    client = FakeHttpClient({SHOTS_URL: body})

    batch = DribbbleProvider(settings, client, cache_dir=tmp_path).fetch()

    assert len(batch.items) == 1
    assert batch.dropped == 1
    assert (tmp_path / SHOTS_CACHE_FILENAME).read_text(encoding="utf-8") == body
    assert client.calls[0]["params"] == {"access_token": "dr-token"}


def test_provider_does_not_cache_malformed_body(settings, tmp_path) -> None:
    client = FakeHttpClient({SHOTS_URL: "<html>oops</html>"})

    with pytest.raises(TransportError, match="Malformed JSON"):
        DribbbleProvider(settings, client, cache_dir=tmp_path).fetch()
    assert not (tmp_path / SHOTS_CACHE_FILENAME).exists()
