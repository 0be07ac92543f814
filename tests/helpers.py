"""Shared fakes and fixture loaders for tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from social_activity.errors import TransportError
from social_activity.http import parse_json_body

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture_text(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def load_fixture(name: str) -> Any:
    return json.loads(load_fixture_text(name))


class FakeHttpClient:
    """Stand-in for HttpClient keyed by URL (query string excluded)."""

    def __init__(self, responses: dict[str, str | Exception] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[dict[str, Any]] = []

    def get_text(self, url: str, *, params=None, headers=None) -> str:
        self.calls.append({"url": url, "params": dict(params or {}), "headers": dict(headers or {})})
        if url not in self.responses:
            raise TransportError(f"GET {url} failed: no fake response")
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    def get_json(self, url: str, *, params=None, headers=None) -> tuple[Any, str]:
        text = self.get_text(url, params=params, headers=headers)
        return parse_json_body(text, url), text
