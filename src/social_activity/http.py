"""HTTP access for provider APIs."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)


class HttpClient:
    """Thin ``requests`` wrapper that maps every failure to ``TransportError``."""

    DEFAULT_TIMEOUT = 30
    USER_AGENT = "social-activity/0.1"

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT,
        user_agent: str = USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self._session = session

    def get_text(
        self,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> str:
        """GET ``url`` and return the decoded body; non-2xx responses raise."""
        request_headers = {"User-Agent": self.user_agent}
        if headers:
            request_headers.update(headers)

        session = self._session or requests
        try:
            response = session.get(
                url,
                params=dict(params) if params else None,
                headers=request_headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise TransportError(f"GET {_redact(url)} failed: {exc}") from exc

        logger.debug("http_get url=%s status=%s bytes=%d", _redact(url), response.status_code, len(response.content))
        return response.text

    def get_json(
        self,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> tuple[Any, str]:
        """GET ``url`` and return ``(parsed_json, raw_text)``."""
        text = self.get_text(url, params=params, headers=headers)
        return parse_json_body(text, url), text


def parse_json_body(text: str, url: str = "") -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise TransportError(f"Malformed JSON from {_redact(url) or 'response'}: {exc}") from exc


def _redact(url: str) -> str:
    """Strip the query string, which may carry an access token."""
    return url.split("?", 1)[0]
