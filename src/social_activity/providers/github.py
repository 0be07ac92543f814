"""GitHub public event ingestion and event-to-markdown conversion."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from social_activity.config import Settings
from social_activity.errors import MissingFieldError, StoreError, UnsupportedEventError
from social_activity.http import HttpClient
from social_activity.linker import GITHUB_ROOT, link_free_text
from social_activity.markdown import markdown_link
from social_activity.models import ActivityCategory, ActivityItem
from social_activity.providers.base import ProviderBatch, convert_records, expect_list, validate_record
from social_activity.storage import write_file
from social_activity.timestamps import ISO8601_UTC_FORMAT, parse_timestamp

logger = logging.getLogger(__name__)

API_ROOT = "https://api.github.com"
REPOS_CACHE_FILENAME = "github-repos.json"
ACTION_LABEL = "On"


class GitHubEventType(str, Enum):
    COMMIT_COMMENT = "CommitCommentEvent"
    ISSUE_COMMENT = "IssueCommentEvent"
    FORK = "ForkEvent"
    CREATE = "CreateEvent"
    ISSUES = "IssuesEvent"
    PULL_REQUEST = "PullRequestEvent"
    PUSH = "PushEvent"
    PUBLIC = "PublicEvent"
    RELEASE = "ReleaseEvent"

    @classmethod
    def parse(cls, raw: object) -> "GitHubEventType":
        try:
            return cls(raw)
        except ValueError:
            raise UnsupportedEventError(str(raw)) from None


class GitHubRepo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    url: str


class GitHubEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    repo: GitHubRepo
    created_at: str
    payload: dict[str, Any] = Field(default_factory=dict)


def get_path(tree: Any, path: str) -> str:
    """Walk ``tree`` along dotted ``path`` and return the string found there."""
    node = tree
    for segment in path.split("."):
        if not isinstance(node, Mapping) or segment not in node:
            raise MissingFieldError(path, segment)
        node = node[segment]
    if not isinstance(node, str):
        raise MissingFieldError(path)
    return node


def get_int_path(tree: Any, path: str) -> int:
    node = tree
    for segment in path.split("."):
        if not isinstance(node, Mapping) or segment not in node:
            raise MissingFieldError(path, segment)
        node = node[segment]
    if isinstance(node, bool):
        raise MissingFieldError(path)
    if isinstance(node, int):
        return node
    if isinstance(node, str) and node.strip().lstrip("-").isdigit():
        return int(node.strip())
    raise MissingFieldError(path)


def repo_link(full_name: str) -> str:
    return markdown_link(f"@{full_name}", f"{GITHUB_ROOT}/{full_name}", f"View {full_name} on GitHub")


def _commit_comment(event: GitHubEvent) -> str:
    body = link_free_text(get_path(event.payload, "comment.body"))
    link = markdown_link(event.repo.name, event.repo.url, f"View {event.repo.name} on GitHub")
    return f"{body} on {link}"


def _issue_comment(event: GitHubEvent) -> str:
    action = get_path(event.payload, "action")
    if action != "created":
        raise UnsupportedEventError(f"IssueCommentEvent.action={action}")

    title = get_path(event.payload, "issue.title")
    body = link_free_text(get_path(event.payload, "comment.body"))
    link = markdown_link(title, get_path(event.payload, "issue.html_url"), f"View {title} on GitHub")
    return f"{body} on {link}"


def _fork(event: GitHubEvent) -> str:
    full_name = get_path(event.payload, "forkee.full_name")
    forkee = markdown_link(
        f"@{full_name}",
        get_path(event.payload, "forkee.html_url"),
        f"View {full_name} on GitHub",
    )
    return f"Forked {repo_link(event.repo.name)} to {forkee}"


def _create(event: GitHubEvent) -> str:
    ref_type = get_path(event.payload, "ref_type")
    if ref_type != "repository":
        raise UnsupportedEventError(f"CreateEvent.ref_type={ref_type}")
    return f"Created {repo_link(event.repo.name)}"


def _issues(event: GitHubEvent) -> str:
    action = get_path(event.payload, "action")
    if action == "opened":
        verb, repo = "Opened", get_path(event.payload, "repository.full_name")
    elif action == "closed":
        verb, repo = "Closed", event.repo.name
    else:
        raise UnsupportedEventError(f"IssuesEvent.action={action}")

    title = get_path(event.payload, "issue.title")
    issue = markdown_link(title, get_path(event.payload, "issue.html_url"), f"View {title} on GitHub")
    return f"{verb} {issue} in {repo_link(repo)}"


def _pull_request(event: GitHubEvent) -> str:
    action = get_path(event.payload, "action")
    if action not in ("opened", "closed"):
        raise UnsupportedEventError(f"PullRequestEvent.action={action}")

    full_name = get_path(event.payload, "pull_request.base.repo.full_name")
    pull_request = markdown_link(
        get_path(event.payload, "pull_request.title"),
        get_path(event.payload, "pull_request.html_url"),
        "View this PR on GitHub",
    )
    return f"{action.capitalize()} a pull request in {repo_link(full_name)}:\n\n{pull_request}"


def _push(event: GitHubEvent) -> str:
    count = get_int_path(event.payload, "distinct_size")
    compare_url = (
        f"{GITHUB_ROOT}/{event.repo.name}/compare/"
        f"{get_path(event.payload, 'before')}...{get_path(event.payload, 'head')}"
    )
    noun = "commit" if count == 1 else "commits"
    changes = markdown_link(f"{count} {noun}", compare_url, "View these changes on GitHub")
    return f"Pushed {changes} to {repo_link(event.repo.name)}"


def _public(event: GitHubEvent) -> str:
    return f"Open sourced {repo_link(get_path(event.payload, 'repository.full_name'))}"


def _release(event: GitHubEvent) -> str:
    label = (
        f"@{get_path(event.payload, 'repository.full_name')} "
        f"{get_path(event.payload, 'release.tag_name')}"
    )
    release = markdown_link(label, get_path(event.payload, "release.html_url"), "View this release on GitHub")
    return f"Released {release}"


EVENT_HANDLERS: dict[GitHubEventType, Callable[[GitHubEvent], str]] = {
    GitHubEventType.COMMIT_COMMENT: _commit_comment,
    GitHubEventType.ISSUE_COMMENT: _issue_comment,
    GitHubEventType.FORK: _fork,
    GitHubEventType.CREATE: _create,
    GitHubEventType.ISSUES: _issues,
    GitHubEventType.PULL_REQUEST: _pull_request,
    GitHubEventType.PUSH: _push,
    GitHubEventType.PUBLIC: _public,
    GitHubEventType.RELEASE: _release,
}


def event_content(event: GitHubEvent) -> str:
    """Render the markdown sentence for a supported event; raise for anything else."""
    return EVENT_HANDLERS[GitHubEventType.parse(event.type)](event)


def event_to_activity(raw: Any) -> ActivityItem:
    event = validate_record(GitHubEvent, raw)
    return ActivityItem(
        category=ActivityCategory.GITHUB,
        content=event_content(event),
        occurred_at=parse_timestamp(event.created_at, ISO8601_UTC_FORMAT),
        source_url="",
        action_label=ACTION_LABEL,
    )


class GitHubProvider:
    """Fetch the configured user's public events, caching their repository list."""

    name = ActivityCategory.GITHUB.value

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
        token = self.settings.require("github_access_token")
        username = self.settings.require("github_username")
        headers = {
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github+json",
        }

        # The repository list is consumed elsewhere on the site; it is cached, not converted.
        repositories = self.client.get_text(
            f"{API_ROOT}/users/{username}/repos",
            params={"sort": "pushed"},
            headers=headers,
        )
        self._cache_repositories(repositories)

        payload, _ = self.client.get_json(f"{API_ROOT}/users/{username}/events/public", headers=headers)
        records = expect_list(payload, self.name)
        logger.info("github_fetch username=%s records=%d", username, len(records))
        return convert_records(self.name, records, event_to_activity)

    def _cache_repositories(self, body: str) -> None:
        if self.cache_dir is None:
            return
        try:
            write_file(self.cache_dir / REPOS_CACHE_FILENAME, body)
        except StoreError as exc:
            logger.error("github_repos_cache_failed reason=%s", exc)
