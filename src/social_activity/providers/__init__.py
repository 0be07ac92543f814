"""Provider adapters that turn third-party API records into activity items."""

from .base import Provider, ProviderBatch, convert_records
from .dribbble import DribbbleProvider
from .github import GitHubEventType, GitHubProvider
from .twitter import TwitterProvider

__all__ = [
    "DribbbleProvider",
    "GitHubEventType",
    "GitHubProvider",
    "Provider",
    "ProviderBatch",
    "TwitterProvider",
    "convert_records",
]
