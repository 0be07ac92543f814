"""social_activity package."""

from .config import Settings
from .feed import assemble_feed, build_feed, render_feed_json
from .markdown import escape_link_title, markdown_link
from .models import ActivityCategory, ActivityItem, FeedResult, ProviderOutcome

__all__ = [
    "ActivityCategory",
    "ActivityItem",
    "FeedResult",
    "ProviderOutcome",
    "Settings",
    "assemble_feed",
    "build_feed",
    "escape_link_title",
    "markdown_link",
    "render_feed_json",
]

__version__ = "0.1.0"
