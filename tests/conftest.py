from __future__ import annotations

from pathlib import Path

import pytest

from social_activity.config import Settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        activity_path=tmp_path,
        twitter_bearer_token="tw-token",
        twitter_screen_name="builder",
        github_access_token="gh-token",
        github_username="octo",
        dribbble_access_token="dr-token",
        dribbble_username="octo",
    )
