from __future__ import annotations

from pathlib import Path

import pytest

from social_activity.config import Settings
from social_activity.errors import ConfigError


def test_settings_load_prefixed_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SOCIAL_ACTIVITY_PATH", str(tmp_path))
    monkeypatch.setenv("SOCIAL_TWITTER_SCREEN_NAME", "builder")
    monkeypatch.setenv("SOCIAL_TWITTER_COUNT", "25")
    monkeypatch.setenv("SOCIAL_FEED_LIMIT", "5")

    settings = Settings(_env_file=None)

    assert settings.activity_path == tmp_path
    assert settings.twitter_screen_name == "builder"
    assert settings.twitter_count == 25
    assert settings.feed_limit == 5


def test_settings_read_dotenv_file(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv("SOCIAL_GITHUB_USERNAME", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("SOCIAL_GITHUB_USERNAME=octo\n", encoding="utf-8")

    settings = Settings(_env_file=env_file)

    assert settings.github_username == "octo"


def test_require_names_missing_variable(monkeypatch) -> None:
    monkeypatch.delenv("SOCIAL_DRIBBBLE_ACCESS_TOKEN", raising=False)
    settings = Settings(_env_file=None)

    with pytest.raises(ConfigError, match="SOCIAL_DRIBBBLE_ACCESS_TOKEN not set!"):
        settings.require("dribbble_access_token")


def test_require_rejects_blank_values() -> None:
    settings = Settings(_env_file=None, github_username="   ")
    with pytest.raises(ConfigError):
        settings.require("github_username")


def test_require_activity_path_expands_user(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    settings = Settings(_env_file=None, activity_path=Path("~/site/data"))

    assert settings.require_activity_path() == tmp_path / "site" / "data"


def test_require_activity_path_missing(monkeypatch) -> None:
    monkeypatch.delenv("SOCIAL_ACTIVITY_PATH", raising=False)
    with pytest.raises(ConfigError, match="Activity feed filepath not set!"):
        Settings(_env_file=None).require_activity_path()
