"""Tests for feeddump.core.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from feeddump.core.config import FeedConfig, Settings, get_settings, load_config
from feeddump.core.exceptions import ConfigNotFoundError, ConfigurationError

EXAMPLE_CONFIG = """
[setting]
output_format = "html"
output_dir = "~/feeds"
metadata_dir = "$HOME/.cache"

[source]
rust = "https://blog.rust-lang.org/feed.xml"
python = "https://blog.python.org/feeds/posts/default"
"""


class TestFeedConfig:
    """Tests for parsing the TOML config file."""

    def test_parse_example(self) -> None:
        config = FeedConfig.from_toml(EXAMPLE_CONFIG)
        assert config.setting.output_format == "html"
        assert config.setting.output_dir == "~/feeds"
        assert config.setting.metadata_dir == "$HOME/.cache"
        assert config.source["rust"] == "https://blog.rust-lang.org/feed.xml"

    def test_dotted_keys(self) -> None:
        config = FeedConfig.from_toml('source.blog = "https://example.com/rss"\n')
        assert config.source == {"blog": "https://example.com/rss"}

    def test_setting_is_optional(self) -> None:
        config = FeedConfig.from_toml('[source]\nblog = "https://example.com/rss"\n')
        assert config.setting.output_format == "html"
        assert config.setting.output_dir is None
        assert config.setting.metadata_dir is None

    def test_empty_document(self) -> None:
        assert list(FeedConfig.from_toml("").feeds()) == []

    def test_feeds_sorted_by_alias(self) -> None:
        config = FeedConfig.from_toml(EXAMPLE_CONFIG)
        assert [alias for alias, _ in config.feeds()] == ["python", "rust"]

    def test_invalid_toml(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            FeedConfig.from_toml("[source\nblog = ")

    @pytest.mark.parametrize(
        "text",
        [
            '[source]\nblog = 3\n',
            '[setting]\nunknown = "x"\n',
            'source = "https://example.com"\n',
        ],
    )
    def test_invalid_structure(self, text: str) -> None:
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            FeedConfig.from_toml(text)


class TestLoadConfig:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(EXAMPLE_CONFIG)
        assert len(load_config(path).source) == 2

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            load_config(tmp_path)


class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("FEEDDUMP_LOG_LEVEL", "FEEDDUMP_FOLDER", "FEEDDUMP_REQUEST_TIMEOUT"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.request_timeout == 30.0
        assert settings.max_retries == 2
        assert settings.folder is None

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDDUMP_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("FEEDDUMP_FOLDER", "/srv/feeds")
        monkeypatch.setenv("FEEDDUMP_REQUEST_TIMEOUT", "5")
        settings = get_settings()
        assert settings.log_level == "DEBUG"
        assert settings.folder == Path("/srv/feeds")
        assert settings.request_timeout == 5.0

    def test_overrides(self) -> None:
        assert get_settings(max_retries=0).max_retries == 0

    def test_timeout_validated(self) -> None:
        with pytest.raises(ValueError):
            Settings(request_timeout=0.1)
