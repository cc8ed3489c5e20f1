"""Tests for feeddump.core.paths - XDG directory resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from feeddump.core.config import get_settings
from feeddump.core.exceptions import PathResolutionError
from feeddump.core.paths import (
    expand,
    get_checkpoint_file,
    get_config_file,
    get_metadata_dir,
    get_output_dir,
    get_xdg_dir,
)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated HOME with no XDG overrides."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for var in ("XDG_CONFIG_HOME", "XDG_DATA_HOME", "FEEDDUMP_FOLDER"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


class TestXdgDir:
    def test_prefers_variable(self, home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", "/data")
        assert get_xdg_dir("XDG_DATA_HOME", ".local/share") == Path("/data")

    def test_falls_back_to_home(self, home: Path) -> None:
        assert get_xdg_dir("XDG_DATA_HOME", ".local/share") == home / ".local/share"

    def test_no_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("HOME", raising=False)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        with pytest.raises(PathResolutionError):
            get_xdg_dir("XDG_DATA_HOME", ".local/share")


class TestDefaults:
    """Default file and directory locations."""

    def test_config_file(self, home: Path) -> None:
        assert get_config_file() == home / ".config" / "feeddump" / "config.toml"

    def test_config_file_from_xdg(self, home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(home / "cfg"))
        assert get_config_file() == home / "cfg" / "feeddump" / "config.toml"

    def test_config_file_explicit(self, home: Path) -> None:
        assert get_config_file("~/my.toml") == home / "my.toml"

    def test_metadata_dir(self, home: Path) -> None:
        assert get_metadata_dir() == home / ".local/share" / "feeddump"

    def test_metadata_dir_configured(self, home: Path) -> None:
        assert get_metadata_dir("$HOME/.cache") == home / ".cache" / "feeddump"

    def test_checkpoint_file(self, home: Path) -> None:
        assert get_checkpoint_file() == home / ".local/share/feeddump/collections.json"

    def test_output_dir_default(self, home: Path) -> None:
        assert get_output_dir() == home / "feeddump"

    def test_output_dir_env_comes_through_settings(
        self, home: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """FEEDDUMP_FOLDER reaches the resolver only as ``default``."""
        monkeypatch.setenv("FEEDDUMP_FOLDER", "/srv/feeds")
        assert get_output_dir() == home / "feeddump"
        assert get_output_dir(None, get_settings().folder) == Path("/srv/feeds")

    def test_output_dir_without_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("HOME", raising=False)
        with pytest.raises(PathResolutionError):
            get_output_dir()
        assert get_output_dir(None, Path("/settings")) == Path("/settings")

    def test_output_dir_precedence(self, home: Path) -> None:
        assert get_output_dir("~/configured", Path("/settings")) == home / "configured"
        assert get_output_dir(None, Path("/settings")) == Path("/settings")


def test_expand(home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FEEDS", "feeds")
    assert expand("~/$FEEDS/x") == home / "feeds" / "x"
