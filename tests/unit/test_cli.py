"""Tests for the feeddump command line."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest
from pydantic import ValidationError
from typer.testing import CliRunner

from feeddump import __version__
from feeddump.cli import app
from feeddump.http.client import HttpClient

runner = CliRunner()


@pytest.fixture
def env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every default directory into tmp_path."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("FEEDDUMP_FOLDER", str(tmp_path / "out"))
    return tmp_path


@pytest.fixture
def config_file(env: Path) -> Path:
    path = env / "config" / "feeddump" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text('[source]\nb = "https://b.example/rss"\na = "https://a.example/rss"\n')
    return path


class TestRunCommand:
    """Tests for `feeddump run`."""

    def test_dry_run(self, env: Path, config_file: Path) -> None:
        result = runner.invoke(app, ["run", "--dry-run"])

        assert result.exit_code == 0
        lines = result.stdout.strip().splitlines()
        assert lines == [
            f"{env / 'out' / 'a'} -> https://a.example/rss",
            f"{env / 'out' / 'b'} -> https://b.example/rss",
        ]
        assert (env / "out" / "a").is_dir()
        assert not (env / "data" / "feeddump" / "collections.json").exists()

    def test_explicit_config(self, env: Path, tmp_path: Path) -> None:
        path = tmp_path / "other.toml"
        path.write_text('[setting]\noutput_dir = "~/elsewhere"\n[source]\nx = "https://x/rss"\n')

        result = runner.invoke(app, ["run", "-d", "-c", str(path)])

        assert result.exit_code == 0
        assert f"{env / 'elsewhere' / 'x'} -> https://x/rss" in result.stdout

    def test_missing_config(self, env: Path) -> None:
        result = runner.invoke(app, ["run"])
        assert result.exit_code == 1

    def test_invalid_config(self, env: Path, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[source\n")
        result = runner.invoke(app, ["run", "-c", str(path)])
        assert result.exit_code == 1

    def test_unsupported_format(self, env: Path, tmp_path: Path) -> None:
        path = tmp_path / "md.toml"
        path.write_text('[setting]\noutput_format = "markdown"\n[source]\nx = "https://x/rss"\n')
        result = runner.invoke(app, ["run", "-c", str(path)])
        assert result.exit_code == 1
        assert not (env / "out" / "x").exists()


class TestOtherCommands:
    def test_sources(self, config_file: Path) -> None:
        result = runner.invoke(app, ["sources"])
        assert result.exit_code == 0
        assert result.stdout.index("a.example") < result.stdout.index("b.example")

    def test_sources_missing_config(self, env: Path) -> None:
        assert runner.invoke(app, ["sources"]).exit_code == 1

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestRunErrors:
    def test_invalid_environment_setting(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FEEDDUMP_REQUEST_TIMEOUT", "abc")
        result = runner.invoke(app, ["run", "--dry-run"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValidationError)


class TestFullRun:
    """`feeddump run` over a mocked HTTP transport."""

    def test_summary_reports_duration(
        self, env: Path, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        document = (
            b'<?xml version="1.0" encoding="UTF-8"?>'
            b"<rss><channel><title>Feed</title><item><title>Post</title></item></channel></rss>"
        )

        class MockedHttpClient(HttpClient):
            def __init__(self, **kwargs) -> None:
                transport = httpx.MockTransport(lambda request: httpx.Response(200, content=document))
                super().__init__(transport=transport, **kwargs)

        monkeypatch.setattr("feeddump.core.runner.HttpClient", MockedHttpClient)

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 0
        assert "finished in" in result.stdout
        assert (env / "out" / "a" / "Post.html").exists()
        assert (env / "data" / "feeddump" / "collections.json").exists()
