"""Tests for the CLI and configuration."""
import httpx
import pytest
from rich.console import Console
from typer.testing import CliRunner

from conftest import edit_block, sse_frame
from editstream.cli import app as cli_app
from editstream.cli.providers import get_config, get_log_callback
from editstream.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_STALL_TIMEOUT_MS,
    LogLevel,
    ReconcilerConfig,
    load_config,
)
from editstream.transport import HttpStreamTransport

runner = CliRunner()

SHORT_STREAM = (
    ": connected\n\n"
    + sse_frame({"status": "streaming", "text": "[]Working on it"})
    + sse_frame({
        "type": "final_message",
        "message": "[]Two edits." + edit_block("X", "old x", "new x") + edit_block("Y", "old y", "new y"),
    })
)


class TestReplayCommand:
    """Tests for `editstream replay`."""

    def test_replay_prints_proposals(self, tmp_path):
        """Test replaying a recorded stream."""
        path = tmp_path / "stream.sse"
        path.write_text(SHORT_STREAM)

        result = runner.invoke(cli_app.app, ["replay", str(path), "--chunk-size", "5"])

        assert result.exit_code == 0
        assert "Two edits." in result.output
        assert "new x" in result.output
        assert "new y" in result.output

    def test_replay_without_proposals(self, tmp_path):
        """Test a stream that carries no edit blocks."""
        path = tmp_path / "stream.sse"
        path.write_text(sse_frame({"status": "complete", "text": "Nothing to change"}))

        result = runner.invoke(cli_app.app, ["replay", str(path)])

        assert result.exit_code == 0
        assert "No edit proposals" in result.output

    def test_log_level_option(self, tmp_path):
        """Test that --log-level controls session log output."""
        path = tmp_path / "stream.sse"
        path.write_text(SHORT_STREAM)

        quiet = runner.invoke(cli_app.app, ["replay", str(path)])
        verbose = runner.invoke(cli_app.app, ["replay", str(path), "--log-level", "info"])

        assert quiet.exit_code == 0
        assert verbose.exit_code == 0
        assert "stream started" not in quiet.output
        assert "stream started" in verbose.output

    def test_replay_missing_file(self, tmp_path):
        """Test that Typer rejects a missing file."""
        result = runner.invoke(cli_app.app, ["replay", str(tmp_path / "missing.sse")])
        assert result.exit_code != 0


class TestStreamCommand:
    """Tests for `editstream stream`."""

    def test_stream_success(self, monkeypatch):
        """Test streaming from a mocked server."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(
            lambda r: httpx.Response(200, content=SHORT_STREAM.encode("utf-8"))
        ))
        monkeypatch.setattr(
            cli_app,
            "get_http_transport",
            lambda config: HttpStreamTransport(config.url, client=client),
        )

        result = runner.invoke(cli_app.app, ["stream", "Improve it", "--url", "http://test/api"])

        assert result.exit_code == 0
        assert "http://test/api" in result.output
        assert "new x" in result.output

    def test_stream_failure_exits_nonzero(self, monkeypatch):
        """Test that a transport fault is reported with exit code 1."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(502)))
        monkeypatch.setattr(
            cli_app,
            "get_http_transport",
            lambda config: HttpStreamTransport(config.url, client=client),
        )

        result = runner.invoke(cli_app.app, ["stream", "Improve it"])

        assert result.exit_code == 1
        assert "Request failed" in result.output
        assert "502" in result.output


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self, monkeypatch):
        """Test defaults with a clean environment."""
        monkeypatch.delenv("EDITSTREAM_URL", raising=False)
        monkeypatch.delenv("EDITSTREAM_STALL_TIMEOUT_MS", raising=False)
        monkeypatch.delenv("EDITSTREAM_REQUEST_TIMEOUT", raising=False)

        config = load_config()

        assert config.url == DEFAULT_ENDPOINT
        assert config.stall_timeout_ms == DEFAULT_STALL_TIMEOUT_MS
        assert config.stall_timeout_s == 2.0

    def test_environment_overrides(self, monkeypatch):
        """Test that the stall timeout is adjustable without code changes."""
        monkeypatch.setenv("EDITSTREAM_URL", "http://example/api")
        monkeypatch.setenv("EDITSTREAM_STALL_TIMEOUT_MS", "150")

        config = load_config()

        assert config.url == "http://example/api"
        assert config.stall_timeout_ms == 150

    def test_explicit_overrides_win(self, monkeypatch):
        """Test that explicit values beat the environment; None is ignored."""
        monkeypatch.setenv("EDITSTREAM_STALL_TIMEOUT_MS", "150")

        config = get_config(url=None, stall_ms=75)

        assert config.stall_timeout_ms == 75

    def test_invalid_timeout_rejected(self):
        """Test validation of the stall timeout."""
        with pytest.raises(ValueError):
            ReconcilerConfig(stall_timeout_ms=0)


class TestLogCallback:
    """Tests for the Rich log callback."""

    def test_filters_by_level(self):
        """Test that messages below the threshold are dropped."""
        console = Console(record=True, width=120)
        log = get_log_callback("warning", console)

        log("info", "session", "hidden")
        log("warning", "watchdog", "no data for [2.0s]")

        output = console.export_text()
        assert "hidden" not in output
        assert "no data for [2.0s]" in output
        assert "WARNING" in output

    def test_log_level_names(self):
        """Test LogLevel helpers."""
        assert LogLevel.from_string("ERROR") == LogLevel.ERROR
        assert LogLevel.from_string("nonsense") == LogLevel.DEBUG
        assert LogLevel.name(LogLevel.INFO) == "INFO"
