"""Tests for the dyncrud CLI."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from dyncrud.cli import app

runner = CliRunner()


@pytest.fixture
def uvicorn_run() -> Iterator[MagicMock]:
    with patch("uvicorn.run") as run:
        yield run


@pytest.fixture
def logging_setup() -> Iterator[MagicMock]:
    with patch("dyncrud.runtime.logging.setup_logging") as setup:
        yield setup


class TestVersion:
    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert result.output.startswith("dyncrud ")


class TestServe:
    def test_serve_defaults(
        self,
        uvicorn_run: MagicMock,
        logging_setup: MagicMock,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.delenv("DYNCRUD_PORT", raising=False)
        monkeypatch.delenv("DYNCRUD_HOST", raising=False)

        result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0, result.output
        assert "http://127.0.0.1:7777" in result.output
        assert "/swagger-ui" in result.output
        kwargs = uvicorn_run.call_args.kwargs
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 7777

    def test_options_override_environment(
        self,
        uvicorn_run: MagicMock,
        logging_setup: MagicMock,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.setenv("DYNCRUD_PORT", "9000")

        result = runner.invoke(
            app,
            ["serve", "--port", "8123", "--log-dir", str(tmp_path), "--strict-schemas"],
        )

        assert result.exit_code == 0, result.output
        assert uvicorn_run.call_args.kwargs["port"] == 8123
        logging_setup.assert_called_once_with(tmp_path, "INFO")
        served_app = uvicorn_run.call_args.args[0]
        assert served_app.state.model_service.strict_schemas is True

    def test_environment_is_used(
        self,
        uvicorn_run: MagicMock,
        logging_setup: MagicMock,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("DYNCRUD_PORT", "9000")

        result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0, result.output
        assert uvicorn_run.call_args.kwargs["port"] == 9000

    def test_bad_environment_exits(
        self,
        uvicorn_run: MagicMock,
        logging_setup: MagicMock,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("DYNCRUD_PORT", "not-a-port")

        result = runner.invoke(app, ["serve"])

        assert result.exit_code == 1
        uvicorn_run.assert_not_called()
