"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from xcuidriver.cli import main, parse_args


class TestParseArgs:
    def test_touch_id_no_match(self) -> None:
        args = parse_args(["touch-id", "--no-match"])
        assert args.command == "touch-id"
        assert args.no_match is True

    def test_background_seconds(self) -> None:
        args = parse_args(["--wda-url", "http://phone:8100", "background", "--seconds", "2.5"])
        assert args.wda_url == "http://phone:8100"
        assert args.seconds == 2.5

    def test_defaults(self) -> None:
        args = parse_args(["screen"])
        assert args.config is None
        assert args.verbose is False


class TestMain:
    @pytest.fixture(autouse=True)
    def _isolated_cwd(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)

    def test_stub_agent_uses_stub_config(self) -> None:
        with patch("xcuidriver.stub.server.main") as run_stub:
            main(["stub-agent"])
        run_stub.assert_called_once_with(host="127.0.0.1", port=8100)

    def test_command_runs_with_url_override(self) -> None:
        with patch("xcuidriver.cli.asyncio.run") as run:
            main(["--wda-url", "http://phone:8100", "status"])
        coro = run.call_args.args[0]
        coro.close()
        run.assert_called_once()
