"""
Tests for main.py - the headless session entry point.
"""

import argparse
import json
import os
import sys
from unittest.mock import MagicMock, patch

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import Settings
from main import build_parser, main, run_session
from services.audio import SilentCues

FAST_ARGS = ["--rows", "8", "--columns", "8", "--tick-ms", "0", "--seed", "3",
             "--max-ticks", "20", "--no-sounds", "--no-countdown"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["SNAKE_ROWS", "SNAKE_COLUMNS", "SNAKE_TICK_MS", "SNAKE_SOUNDS",
                 "SNAKE_SEED", "SNAKE_ASSETS_DIR", "SNAKE_PLAYER", "SNAKE_LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def no_sleep():
    with patch("services.game_loop.time.sleep") as sleep:
        yield sleep


class TestBuildParser:

    def test_defaults_defer_to_settings(self):
        args = build_parser().parse_args([])
        assert args.rows is None
        assert args.columns is None
        assert args.tick_ms is None
        assert args.seed is None
        assert args.player is None
        assert args.no_sounds is False
        assert args.fps == 10

    def test_unknown_player_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--player", "llm"])


class TestRunSession:

    def test_cli_values_override_settings(self, no_sleep):
        settings = Settings(rows=30, columns=30, tick_ms=100, sounds=False, seed=1)
        args = build_parser().parse_args(FAST_ARGS)

        summary = run_session(settings, args)

        assert 0 < summary["ticks"] <= 20
        assert summary["player"] == "heuristic"
        assert summary["session"] == 1
        assert "video" not in summary
        no_sleep.assert_any_call(0.0)

    def test_settings_fill_in_missing_cli_values(self, no_sleep):
        settings = Settings(rows=6, columns=9, tick_ms=0, sounds=False, seed=5, player="random")
        args = argparse.Namespace(rows=None, columns=None, tick_ms=None, seed=None,
                                  max_ticks=10, player=None, no_countdown=True)

        with patch("main.GameLoop") as loop_cls:
            loop_cls.return_value.run.return_value.to_dict.return_value = {"score": 0}
            run_session(settings, args)

        kwargs = loop_cls.call_args.kwargs
        assert kwargs["rows"] == 6
        assert kwargs["columns"] == 9
        assert kwargs["seed"] == 5
        assert kwargs["player_variant"] == "random"
        assert kwargs["sounds_enabled"] is False
        assert isinstance(kwargs["audio"], SilentCues)

    def test_seed_zero_is_not_replaced(self, no_sleep):
        settings = Settings(seed=9, sounds=False)
        args = build_parser().parse_args(["--seed", "0", "--no-sounds"])

        with patch("main.GameLoop") as loop_cls:
            loop_cls.return_value.run.return_value.to_dict.return_value = {}
            run_session(settings, args)

        assert loop_cls.call_args.kwargs["seed"] == 0

    def test_record_writes_video(self, no_sleep, tmp_path):
        settings = Settings(sounds=False)
        output = str(tmp_path / "session.mp4")
        args = build_parser().parse_args(FAST_ARGS + ["--record", output, "--fps", "5"])

        with patch("services.video_generator.SessionRecorder") as recorder_cls:
            recorder = MagicMock()
            recorder.write_video.return_value = output
            recorder_cls.return_value = recorder
            summary = run_session(settings, args)

        recorder_cls.assert_called_once_with(fps=5)
        recorder.write_video.assert_called_once_with(output)
        assert recorder.called
        assert summary["video"] == output


class TestMain:

    def test_successful_run_prints_summary(self, no_sleep, capsys, tmp_path):
        code = main(FAST_ARGS + ["--env-file", str(tmp_path / "none.env")])

        assert code == 0
        out = capsys.readouterr().out
        assert "Session Result Summary" in out
        summary = json.loads(out.split("Session Result Summary:", 1)[1])
        assert 0 < summary["ticks"] <= 20

    def test_invalid_configuration_returns_2(self, monkeypatch, capsys, tmp_path):
        monkeypatch.setenv("SNAKE_ROWS", "abc")
        code = main(["--env-file", str(tmp_path / "none.env")])
        assert code == 2
        assert "SNAKE_ROWS" in capsys.readouterr().err

    def test_runtime_error_returns_1(self, tmp_path):
        with patch("main.run_session", side_effect=RuntimeError("boom")):
            assert main(["--env-file", str(tmp_path / "none.env")]) == 1

    def test_keyboard_interrupt_returns_1(self, tmp_path):
        with patch("main.run_session", side_effect=KeyboardInterrupt):
            assert main(["--env-file", str(tmp_path / "none.env")]) == 1

    @pytest.mark.parametrize("flags", [["--rows", "0"], ["--columns", "3"], ["--tick-ms", "-5"]])
    def test_invalid_cli_values_return_2(self, capsys, tmp_path, flags):
        with patch("main.run_session") as run:
            code = main(flags + ["--env-file", str(tmp_path / "none.env")])
        assert code == 2
        assert "Invalid configuration" in capsys.readouterr().err
        run.assert_not_called()

    def test_unknown_log_level_returns_2(self, monkeypatch, capsys, tmp_path):
        monkeypatch.setenv("SNAKE_LOG_LEVEL", "loud")
        with patch("main.run_session") as run:
            code = main(["--env-file", str(tmp_path / "none.env")])
        assert code == 2
        assert "SNAKE_LOG_LEVEL" in capsys.readouterr().err
        run.assert_not_called()
