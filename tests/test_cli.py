# Area: Shared Tests
"""Tests for the command-line interface."""

import json
import logging
import os
import tempfile

import pytest
from unittest.mock import patch

from party_core.cli import main, parse_actions, parse_args
from party_core.demo_module import DEMO_QUIZ_CONFIG
from party_core.types import ActionType


@pytest.fixture
def isolated_env():
    """Run with a clean environment and the log file in a temp dir."""
    with tempfile.TemporaryDirectory() as tmpdir:
        env = {"PARTY_LOG_FILE": os.path.join(tmpdir, "cli.log"), "PARTY_LOG_LEVEL": "WARNING"}
        with patch.dict(os.environ, env, clear=True):
            yield tmpdir
        pkg_logger = logging.getLogger("party_core")
        for handler in list(pkg_logger.handlers):
            pkg_logger.removeHandler(handler)
            handler.close()


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert args.demo is False
        assert args.validate is None
        assert args.actions == ""

    def test_demo_with_actions(self):
        args = parse_args(["--demo", "--actions", "ADVANCE,BACK", "--no-color"])
        assert args.demo is True
        assert args.no_color is True

    def test_parse_actions(self):
        actions = parse_actions(" advance, BACK ,,RESTART")
        assert [a.type for a in actions] == [ActionType.ADVANCE, ActionType.BACK, ActionType.RESTART]

    def test_parse_actions_rejects_unknown(self):
        with pytest.raises(ValueError):
            parse_actions("ADVANCE,FLY")


class TestDemoRun:
    """Tests for --demo."""

    def test_demo_runs_to_summary(self, isolated_env, capsys):
        code = main(["--demo", "--no-color", "--actions", "ADVANCE,ADVANCE,ADVANCE,ADVANCE"])

        out = capsys.readouterr().out
        assert code == 0
        assert "LIFECYCLE/READY" in out
        assert "CONTENT/NEXT" in out
        assert "Final phase: summary (screen: summary)" in out

    def test_demo_without_actions_stays_in_intro(self, isolated_env, capsys):
        code = main(["--demo", "--no-color"])
        assert code == 0
        assert "Final phase: intro" in capsys.readouterr().out

    def test_unknown_action_fails(self, isolated_env, capsys):
        code = main(["--demo", "--actions", "FLY"])
        assert code == 1
        assert "Unknown action type" in capsys.readouterr().err

    def test_no_configs_fails(self, isolated_env, capsys):
        code = main([])
        assert code == 1
        assert "No game configs found" in capsys.readouterr().err

    def test_unregistered_game_fails(self, isolated_env, capsys):
        code = main(["--demo", "--game", "nameblame", "--no-color"])
        assert code == 1
        assert "nameblame" in capsys.readouterr().err

    def test_config_dir_overrides_demo_config(self, isolated_env, capsys):
        game_dir = os.path.join(isolated_env, "games", "demo")
        os.makedirs(game_dir)
        config = dict(DEMO_QUIZ_CONFIG, title="Custom Demo", gameSettings={"maxQuestionsTotal": 1})
        with open(os.path.join(game_dir, "game.json"), "w", encoding="utf-8") as f:
            json.dump(config, f)

        code = main([
            "--config-dir", os.path.join(isolated_env, "games"),
            "--game", "demo-quiz", "--no-color", "--actions", "ADVANCE,ADVANCE",
        ])

        assert code == 0
        assert "Final phase: summary" in capsys.readouterr().out

    def test_config_dir_game_with_own_id(self, isolated_env, capsys):
        game_dir = os.path.join(isolated_env, "games", "nameblame")
        os.makedirs(game_dir)
        with open(os.path.join(game_dir, "game.json"), "w", encoding="utf-8") as f:
            json.dump(dict(DEMO_QUIZ_CONFIG, id="nameblame", title="Name Blame"), f)

        code = main([
            "--config-dir", os.path.join(isolated_env, "games"),
            "--game", "nameblame", "--no-color", "--actions", "ADVANCE",
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "LIFECYCLE/READY" in out
        assert "Final phase: play" in out


class TestValidate:
    """Tests for --validate."""

    def test_valid_file(self, isolated_env, capsys):
        path = os.path.join(isolated_env, "game.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(DEMO_QUIZ_CONFIG, f)

        code = main(["--validate", path])

        out = capsys.readouterr().out
        assert code == 0
        assert "Valid: demo-quiz v1.0.0 (3 phases)" in out
        assert "actions=[ADVANCE, BACK]" in out

    def test_invalid_file(self, isolated_env, capsys):
        path = os.path.join(isolated_env, "game.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(dict(DEMO_QUIZ_CONFIG, phases=[]), f)

        code = main(["--validate", path])

        err = capsys.readouterr().err
        assert code == 1
        assert f"Invalid: {path}" in err
        assert "phases" in err

    def test_invalid_log_level(self, capsys):
        with patch.dict(os.environ, {"PARTY_LOG_LEVEL": "LOUD"}, clear=True):
            code = main(["--demo"])
        assert code == 1
        assert "PARTY_LOG_LEVEL" in capsys.readouterr().err
