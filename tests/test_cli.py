"""Tests for the command line interface."""

from pathlib import Path

import pandas as pd
import pytest
from click.testing import CliRunner

from team_draw.cli import cli, hex_to_rgb


@pytest.fixture
def runner():
    return CliRunner()


def register(runner: CliRunner, db_file: str, males: int, females: int) -> None:
    for i in range(males):
        result = runner.invoke(cli, ["add", db_file, f"man{i}", "--gender", "M"])
        assert result.exit_code == 0, result.output
    for i in range(females):
        result = runner.invoke(cli, ["add", db_file, f"woman{i}", "-g", "f"])
        assert result.exit_code == 0, result.output


class TestCli:
    """Test cases for the team-draw commands."""

    def test_init(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["init", "game.db"])
            assert result.exit_code == 0
            assert "Initialized database game.db" in result.output
            assert Path("game.db").exists()

    def test_add_and_list_players(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ["init", "game.db"])
            register(runner, "game.db", 2, 1)

            result = runner.invoke(cli, ["players", "game.db"])

            assert result.exit_code == 0
            assert "MAN0" in result.output
            assert "WOMAN0" in result.output
            assert "Total: 3 | Men: 2 | Women: 1" in result.output

    def test_add_blank_name_fails(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["add", "game.db", "  "])
            assert result.exit_code == 1
            assert "cannot be empty" in result.output

    def test_draw_needs_enough_players(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ["init", "game.db"])
            register(runner, "game.db", 3, 3)

            result = runner.invoke(cli, ["draw", "game.db", "--yes"])

            assert result.exit_code == 1
            assert "Need at least 8 players" in result.output

    def test_draw_and_export(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ["init", "game.db"])
            register(runner, "game.db", 4, 4)

            result = runner.invoke(cli, ["draw", "game.db"], input="y\n")
            assert result.exit_code == 0, result.output
            assert "Time 1" in result.output
            assert "Team sizes: {1: 4, 2: 4}" in result.output

            result = runner.invoke(cli, ["export", "game.db"])
            assert result.exit_code == 0
            assert result.output.startswith("🚨 *TIMES SORTEADOS!* 🚨")
            assert "By Marquinhos & Luquinhas App ©" in result.output

            result = runner.invoke(cli, ["export", "game.db", "--format", "csv", "--output", "teams.csv"])
            assert result.exit_code == 0
            assert len(pd.read_csv("teams.csv")) == 8

    def test_draw_cancelled(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ["init", "game.db"])
            register(runner, "game.db", 4, 4)

            result = runner.invoke(cli, ["draw", "game.db"], input="n\n")
            assert "Draw cancelled" in result.output

            result = runner.invoke(cli, ["teams", "game.db"])
            assert "No teams drawn yet" in result.output

    def test_export_requires_output_for_csv(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ["init", "game.db"])
            register(runner, "game.db", 4, 4)
            runner.invoke(cli, ["draw", "game.db", "--yes"])

            result = runner.invoke(cli, ["export", "game.db", "--format", "yaml"])
            assert result.exit_code == 1
            assert "--output is required" in result.output

    def test_remove_and_reset(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ["init", "game.db"])
            register(runner, "game.db", 1, 0)

            result = runner.invoke(cli, ["remove", "game.db", "1"])
            assert result.exit_code == 1
            assert "No player with id 1" in result.output

            result = runner.invoke(cli, ["reset", "game.db", "--yes"])
            assert result.exit_code == 0
            result = runner.invoke(cli, ["players", "game.db"])
            assert "Total: 0" in result.output

    def test_score(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ["init", "game.db"])
            runner.invoke(cli, ["score", "up", "game.db", "A"])
            runner.invoke(cli, ["score", "up", "game.db", "a"])
            runner.invoke(cli, ["score", "down", "game.db", "B"])

            result = runner.invoke(cli, ["score", "show", "game.db"])
            assert "Time A 2 x 0 Time B" in result.output

            result = runner.invoke(cli, ["score", "reset", "game.db"], input="y\n")
            assert "Time A 0 x 0 Time B" in result.output

    def test_bad_config_file(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--config", "missing.yaml", "init", "game.db"])
            assert result.exit_code == 1
            assert "Configuration file not found" in result.output


def test_hex_to_rgb():
    assert hex_to_rgb("#EF4444") == (239, 68, 68)
