"""Tests for the localetable command-line tool."""

import json
import logging
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from localetable.cli import (
    EXIT_CONFIG_ERROR,
    EXIT_FAILED,
    EXIT_SUCCESS,
    EXIT_WARNINGS,
    main,
    registry_from_table,
)
from localetable.resources import TextResource


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    logging.root.handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def table(tmp_path: Path) -> Path:
    path = tmp_path / "translation.csv"
    path.write_text(
        ",en-US,fr-FR\n"
        "# comment row\n"
        "Title,My Mod,Mon mod\n"
        "@@Unit,points,\n"
        "Description,Shows @@Unit,Affiche des @@Unit\n",
        encoding="utf-8",
    )
    return path


class TestRegistryFromTable:
    def test_collects_regular_keys_only(self):
        resource = TextResource(",en-US\n# c\n@@T,x\nA,a\n\nB,b\nA,again\n")
        assert registry_from_table(resource).keys == ["A", "B"]


class TestCheck:
    def test_clean_table(self, runner, table):
        result = runner.invoke(main, ["check", str(table), "--locale", "fr-FR"])
        assert result.exit_code == EXIT_SUCCESS
        assert "fr-FR: 2 keys, 0 warnings" in result.output

    def test_warnings_exit_code(self, runner, table, tmp_path):
        keys = tmp_path / "keys.yaml"
        keys.write_text("- Title\n- Description\n- Missing\n", encoding="utf-8")

        result = runner.invoke(main, ["check", str(table), "--keys", str(keys)])

        assert result.exit_code == EXIT_WARNINGS
        assert "WARNING" in result.output
        assert "[Missing]" in result.output

    def test_structural_failure(self, runner, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text(",fr-FR,en-US\nTitle,a,b\n", encoding="utf-8")

        result = runner.invoke(main, ["check", str(path)])

        assert result.exit_code == EXIT_FAILED
        assert "ERROR" in result.output
        assert "load failed" in result.output

    def test_default_locale_option(self, runner, tmp_path):
        path = tmp_path / "de.csv"
        path.write_text(",de-DE,en-US\nTitle,Hallo,Hello\n", encoding="utf-8")

        result = runner.invoke(main, ["check", str(path), "--default-locale", "de-DE"])
        assert result.exit_code == EXIT_SUCCESS

    def test_config_file(self, runner, tmp_path):
        path = tmp_path / "de.csv"
        path.write_text(",de-DE,en-US\nTitle,Hallo,Hello\n", encoding="utf-8")
        config = tmp_path / "config.yaml"
        config.write_text("loader:\n  default_locale: de-DE\n", encoding="utf-8")

        result = runner.invoke(main, ["check", str(path), "-c", str(config)])
        assert result.exit_code == EXIT_SUCCESS

    def test_invalid_config(self, runner, table, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("loader:\n  nonsense: 1\n", encoding="utf-8")

        result = runner.invoke(main, ["check", str(table), "-c", str(config)])
        assert result.exit_code == EXIT_CONFIG_ERROR

    def test_console_follows_configured_level(self, runner, table, monkeypatch):
        monkeypatch.setenv("LOCALETABLE_LOG_LEVEL", "error")

        result = runner.invoke(main, ["check", str(table)])

        assert result.exit_code == EXIT_SUCCESS
        [handler] = logging.root.handlers
        assert handler.level == logging.ERROR

    def test_console_installed_without_verbose(self, runner, table):
        runner.invoke(main, ["check", str(table)])
        [handler] = logging.root.handlers
        assert handler.level == logging.WARNING

    def test_missing_table(self, runner, tmp_path):
        result = runner.invoke(main, ["check", str(tmp_path / "none.csv")])
        assert result.exit_code != 0


class TestShow:
    def test_json(self, runner, table):
        result = runner.invoke(main, ["show", str(table), "--locale", "fr-FR", "--format", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "Title": "Mon mod",
            "Description": "Affiche des points",
        }

    def test_yaml_default(self, runner, table):
        result = runner.invoke(main, ["show", str(table)])
        assert result.exit_code == 0
        assert "Title: My Mod" in result.output
        assert "Description: Shows points" in result.output

    def test_failure(self, runner, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("#,en-US\n", encoding="utf-8")
        result = runner.invoke(main, ["show", str(path)])
        assert result.exit_code == EXIT_FAILED


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "localetable" in result.output
