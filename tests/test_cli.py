"""Tests for the lexicon CLI commands."""
import json
from decimal import Decimal

import pytest
import yaml
from typer.testing import CliRunner

from lexicon.cli import app
from lexicon.commands.catalog_cmd import coerce_argument

runner = CliRunner()


@pytest.fixture
def configured(monkeypatch, catalog_dir):
    monkeypatch.setenv("LEXICON_CATALOG_DIR", str(catalog_dir))
    monkeypatch.setenv("LEXICON_LABELS_CATALOG", "app.labels")
    monkeypatch.setenv("LEXICON_MESSAGES_CATALOG", "app.messages")
    return catalog_dir


class TestCoerceArgument:
    @pytest.mark.parametrize("value,expected", [
        ("3", 3),
        ("-12", -12),
        ("3.5", Decimal("3.5")),
        (".5", Decimal("0.5")),
        ("Ann", "Ann"),
        ("1e3", "1e3"),
        ("NaN", "NaN"),
    ])
    def test_coerce(self, value, expected):
        assert coerce_argument(value) == expected


class TestLookup:
    def test_plain(self, configured):
        result = runner.invoke(app, ["lookup", "labels", "greeting"])
        assert result.exit_code == 0
        assert result.output.strip() == "Hello"

    def test_locale(self, configured):
        result = runner.invoke(app, ["lookup", "labels", "file.title", "--locale", "de_DE"])
        assert result.exit_code == 0
        assert result.output.strip() == "Datei"

    def test_formatted(self, configured):
        result = runner.invoke(app, ["lookup", "messages", "items", "Ann", "3"])
        assert result.exit_code == 0
        assert result.output.strip() == "Hello, Ann! You have 3 items."

    def test_formatted_number_follows_locale(self, configured):
        result = runner.invoke(app, ["lookup", "messages", "total", "1234.5", "-l", "de-DE"])
        assert result.exit_code == 0
        assert result.output.strip() == "Summe: 1.234,5"

    def test_raw_arguments(self, configured):
        result = runner.invoke(app, ["lookup", "messages", "total", "1234.5", "-l", "de_DE", "--raw"])
        assert result.output.strip() == "Summe: 1234.5"

    def test_catalog_option(self, configured):
        result = runner.invoke(app, ["lookup", "menus", "quit", "--catalog", "app.labels"])
        assert result.exit_code == 0
        assert result.output.strip() == "Quit"

    def test_missing_key(self, configured):
        result = runner.invoke(app, ["lookup", "labels", "nonexistent.key"])
        assert result.exit_code == 1
        assert "nonexistent.key" in result.output

    def test_unbound_category(self, configured):
        result = runner.invoke(app, ["lookup", "errors", "anything"])
        assert result.exit_code == 1
        assert "No catalog bound" in result.output

    def test_bad_format(self, configured):
        result = runner.invoke(app, ["lookup", "messages", "items", "Ann"])
        assert result.exit_code == 1

    def test_unknown_category(self, configured):
        result = runner.invoke(app, ["lookup", "tooltips", "x"])
        assert result.exit_code != 0

    def test_no_catalog_dir(self):
        result = runner.invoke(app, ["lookup", "labels", "greeting"])
        assert result.exit_code == 1
        assert "catalog directory" in result.output


class TestShow:
    def test_json(self, configured):
        result = runner.invoke(app, ["show", "labels", "--locale", "de_DE", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "file.open": "Open file",
            "file.title": "Datei",
            "greeting": "Guten Tag",
            "quit": "Quit",
        }

    def test_table(self, configured):
        result = runner.invoke(app, ["show", "labels"])
        assert result.exit_code == 0
        assert "greeting" in result.output
        assert "Hello" in result.output

    def test_unbound(self, configured):
        result = runner.invoke(app, ["show", "menus"])
        assert result.exit_code == 1


class TestCheck:
    def test_reports_missing_keys(self, catalog_dir):
        result = runner.invoke(app, ["check", "app.labels", "--dir", str(catalog_dir)])
        assert result.exit_code == 1
        assert "de_DE" in result.output
        assert "quit" in result.output
        assert "file.open" in result.output

    def test_complete_locale(self, catalog_dir):
        with open(catalog_dir / "app" / "messages_fr.yaml", "w", encoding="utf-8") as f:
            yaml.safe_dump({"items": "Bonjour {0}, {1} articles.", "total": "Total : {0}"}, f)
        result = runner.invoke(app, ["check", "app.messages", "-l", "fr", "-l", "de", "--dir", str(catalog_dir)])
        assert result.exit_code == 0
        assert "complete" in result.output

    def test_no_variants(self, tmp_path):
        (tmp_path / "menus.yaml").write_text("file: File\n", encoding="utf-8")
        result = runner.invoke(app, ["check", "menus", "--dir", str(tmp_path)])
        assert result.exit_code == 0
        assert "No localized variants" in result.output

    def test_undecodable_file_is_resolution_error(self, tmp_path):
        (tmp_path / "menus.yaml").write_bytes(b"file: \xff\xfe\n")
        result = runner.invoke(app, ["check", "menus", "--dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "Cannot resolve catalog" in result.output
        assert "Unexpected error" not in result.output


class TestConfigCommands:
    def test_path(self):
        result = runner.invoke(app, ["config", "path"])
        assert result.exit_code == 0
        assert "global_config" in result.output

    def test_init_then_show(self):
        result = runner.invoke(app, ["config", "init", "--dir", "./strings"])
        assert result.exit_code == 0
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "./strings" in result.output

    def test_init_twice(self):
        runner.invoke(app, ["config", "init"])
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 1

    def test_set_known_key(self):
        result = runner.invoke(app, ["config", "set", "locale.default", "fr_FR"])
        assert result.exit_code == 0
        from lexicon.core.config_service import get_config_service
        assert get_config_service().get_default_locale().tag == "fr_FR"

    def test_set_unknown_key(self):
        result = runner.invoke(app, ["config", "set", "nope.key", "x"])
        assert result.exit_code == 1


class TestGlobalOptions:
    def test_plain_switches_console(self, configured, monkeypatch):
        from lexicon import ui

        monkeypatch.setattr(ui, "console", ui.console)
        result = runner.invoke(app, ["--plain", "lookup", "errors", "anything"])
        assert result.exit_code == 1
        assert "LEXICON_ERRORS_CATALOG" in result.output
        assert "\x1b[" not in result.output
        assert ui.console.no_color


class TestProviders:
    def test_lists_builtins(self):
        result = runner.invoke(app, ["providers"])
        assert result.exit_code == 0
        assert "memory" in result.output
        assert "yaml" in result.output
