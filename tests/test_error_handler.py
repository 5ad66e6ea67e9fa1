"""Tests for the unified CLI error handler."""
import pytest
import typer

from lexicon.error_handler import _debug_mode, handle_errors
from lexicon.errors import CategoryUnboundError, LexiconError, MessageNotFoundError


class TestHandleErrorsDecorator:
    def test_passes_through_on_success(self):
        @handle_errors
        def good_func():
            return "ok"

        assert good_func() == "ok"

    def test_catches_not_found(self, capsys):
        @handle_errors
        def bad_func():
            raise MessageNotFoundError("missing.key")

        with pytest.raises(typer.Exit) as exc_info:
            bad_func()
        assert exc_info.value.exit_code == 1
        assert "missing.key" in capsys.readouterr().out

    def test_unbound_hint(self, capsys):
        @handle_errors
        def bad_func():
            raise CategoryUnboundError("menus")

        with pytest.raises(typer.Exit):
            bad_func()
        out = capsys.readouterr().out
        assert "--catalog" in out
        assert "No menu label catalog is set" in out
        assert "LEXICON_MENUS_CATALOG" in out

    def test_catches_generic_lexicon_error(self):
        @handle_errors
        def bad_func():
            raise LexiconError("generic issue")

        with pytest.raises(typer.Exit) as exc_info:
            bad_func()
        assert exc_info.value.exit_code == 1

    def test_catches_unexpected_error(self):
        @handle_errors
        def crash_func():
            raise RuntimeError("oops")

        with pytest.raises(typer.Exit) as exc_info:
            crash_func()
        assert exc_info.value.exit_code == 1

    def test_catches_keyboard_interrupt(self):
        @handle_errors
        def interrupted():
            raise KeyboardInterrupt()

        with pytest.raises(typer.Exit) as exc_info:
            interrupted()
        assert exc_info.value.exit_code == 130

    def test_typer_exit_passes_through(self):
        @handle_errors
        def exits():
            raise typer.Exit(3)

        with pytest.raises(typer.Exit) as exc_info:
            exits()
        assert exc_info.value.exit_code == 3


class TestDebugMode:
    def test_debug_off_by_default(self):
        assert _debug_mode() is False

    def test_debug_on_with_1(self, monkeypatch):
        monkeypatch.setenv("LEXICON_DEBUG", "1")
        assert _debug_mode() is True

    def test_debug_context_rendered(self, monkeypatch, capsys):
        monkeypatch.setenv("LEXICON_DEBUG", "true")

        @handle_errors
        def bad_func():
            raise MessageNotFoundError("k", catalog="app.labels")

        with pytest.raises(typer.Exit):
            bad_func()
        out = capsys.readouterr().out
        assert "Context:" in out
        assert "app.labels" in out
