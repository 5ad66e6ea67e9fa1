"""Shared fixtures for lexicon tests."""
import pytest
import yaml


@pytest.fixture(autouse=True)
def lexicon_env(tmp_path, monkeypatch):
    """Isolate every test from the real HOME, cwd, and LEXICON_* variables.

    The temp directory gets:
    - home/ used as HOME (global config lives under home/.config/lexicon)
    - work/ used as the current directory (project config, .env)
    """
    import os

    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for var in list(os.environ):
        if var.startswith("LEXICON_"):
            monkeypatch.delenv(var, raising=False)

    from lexicon.catalogs import reset_providers
    from lexicon.core.config_service import reset_config_service
    reset_config_service()
    reset_providers()
    yield tmp_path
    reset_config_service()
    reset_providers()


def _write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)


@pytest.fixture
def catalog_dir(tmp_path):
    """A YAML catalog tree with app.labels and app.messages in en, de, de_DE."""
    root = tmp_path / "i18n"
    _write_yaml(root / "app" / "labels.yaml", {
        "file": {"title": "File", "open": "Open file"},
        "greeting": "Hello",
        "quit": "Quit",
    })
    _write_yaml(root / "app" / "labels_de.yaml", {
        "file": {"title": "Datei"},
        "greeting": "Hallo",
    })
    _write_yaml(root / "app" / "labels_de_DE.yaml", {
        "greeting": "Guten Tag",
    })
    _write_yaml(root / "app" / "messages.yaml", {
        "items": "Hello, {0}! You have {1} items.",
        "total": "Total: {0}",
    })
    _write_yaml(root / "app" / "messages_de.yaml", {
        "items": "Hallo, {0}! Du hast {1} Artikel.",
        "total": "Summe: {0}",
    })
    return root


@pytest.fixture
def memory_provider():
    """An InMemoryProvider with one base catalog per category plus de/de_DE labels."""
    from lexicon.catalogs import InMemoryProvider

    provider = InMemoryProvider()
    provider.add("app.buttons", None, {"ok": "OK", "cancel": "Cancel"})
    provider.add("app.labels", None, {"name": "Name", "greeting": "Hello"})
    provider.add("app.labels", "de", {"name": "Name", "greeting": "Hallo"})
    provider.add("app.labels", "de_DE", {"greeting": "Guten Tag"})
    provider.add("app.menus", None, {"file": "File", "edit": "Edit"})
    provider.add("app.errors", None, {"missing": "File {0} not found"})
    provider.add("app.messages", None, {
        "items": "Hello, {0}! You have {1} items.",
        "bad": "Value {5} out of range",
        "verbatim": "It's {0}",
    })
    provider.add("app.logs", None, {"started": "Started in {0} ms"})
    return provider


@pytest.fixture
def registry(memory_provider):
    """A registry with every category bound (the first binding defaults the locale to en_US)."""
    from lexicon.registry import LocalizationRegistry

    reg = LocalizationRegistry(memory_provider)
    reg.set_buttons_catalog("app.buttons")
    reg.set_labels_catalog("app.labels")
    reg.set_menus_catalog("app.menus")
    reg.set_errors_catalog("app.errors")
    reg.set_messages_catalog("app.messages")
    reg.set_logs_catalog("app.logs")
    return reg
