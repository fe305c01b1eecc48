"""Tests for preference persistence."""

import json

from notechat.config.persistence import ChatPreferences, PersistenceManager


def test_defaults_when_file_is_missing(tmp_path) -> None:
    manager = PersistenceManager(tmp_path / "config.json")

    prefs = manager.preferences

    assert prefs == ChatPreferences()
    assert prefs.model == "gpt-4o"


def test_updates_are_saved_and_reloaded(tmp_path) -> None:
    path = tmp_path / "config.json"
    manager = PersistenceManager(path)
    manager.update_credentials("  sk-abc  ", "org-1")
    manager.update_model("o3")
    manager.update_vault_path("/notes")
    manager.update_window_state(x=1, y=2, width=300, height=400)

    reloaded = PersistenceManager(path).preferences

    assert reloaded.api_key == "sk-abc"
    assert reloaded.organization_id == "org-1"
    assert reloaded.model == "o3"
    assert reloaded.vault_path == "/notes"
    assert (reloaded.window.width, reloaded.window.height) == (300, 400)


def test_partial_file_is_merged_over_defaults(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"model": "o3", "unknown": 1}), encoding="utf-8")

    prefs = PersistenceManager(path).preferences

    assert prefs.model == "o3"
    assert prefs.api_key == ""
    assert prefs.window.width == 520


def test_corrupt_file_falls_back_to_defaults(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert PersistenceManager(path).preferences == ChatPreferences()


def test_effective_credentials_fall_back_to_environment(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_ORG_ID", "org-env")

    assert ChatPreferences().effective_api_key() == "sk-env"
    assert ChatPreferences().effective_organization_id() == "org-env"
    assert ChatPreferences(api_key="sk-own").effective_api_key() == "sk-own"


def test_non_object_file_falls_back_to_defaults(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert PersistenceManager(path).preferences == ChatPreferences()
