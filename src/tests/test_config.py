from __future__ import annotations

import json

from news_search.config import (
    API_KEY_ENV,
    DEFAULT_CONFIG,
    load_config,
    resolve_api_key,
    save_config,
)


def test_api_key_precedence(monkeypatch):
    monkeypatch.setenv(API_KEY_ENV, "from-env")
    config = {"api_key": "from-config"}
    assert resolve_api_key("from-cli", config) == "from-cli"
    assert resolve_api_key(None, config) == "from-env"
    monkeypatch.delenv(API_KEY_ENV)
    assert resolve_api_key(None, config) == "from-config"
    assert resolve_api_key("  ", {}) is None


def test_load_config_creates_default(tmp_path):
    path = tmp_path / "nested" / "config.json"
    assert load_config(str(path)) == DEFAULT_CONFIG
    assert json.loads(path.read_text()) == DEFAULT_CONFIG


def test_save_then_load_round_trip(tmp_path):
    path = tmp_path / "config.json"
    save_config({"theme": "dark", "api_key": "k"}, str(path))
    assert load_config(str(path)) == {"theme": "dark", "api_key": "k"}


def test_non_object_config_is_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")
    assert load_config(str(path)) == DEFAULT_CONFIG
