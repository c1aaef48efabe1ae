"""
Tests for the configuration store.

Covers merging user settings over the defaults, the read-only tree,
dotted lookups and how the settings file is located.
"""

import json
import logging

import pytest

from kiosk_api.core.config import (
    DEFAULTS,
    ConfigStore,
    deep_merge,
    freeze,
    load_configuration,
    read_settings_file,
)


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_keys_are_unioned(self) -> None:
        merged = deep_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3, "z": 4}})
        assert merged == {"a": {"x": 1, "y": 3, "z": 4}}

    def test_lists_are_replaced(self) -> None:
        """Sequences from the override replace the default wholesale."""
        merged = deep_merge({"items": [1, 2, 3]}, {"items": [9]})
        assert merged["items"] == [9]

    def test_inputs_not_mutated(self) -> None:
        base = {"a": {"x": 1}}
        deep_merge(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}


class TestConfigStore:
    """Tests for ConfigStore lookups and immutability."""

    def test_override_wins_and_defaults_survive(self) -> None:
        store = ConfigStore.from_overrides({"server": {"http": {"port": 9000}}})
        assert store.get("server.http.port") == 9000
        assert store.get("server.https.port") == 443

    def test_route_table_replaced_not_merged(self) -> None:
        """A user route table replaces the default one."""
        routes = [{"path": "/kiosk", "module": "somewhere"}]
        store = ConfigStore.from_overrides({"server": {"urls": {"web_routers": routes}}})
        web_routers = store.get("server.urls.web_routers")
        assert len(web_routers) == 1
        assert web_routers[0]["path"] == "/kiosk"

    def test_numeric_parts_index_sequences(self) -> None:
        store = ConfigStore.from_overrides()
        assert store.get("server.urls.web_routers.0.path") == "/role"

    def test_repeated_get_returns_same_value(self) -> None:
        store = ConfigStore.from_overrides()
        assert store.get("server.cors") is store.get("server.cors")

    def test_get_without_key_returns_whole_tree(self) -> None:
        store = ConfigStore.from_overrides()
        assert store.get()["server"]["name"] == DEFAULTS["server"]["name"]

    def test_tree_is_read_only(self) -> None:
        store = ConfigStore.from_overrides()
        with pytest.raises(TypeError):
            store.get("server")["name"] = "changed"
        with pytest.raises(TypeError):
            store.get()["server"] = {}

    def test_lists_frozen_to_tuples(self) -> None:
        store = ConfigStore.from_overrides()
        assert isinstance(store.get("server.cors.methods"), tuple)

    def test_missing_key_returns_fallback_and_warns(self, caplog) -> None:
        caplog.set_level(logging.WARNING, logger="kiosk_api.core.config")
        store = ConfigStore.from_overrides()

        assert store.get("server.nope.deeper", "fallback") == "fallback"
        assert store.get("server.urls.web_routers.7") is None
        assert "Key server.nope.deeper does not exist" in caplog.text

    def test_falsy_values_are_not_missing(self) -> None:
        store = ConfigStore.from_overrides()
        assert store.get("server.isHttps", "fallback") is False
        assert store.get("server.cors.origin", "fallback") == ()

    def test_freeze_leaves_scalars(self) -> None:
        assert freeze(3) == 3
        assert freeze("text") == "text"


class TestLoadConfiguration:
    """Tests for locating and reading the settings file."""

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch, tmp_path) -> None:
        monkeypatch.delenv("KIOSK_SETTINGS_FILE", raising=False)
        monkeypatch.delenv("KIOSK_HTTPS", raising=False)
        monkeypatch.chdir(tmp_path)

    def _write_settings(self, path, settings) -> None:
        path.write_text(json.dumps(settings), encoding="utf-8")

    def test_settings_argument(self, tmp_path) -> None:
        settings = tmp_path / "kiosk.json"
        self._write_settings(settings, {"server": {"name": "From-File"}})

        store = load_configuration(["kiosk", f"--settings={settings}"])

        assert store.get("server.name") == "From-File"

    def test_singular_setting_argument(self, tmp_path) -> None:
        settings = tmp_path / "kiosk.json"
        self._write_settings(settings, {"server": {"http": {"port": 1234}}})

        store = load_configuration(["kiosk", f"--setting={settings}"])

        assert store.get("server.http.port") == 1234

    def test_settings_file_from_environment(self, tmp_path, monkeypatch) -> None:
        settings = tmp_path / "env.json"
        self._write_settings(settings, {"server": {"domain": "kiosk.local"}})
        monkeypatch.setenv("KIOSK_SETTINGS_FILE", str(settings))

        store = load_configuration(["kiosk"])

        assert store.get("server.domain") == "kiosk.local"

    def test_https_argument(self) -> None:
        store = load_configuration(["kiosk", "https"])
        assert store.get("server.isHttps") is True

    def test_https_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("KIOSK_HTTPS", "true")
        store = load_configuration(["kiosk"])
        assert store.get("server.isHttps") is True

    def test_missing_file_uses_defaults(self, caplog) -> None:
        caplog.set_level(logging.WARNING, logger="kiosk_api.core.config")

        store = load_configuration(["kiosk", "--settings=missing.json"])

        assert store.get("server.name") == DEFAULTS["server"]["name"]
        assert "missing.json not found" in caplog.text

    def test_non_object_file_rejected(self, tmp_path) -> None:
        settings = tmp_path / "list.json"
        self._write_settings(settings, [1, 2])
        with pytest.raises(ValueError):
            read_settings_file(settings)
