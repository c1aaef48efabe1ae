"""
Application configuration.

The full settings tree lives in ``DEFAULTS``. A user settings file (JSON)
is deep-merged on top of it at startup and the result is frozen, so the
process holds exactly one read-only configuration for its lifetime.

Environment-level switches (which settings file to read, HTTPS) are loaded
with pydantic-settings from the environment and ``.env``.

Times are in seconds unless the key says otherwise.
"""

import json
import logging
import sys
from collections.abc import Mapping, Sequence
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_MISSING = object()


def freeze(value: Any) -> Any:
    """Return a deeply read-only copy of ``value``.

    Mappings become ``MappingProxyType`` and lists/tuples become tuples.
    Scalars are returned as is.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base`` without mutating either.

    Keys of nested mappings are unioned with ``override`` winning on
    conflicting leaves. Sequences are replaced wholesale.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


DEFAULTS = freeze({
    "server": {
        "name": "Kiosk-Api",
        "isSandbox": True,
        "isHttps": False,
        "domain": "",
        "frontendUrl": "",
        "timeout": 24 * 3600,  # keep-alive timeout while waiting for a response
        "http": {
            "port": 8090,
        },
        "https": {
            "port": 443,
            "ssl": {
                "cert": "",  # .crt file
                "key": "",  # .key file
                "ca": "",  # intermediates bundle, .crt file
            },
        },
        "cors": {
            "credentials": True,
            "methods": ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
            "exposedHeaders": ["Content-Disposition"],
            "origin": [],
        },
        "rate_limit": {
            "enabled": True,
            "default": "60/minute",
        },
        "urls": {
            "default": "/",  # "/" is redirected to this path
            "web_routers": [
                {"csrf": False, "path": "/role", "module": "kiosk_api.interfaces.role.router"},
            ],
        },
    },
    "database": {
        "sql": {
            # Either a full SQLAlchemy URL or the individual parts below.
            "url": "",
            "dialect": "sqlite",
            "username": "",
            "password": "",
            "host": "",
            "port": "",
            "database": "kiosk.db",
            "echo": False,
            "sync": False,  # create missing tables at startup
            "pool": {
                "size": 100,  # maximum number of connections in pool
                "acquire_timeout": 30,  # wait for a free connection before failing
                "recycle": 3600,
            },
        },
    },
    "auth": {
        "token": {
            "key": "x-access-token",
        },
        "csrf": {
            "cookie": "csrf_token",
            "header": "x-csrf-token",
        },
    },
    "log": {
        "level": "INFO",
        "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "file": "",  # e.g. ./log/index.out, empty logs to stdout only
        "max_bytes": 10_000_000,
        "backups": 10,
    },
})


class ConfigStore:
    """Frozen configuration tree with dotted-path lookup.

    Build it once at startup (``get_configuration`` or
    ``ConfigStore.from_overrides``) and pass it to whatever needs it.
    """

    def __init__(self, tree: Mapping[str, Any]) -> None:
        self._tree = freeze(tree)

    @classmethod
    def from_overrides(
        cls,
        overrides: Mapping[str, Any] | None = None,
        defaults: Mapping[str, Any] = DEFAULTS,
    ) -> "ConfigStore":
        """Merge user overrides on top of the defaults."""
        return cls(deep_merge(defaults, overrides or {}))

    def get(self, key: str | None = None, fallback: Any = None) -> Any:
        """Return the whole tree, or the value at a dot-separated ``key``.

        Numeric parts index into sequences (``server.urls.web_routers.0.path``).
        A missing key returns ``fallback`` and logs a warning.
        """
        if not key:
            return self._tree

        node: Any = self._tree
        for part in key.split("."):
            node = _child(node, part)
            if node is _MISSING:
                logger.warning("<Config> Key %s does not exist.", key)
                return fallback
        return node


def _child(node: Any, part: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(part, _MISSING)
    if isinstance(node, Sequence) and not isinstance(node, str) and part.isdigit():
        index = int(part)
        return node[index] if index < len(node) else _MISSING
    return _MISSING


class EnvSettings(BaseSettings):
    """Process-level switches loaded from environment.

    Attributes:
        settings_file: JSON file holding the user overrides.
        https: Serve over HTTPS instead of HTTP.
    """

    model_config = SettingsConfigDict(
        env_prefix="KIOSK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    settings_file: str = "settings.json"
    https: bool = False


def _settings_file_from_argv(argv: Sequence[str]) -> str | None:
    for arg in argv:
        if arg.startswith("--setting=") or arg.startswith("--settings="):
            return arg.split("=", 1)[1]
    return None


def read_settings_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON settings file. A missing file yields no overrides."""
    path = Path(path)
    if not path.is_file():
        logger.warning("Settings file %s not found, using defaults.", path)
        return {}
    with path.open(encoding="utf-8") as handle:
        overrides = json.load(handle)
    if not isinstance(overrides, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object")
    return overrides


def load_configuration(argv: Sequence[str] | None = None) -> ConfigStore:
    """Build the configuration from defaults, env switches and the settings file.

    Priority (lowest first): ``DEFAULTS``, HTTPS switch (``KIOSK_HTTPS`` or a
    bare ``https`` argument), user settings file (``--settings=`` argument or
    ``KIOSK_SETTINGS_FILE``).
    """
    argv = sys.argv if argv is None else argv
    env = EnvSettings()

    settings_file = _settings_file_from_argv(argv) or env.settings_file
    logger.info("Settings file: %s", settings_file)

    defaults = DEFAULTS
    if env.https or "https" in argv:
        defaults = deep_merge(DEFAULTS, {"server": {"isHttps": True}})

    return ConfigStore.from_overrides(read_settings_file(settings_file), defaults=defaults)


@lru_cache(maxsize=1)
def get_configuration() -> ConfigStore:
    """Return the process-wide configuration, loading it on first use."""
    return load_configuration()
