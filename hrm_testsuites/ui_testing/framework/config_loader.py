"""
================================================================================
Configuration Loader
================================================================================

Suite configuration from `hrm_testsuites/config/config.yaml`, with any leaf
overridable from the environment.

    ui.base_url                 -> UI_BASE_URL
    timeouts.element            -> TIMEOUTS_ELEMENT
    credentials.valid.password  -> CREDENTIALS_VALID_PASSWORD

Environment strings are coerced to the type of the default passed to `get()`
(bool, int, float). `HRM_CONFIG` points the loader at another YAML file,
e.g. a staging copy of the demo target.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple

import yaml
from loguru import logger

from .errors import ConfigurationError


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"
CONFIG_PATH_ENV = "HRM_CONFIG"

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_SECRET_MARKERS = ("password", "secret", "token")


def env_key(path: str) -> str:
    """Environment variable that overrides a dot path."""
    return path.upper().replace(".", "_")


def _coerce(raw: str, reference: Any, name: str) -> Any:
    # bool before int: bool is an int subclass
    if isinstance(reference, bool):
        return raw.strip().lower() in _TRUE_VALUES
    for kind, label in ((int, "an integer"), (float, "a number")):
        if isinstance(reference, kind):
            try:
                return kind(raw)
            except ValueError:
                raise ConfigurationError(f"{name} must be {label}, got {raw!r}") from None
    return raw


def _leaves(tree: Dict[str, Any], prefix: str = "") -> Iterator[Tuple[str, Any]]:
    for key, value in tree.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict):
            yield from _leaves(value, f"{path}.")
        else:
            yield path, value


class ConfigLoader:
    """
    Process-wide view of the suite configuration.

    Lookup order for `get("a.b", default)`: the `A_B` environment variable,
    then the YAML value, then `default`.
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if self._initialized:
            return
        if config_path is None:
            config_path = os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
        self._path = Path(config_path)
        self._data: Dict[str, Any] = {}
        self._read()
        self._initialized = True

    def _read(self) -> None:
        if not self._path.exists():
            logger.warning(f"No configuration at {self._path}; environment and defaults only")
            self._data = {}
            return

        try:
            data = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"{self._path} is not valid YAML: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{self._path} must contain a mapping at the top level")
        self._data = data
        logger.debug(f"Configuration loaded from {self._path}")

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        name = env_key(key)
        raw = os.environ.get(name)
        if raw is not None:
            return _coerce(raw, default, name)

        node: Any = self._data
        for part in key.split("."):
            node = node.get(part) if isinstance(node, dict) else None
            if node is None:
                return default
        return node

    def get_section(self, section: str) -> Dict[str, Any]:
        """Top-level section as a dict ({} when absent)."""
        return self._data.get(section) or {}

    def overrides(self) -> Dict[str, str]:
        """
        YAML keys currently replaced from the environment, keyed by dot path.

        Values of secret-looking keys are masked so the result can be logged
        or attached to a report.
        """
        found = {}
        for path, _ in _leaves(self._data):
            raw = os.environ.get(env_key(path))
            if raw is None:
                continue
            secret = any(marker in path.lower() for marker in _SECRET_MARKERS)
            found[path] = "***" if secret else raw
        return found

    def reload(self) -> None:
        self._read()
        logger.info(f"Configuration reloaded from {self._path}")

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded instance (tests point it at other files)."""
        cls._instance = None


__all__ = [
    "CONFIG_PATH_ENV",
    "ConfigLoader",
    "DEFAULT_CONFIG_PATH",
    "env_key",
]
