"""
================================================================================
Configuration Loader
================================================================================

Process-wide settings for the storefront suite, read from
`vitacare_e2e/config/config.yaml`.

Lookup order for `get("section.key", default)`:
    1. environment variable SECTION_KEY, coerced to the type of `default`
    2. the YAML value at that dot path
    3. `default`

Set VITACARE_CONFIG to point the suite at another YAML file (for example a
staging storefront with its own journey data).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"
CONFIG_PATH_ENV = "VITACARE_CONFIG"

_TRUE_VALUES = ("true", "1", "yes", "on")
_MISSING = object()


class ConfigurationError(Exception):
    """Raised when the config file is unreadable or a required key is empty."""
    pass


def env_key_for(key: str) -> str:
    """`browser.headless` -> `BROWSER_HEADLESS`."""
    return key.upper().replace(".", "_")


def coerce_env_value(raw: str, like: Any) -> Any:
    """Convert an environment string to the type of `like` (left as str when unsure)."""
    if isinstance(like, bool):
        return raw.strip().lower() in _TRUE_VALUES
    for number_type in (int, float):
        if isinstance(like, number_type):
            try:
                return number_type(raw)
            except ValueError:
                logger.warning(f"Cannot read '{raw}' as {number_type.__name__}; using it as text")
                return raw
    return raw


def _lookup(tree: Dict[str, Any], key: str) -> Any:
    node: Any = tree
    for part in key.split("."):
        if not isinstance(node, dict) or node.get(part) is None:
            return _MISSING
        node = node[part]
    return node


class ConfigLoader:
    """
    Singleton view over the suite configuration.

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("site.base_url")
        'https://vitacare.nop-station.com/'
        >>> config.get("timeouts.page_load", 60000)
        60000
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: YAML file to read. Ignored once the singleton exists.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = self._pick_path(config_path)
        self._load_config()
        self._initialized = True

    @staticmethod
    def _pick_path(config_path: Optional[Path]) -> Path:
        if config_path:
            return Path(config_path)
        from_env = os.environ.get(CONFIG_PATH_ENV)
        return Path(from_env) if from_env else DEFAULT_CONFIG_PATH

    def _load_config(self) -> None:
        if not self._config_path.is_file():
            logger.warning(
                f"No config file at {self._config_path}; "
                f"only defaults and environment overrides apply"
            )
            self._config = {}
            return

        try:
            loaded = yaml.safe_load(self._config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"{self._config_path} is not valid YAML: {e}") from e

        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigurationError(f"{self._config_path} must contain a mapping at top level")
        self._config = loaded or {}
        logger.debug(f"Configuration read from {self._config_path}")

    @property
    def config_path(self) -> Path:
        return self._config_path

    def get(self, key: str, default: Any = None) -> Any:
        """Value at a dot path, with environment override (see module docstring)."""
        raw = os.environ.get(env_key_for(key))
        if raw is not None:
            return raw if default is None else coerce_env_value(raw, default)

        value = _lookup(self._config, key)
        return default if value is _MISSING else value

    def require(self, key: str) -> Any:
        """Like `get`, but a missing or empty value is a ConfigurationError."""
        value = self.get(key)
        if value in (None, ""):
            raise ConfigurationError(f"Missing required configuration key: {key}")
        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Top-level mapping (e.g. `journey`); empty dict when absent."""
        return self._config.get(section) or {}

    def reload(self) -> None:
        self._load_config()
        logger.info(f"Configuration reloaded from {self._config_path}")

    @classmethod
    def reset(cls) -> None:
        """Forget the singleton (tests swap config files with this)."""
        cls._instance = None
        cls._config = {}


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for `ConfigLoader().get(key, default)`."""
    return ConfigLoader().get(key, default)


__all__ = [
    "CONFIG_PATH_ENV",
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
    "coerce_env_value",
    "env_key_for",
    "get_config",
]
