"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration with environment variable overrides.

Features:
    - Single YAML file per run (path overridable with TEST_CONFIG_PATH)
    - Section-prefixed environment overrides (API_BASE_URL overrides api.base_url)
    - Dot notation path access with caller-supplied defaults
    - Environment strings converted to the type of the default

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

# Environment variable pointing at an alternative YAML file
CONFIG_PATH_ENV = "TEST_CONFIG_PATH"


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


def env_key_for(key: str) -> str:
    """
    Environment variable name for a dot-notation key.

    The first path segment acts as the prefix: ``api.retry_delay_ms`` is
    overridden by ``API_RETRY_DELAY_MS``.
    """
    return key.upper().replace(".", "_")


_TRUTHY = ("true", "1", "yes", "on")


class ConfigLoader:
    """
    Process-wide view of the harness configuration.

    Lookup order for ``get("api.timeout_ms", default)``:
        1. ``API_TIMEOUT_MS`` from the environment
        2. ``api.timeout_ms`` from the YAML file
        3. ``default``

    Usage:
        >>> ConfigLoader().get("api.retry_count", 0)
        2
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._initialized = False
            cls._instance = instance
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: YAML file to read; ``$TEST_CONFIG_PATH`` and then
                         the bundled config.yaml are used when omitted.
                         Ignored once the singleton exists.
        """
        if self._initialized:
            return

        self._config_path = Path(
            config_path or os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
        )
        self._config: Dict[str, Any] = {}
        self._load_config()
        self._initialized = True

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _load_config(self) -> None:
        if not self._config_path.is_file():
            logger.warning(
                f"No config file at {self._config_path}, "
                f"relying on environment and built-in defaults"
            )
            self._config = {}
            return

        try:
            loaded = yaml.safe_load(self._config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"{self._config_path} is not valid YAML: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"{self._config_path} must hold a mapping at the top level, "
                f"got {type(loaded).__name__}"
            )
        self._config = loaded
        logger.debug(f"Config read from {self._config_path}")

    def _lookup(self, key: str) -> Any:
        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(part)
        return node

    def get(self, key: str, default: Any = None) -> Any:
        """
        Resolve a dot-notation key such as ``"api.timeout_ms"``.

        An environment value is converted to the type of ``default``; a YAML
        ``null`` counts as unset.
        """
        env_value = os.environ.get(env_key_for(key))
        if env_value is not None:
            return self._convert_type(env_value, default)

        value = self._lookup(key)
        return default if value is None else value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Copy of one top-level YAML mapping, without environment overrides."""
        return dict(self._config.get(section) or {})

    def reload(self) -> None:
        self._load_config()
        logger.info(f"Config reloaded from {self._config_path}")

    @staticmethod
    def _convert_type(value: str, reference: Any) -> Any:
        """Coerce an env string like ``reference``; unparsable numbers stay strings."""
        if isinstance(reference, bool):
            return value.strip().lower() in _TRUTHY
        for number_type in (int, float):
            if isinstance(reference, number_type):
                try:
                    return number_type(value)
                except ValueError:
                    return value
        return value

    @classmethod
    def reset(cls) -> None:
        """Forget the singleton; the next ConfigLoader() re-reads file and env."""
        cls._instance = None


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "env_key_for",
]
