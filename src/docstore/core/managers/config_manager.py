# src/docstore/core/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from docstore.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"

_TRUE_WORDS = ("1", "true", "yes", "on")


class ConfigManager:
    """
    Singleton holding the document store settings.

    Values come from the settings.json shipped inside the 'docstore' package
    and can be overridden in memory, e.g. by `docserver --set server.port=8080`.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._config = {}
            cls._instance.reset()
        return cls._instance

    def get_all(self) -> Dict[str, Any]:
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Looks up a dotted key such as 'parser.strict'."""
        value: Any = self._config
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(key)
        return default if value is None else value

    @staticmethod
    def _coerce(current: Any, value: Any, key_path: str) -> Any:
        """Casts an override to the type of the value it replaces."""
        if current is None or not isinstance(value, str):
            return value
        if isinstance(current, bool):
            # bool("false") would be True
            return value.strip().lower() in _TRUE_WORDS
        try:
            return type(current)(value)
        except (ValueError, TypeError):
            logger.warning("Setting '%s' expects %s; keeping '%s' as text.",
                           key_path, type(current).__name__, value)
            return value

    def set_nested(self, key_path: str, value: Any) -> bool:
        """Overrides a dotted key in memory. Returns False if a parent is not a section."""
        *sections, leaf = key_path.split('.')
        section = self._config
        for name in sections:
            section = section.setdefault(name, {})
            if not isinstance(section, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, name)
                return False

        section[leaf] = self._coerce(section.get(leaf), value, key_path)
        logger.info("Configuration updated: %s = %s", key_path, section[leaf])
        return True

    def apply_overrides(self, assignments: Iterable[str]) -> List[str]:
        """
        Applies 'key=value' strings and returns the keys that were set.

        Raises:
            ValueError: An assignment has no '=' or an empty key.
        """
        applied = []
        for assignment in assignments:
            key_path, sep, value = assignment.partition('=')
            key_path = key_path.strip()
            if not sep or not key_path:
                raise ValueError(f"Expected key=value, got '{assignment}'")
            if self.set_nested(key_path, value):
                applied.append(key_path)
        return applied

    def reset(self):
        """Reloads settings.json, dropping every in-memory override."""
        config_path = PathUtils.get_store_package_root() / SETTINGS_FILENAME
        if not config_path.exists():
            logger.warning("%s not found at %s. Using empty config.", SETTINGS_FILENAME, config_path)
            self._config = {}
            return
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
            logger.info("Configuration loaded from %s.", config_path)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load %s: %s", config_path, e, exc_info=True)
            self._config = {}


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
