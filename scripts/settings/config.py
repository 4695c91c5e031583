"""
Unified configuration management for the museum tracker.

Provides centralized configuration with:
- JSON file loading with defaults
- Environment variable overrides
- Dot-notation access
"""

import copy
import json
import os
import sys
from pathlib import Path
from typing import Any, Optional


class TrackerConfig:
    """
    Singleton configuration manager.

    Usage:
        from settings.config import config

        if config.get('analytics.cache_enabled'):
            # ... cache results

        data_dir = config.get('store.data_dir')
    """

    _instance = None
    _config = None
    _config_loaded = False

    def __new__(cls):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def load(self, config_path: Optional[Path] = None):
        """
        Load configuration from file.

        Args:
            config_path: Path to tracker_config.json (optional)
        """
        if self._config_loaded:
            return

        if config_path is None:
            config_path = Path(__file__).parent.parent.parent / "config" / "tracker_config.json"

        self._config = self._get_defaults()
        if config_path.exists():
            try:
                with open(config_path) as f:
                    self._merge(self._config, json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                print(f"Warning: Failed to load config from {config_path}: {e}", file=sys.stderr)

        self._apply_env_overrides()

        self._config_loaded = True

    def _get_defaults(self) -> dict:
        """
        Get default configuration.

        Returns:
            Dictionary with default settings
        """
        return {
            "version": "1.0.0",
            "store": {
                "data_dir": "~/.museum-tracker/data",
            },
            "analytics": {
                "cache_enabled": True,
                "cache_ttl_sec": 300,
                "seasonal_order": "chronological",
            },
            "highlights": {
                "per_category": 3,
                "recent_limit": 5,
            },
            "search": {
                "history_size": 10,
            },
        }

    def _merge(self, base: dict, overrides: dict):
        """Recursively merge file values over defaults."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _apply_env_overrides(self):
        """Apply environment variable overrides to configuration."""
        if "MUSEUM_TRACKER_DATA_DIR" in os.environ:
            self._config["store"]["data_dir"] = os.environ["MUSEUM_TRACKER_DATA_DIR"]

        # MUSEUM_TRACKER_CACHE_ENABLED=false
        if "MUSEUM_TRACKER_CACHE_ENABLED" in os.environ:
            value = os.environ["MUSEUM_TRACKER_CACHE_ENABLED"].lower()
            self._config["analytics"]["cache_enabled"] = value in ("true", "1", "yes")

        if "MUSEUM_TRACKER_CACHE_TTL_SEC" in os.environ:
            try:
                self._config["analytics"]["cache_ttl_sec"] = float(os.environ["MUSEUM_TRACKER_CACHE_TTL_SEC"])
            except ValueError:
                print("Warning: Ignoring non-numeric MUSEUM_TRACKER_CACHE_TTL_SEC", file=sys.stderr)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value with dot notation.

        Args:
            key: Configuration key (e.g., "analytics.cache_ttl_sec")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if not self._config_loaded:
            self.load()

        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

        return value if value is not None else default

    def set(self, key: str, value: Any):
        """
        Set configuration value (runtime only, not persisted).

        Args:
            key: Configuration key (dot notation)
            value: Value to set
        """
        if not self._config_loaded:
            self.load()

        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def reload(self, config_path: Optional[Path] = None):
        """Force reload configuration from file."""
        self._config_loaded = False
        self.load(config_path)

    def get_all(self) -> dict:
        """
        Get entire configuration dictionary.

        Returns:
            Deep copy of the full configuration
        """
        if not self._config_loaded:
            self.load()
        return copy.deepcopy(self._config)


# Singleton instance for import
config = TrackerConfig()

# Auto-load on import
config.load()
