"""
Configuration Manager - Handle diff viewer settings persistence
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from .constants import CONTEXT_LINES, MINIMUM_COLLAPSE_THRESHOLD


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        try:
            # 1. environment variable
            config_dir = os.environ.get("DIFF_ALIGN_CONFIG_DIR")

            # 2. home directory ~/.diff_align
            if not config_dir:
                try:
                    config_dir = os.path.expanduser("~/.diff_align")
                except Exception:
                    config_dir = None

            if config_dir:
                config_path = Path(config_dir)
                try:
                    config_path.mkdir(parents=True, exist_ok=True)
                    self._config_file = config_path / "config.json"
                except OSError as e:
                    print(f"Warning: Cannot write to {config_dir}: {e}")
                    self._config_file = None

            # 3. fallback: temp dir
            if not self._config_file:
                tmp_dir = Path(tempfile.gettempdir()) / "diff_align"
                tmp_dir.mkdir(parents=True, exist_ok=True)
                self._config_file = tmp_dir / "config.json"
                print(f"Using temporary config path: {self._config_file}")

        except OSError as e:
            print(f"Critical Error in ConfigManager init: {e}")
            self._config_file = Path(tempfile.gettempdir()) / "diff_align_config_fallback.json"

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Drop the singleton so the next get_instance() re-reads the environment"""
        cls._instance = None

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file"""
        if not self._config_file.exists():
            return self._default_config()

        try:
            with open(self._config_file) as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"Error loading config: {e}")
            return self._default_config()

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "diff": {
                "collapseUnchanged": True,
                "contextLines": CONTEXT_LINES,
                "minimumCollapseThreshold": MINIMUM_COLLAPSE_THRESHOLD,
            },
            "server": {"host": "0.0.0.0", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return self._config.copy()

    def get_diff_settings(self) -> dict[str, Any]:
        """Diff viewer settings with defaults filled in for missing keys"""
        settings = self._default_config()["diff"]
        settings.update(self.get_config().get("diff", {}))
        return settings

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        # Merge with existing config
        self._config.update(config)

        # Ensure config directory exists
        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        # Write to file
        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self._config[key] = value
        self.save_config(self._config)

    def set_collapse_unchanged(self, enabled: bool):
        """Persist the collapse-unchanged toggle"""
        diff = {**self.get_diff_settings(), "collapseUnchanged": enabled}
        self.set("diff", diff)
