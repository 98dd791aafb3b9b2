"""Shared fixtures."""

from __future__ import annotations

import pytest

from services.config_manager import ConfigManager


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config singleton at a throwaway directory"""
    monkeypatch.setenv("DIFF_ALIGN_CONFIG_DIR", str(tmp_path))
    ConfigManager.reset_instance()
    yield tmp_path
    ConfigManager.reset_instance()
