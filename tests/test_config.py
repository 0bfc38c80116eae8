"""Tests for ManagerConfig.from_env."""

from pathlib import Path

import pytest

from formscope.config import ManagerConfig
from formscope.errors import ConfigurationError


class TestManagerConfig:
    def test_defaults(self):
        config = ManagerConfig.from_env()
        assert config.profiles_path == Path("profiles")
        assert config.freeze_format == "json"
        assert config.log_level == "WARNING"

    def test_base_path(self, tmp_path):
        config = ManagerConfig.from_env(base_path=tmp_path)
        assert config.profiles_path == tmp_path / "profiles"

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FORMSCOPE_PROFILES_PATH", str(tmp_path / "p"))
        monkeypatch.setenv("FORMSCOPE_FREEZE_FORMAT", "YAML")
        monkeypatch.setenv("FORMSCOPE_LOG_LEVEL", "debug")
        config = ManagerConfig.from_env(base_path=Path("/ignored"))
        assert config.profiles_path == tmp_path / "p"
        assert config.freeze_format == "yaml"
        assert config.log_level == "DEBUG"

    def test_bad_freeze_format(self, monkeypatch):
        monkeypatch.setenv("FORMSCOPE_FREEZE_FORMAT", "pickle")
        with pytest.raises(ConfigurationError, match="pickle"):
            ManagerConfig.from_env()
