"""
Tests for settings loading.
"""

import pytest
from pydantic import ValidationError

from config.settings import ExtraTool, Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DEVSETUP_PROFILE", raising=False)
        settings = Settings()
        assert settings.profile is None
        assert settings.interactive is True
        assert settings.configure_git is True
        assert settings.windows.minimum_build == 19041
        assert settings.logging.level == "INFO"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("DEVSETUP_PROFILE", "wsl")
        monkeypatch.setenv("DEVSETUP_INTERACTIVE", "false")
        settings = Settings()
        assert settings.profile == "wsl"
        assert settings.interactive is False

    def test_nested_env(self, monkeypatch):
        monkeypatch.setenv("DEVSETUP_WINDOWS__MINIMUM_BUILD", "22000")
        assert Settings().windows.minimum_build == 22000

    def test_invalid_profile(self):
        with pytest.raises(ValidationError):
            Settings(profile="macos")

    def test_resolved_profile(self):
        assert Settings(profile="wsl").resolved_profile(system="Windows") == "wsl"
        assert Settings().resolved_profile(system="Windows") == "windows"
        assert Settings().resolved_profile(system="Linux") == "wsl"


class TestExtraTool:
    def test_valid(self):
        tool = ExtraTool(name="gh", manager="brew", package="gh")
        assert tool.command is None

    def test_unknown_manager(self):
        with pytest.raises(ValidationError, match="Unknown package manager"):
            ExtraTool(name="git", manager="choco", package="git")
