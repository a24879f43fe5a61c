"""Tests for platform detection and default wiring."""

from __future__ import annotations

import sys

import pytest

from grablink import _router
from grablink._router import build_dispatcher, detect_platform, get_registry
from grablink.config import Settings

from conftest import FakeSurface, ScriptedPrompter, app_registry


class TestDetectPlatform:
    def test_returns_known_platform(self):
        assert detect_platform() in ("windows", "macos", "linux")

    def test_matches_sys_platform(self):
        result = detect_platform()
        if sys.platform == "win32":
            assert result == "windows"
        elif sys.platform == "darwin":
            assert result == "macos"
        elif sys.platform.startswith("linux"):
            assert result == "linux"

    def test_unsupported(self, monkeypatch):
        monkeypatch.setattr(sys, "platform", "sunos5")
        with pytest.raises(RuntimeError, match="Unsupported platform"):
            detect_platform()


class TestGetRegistry:
    def test_unsupported_platform_raises(self):
        with pytest.raises(RuntimeError, match="No link providers available"):
            get_registry("linux")

    def test_macos_registry(self):
        registry = get_registry("macos")
        assert registry.ids()[:3] == ["chrome", "safari", "firefox"]

    def test_two_calls_return_distinct_instances(self):
        assert get_registry("macos") is not get_registry("macos")


class TestBuildDispatcher:
    def test_disabled_apps_removed(self):
        apps = app_registry(safari=None, mail=None)
        dispatcher = build_dispatcher(
            Settings(disabled_apps=["mail", "opera"]),
            FakeSurface(),
            ScriptedPrompter(),
            apps=apps,
        )
        assert dispatcher.selector.apps.ids() == ["safari"]

    def test_preferences_reach_selector(self):
        dispatcher = build_dispatcher(
            Settings(preferred_app="safari", preferred_link_type="org"),
            FakeSurface(),
            ScriptedPrompter(),
            apps=app_registry(safari=None),
        )
        assert dispatcher.selector.preferred_app == "safari"
        assert dispatcher.selector.preferred_link_type == "org"

    def test_uses_platform_registry_by_default(self, monkeypatch):
        monkeypatch.setattr(_router, "get_registry", lambda platform=None: app_registry(mail=None))
        dispatcher = build_dispatcher(Settings(), FakeSurface(), ScriptedPrompter())
        assert dispatcher.selector.apps.ids() == ["mail"]
