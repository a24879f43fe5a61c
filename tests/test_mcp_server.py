"""Tests for the MCP tool functions (skipped when the mcp extra is missing)."""

from __future__ import annotations

import json

import pytest

pytest.importorskip("mcp")

from grablink import clipboard  # noqa: E402
from grablink._router import build_dispatcher  # noqa: E402
from grablink.config import Settings  # noqa: E402
from grablink.mcp import server  # noqa: E402
from grablink.records import LinkRecord  # noqa: E402

from conftest import FakeSurface, app_registry  # noqa: E402


@pytest.fixture
def dispatcher(monkeypatch):
    apps = app_registry(
        safari=LinkRecord("https://example.com", "Example"),
        Finder=[LinkRecord("file:///a", "a"), LinkRecord("file:///b", "b")],
        mail=None,
    )
    dispatcher = build_dispatcher(
        Settings(preferred_app="safari"),
        FakeSurface(context="notes.md"),
        server._NoPrompt(),
        apps=apps,
    )
    monkeypatch.setattr(server, "_dispatcher", dispatcher)
    return dispatcher


class TestTools:
    def test_list_apps(self, dispatcher):
        apps = json.loads(server.list_apps())
        assert [a["id"] for a in apps] == ["safari", "Finder", "mail"]
        assert apps[1]["key"] == "F"

    def test_list_link_types(self, dispatcher):
        assert [t["id"] for t in json.loads(server.list_link_types())] == [
            "plain",
            "markdown",
            "org",
            "html",
        ]

    def test_grab_explicit(self, dispatcher):
        result = json.loads(server.grab_link(app="Finder", link_type="org"))
        assert result["success"] is True
        assert result["links"] == ["[[file:///a][a]]", "[[file:///b][b]]"]

    def test_grab_defaults(self, dispatcher):
        result = json.loads(server.grab_link())
        assert result["app"] == "safari"
        assert result["link_type"] == "markdown"
        assert result["links"] == ["[Example](https://example.com)"]

    def test_grab_absent(self, dispatcher):
        result = json.loads(server.grab_link(app="mail"))
        assert result["success"] is False
        assert "No link available from mail" in result["error"]

    def test_grab_unknown_app(self, dispatcher):
        result = json.loads(server.grab_link(app="opera"))
        assert result["success"] is False

    def test_no_preferred_app_does_not_prompt(self, monkeypatch):
        monkeypatch.setattr(
            server,
            "_dispatcher",
            build_dispatcher(Settings(), FakeSurface(), server._NoPrompt(), apps=app_registry()),
        )
        result = json.loads(server.grab_link())
        assert result["success"] is False
        assert "no preferred application" in result["error"]

    def test_copy(self, dispatcher, monkeypatch):
        board = {}
        monkeypatch.setattr(clipboard, "set_clipboard", lambda text: board.update(text=text))
        server.grab_link(app="safari", copy=True)
        assert board["text"] == "[Example](https://example.com)"
