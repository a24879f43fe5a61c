"""Tests for the grab-link command line."""

from __future__ import annotations

import io
import sys

import pytest

from grablink import _router, clipboard
from grablink.__main__ import main
from grablink.records import LinkRecord

from conftest import app_registry


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path):
    for name in (
        "GRABLINK_CONFIG",
        "GRABLINK_PREFERRED_APP",
        "GRABLINK_PREFERRED_LINK_TYPE",
        "GRABLINK_CONTEXT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GRABLINK_CONFIG", str(tmp_path / "config.toml"))
    monkeypatch.setattr(
        _router,
        "get_registry",
        lambda platform=None: app_registry(
            safari=LinkRecord("https://example.com", "Example"),
            mail=None,
        ),
    )


@pytest.fixture
def board(monkeypatch):
    board = {"text": None}
    monkeypatch.setattr(clipboard, "set_clipboard", lambda text: board.update(text=text))
    monkeypatch.setattr(clipboard, "get_clipboard", lambda: board["text"])
    return board


def _stdin(monkeypatch, text: str):
    monkeypatch.setattr(sys, "stdin", io.StringIO(text))


class TestMain:
    def test_prompts_and_inserts(self, monkeypatch, capsys):
        _stdin(monkeypatch, "s\nm\n")
        assert main([]) == 0
        captured = capsys.readouterr()
        assert captured.out == "[Example](https://example.com)\n"
        assert "[s]afari [m]ail" in captured.err
        assert "[p]lain [m]arkdown [o]rg [h]tml" in captured.err

    def test_invalid_key(self, monkeypatch, capsys):
        _stdin(monkeypatch, "z\n")
        assert main([]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "grab-link: Invalid key: 'z'" in captured.err

    def test_empty_input_cancels(self, monkeypatch, capsys):
        _stdin(monkeypatch, "")
        assert main([]) == 1
        assert "cancelled" in capsys.readouterr().err

    def test_absent_names_application(self, capsys):
        assert main(["--app", "mail", "--type", "plain"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "No link available from mail" in captured.err

    def test_defaults_without_prompts(self, monkeypatch, capsys):
        monkeypatch.setenv("GRABLINK_PREFERRED_APP", "safari")
        monkeypatch.setenv("GRABLINK_PREFERRED_LINK_TYPE", "markdown")
        _stdin(monkeypatch, "")
        assert main(["--default-app", "--default-type"]) == 0
        assert capsys.readouterr().out == "[Example](https://example.com)\n"

    def test_context_inference(self, capsys):
        assert main(["--app", "safari", "--default-type", "--context", "notes.org"]) == 0
        assert capsys.readouterr().out == "[[https://example.com][Example]]\n"

    def test_copy(self, board, capsys):
        assert main(["--app", "safari", "--type", "html", "--deliver", "copy"]) == 0
        captured = capsys.readouterr()
        assert board["text"] == '<a href="https://example.com">Example</a>'
        assert captured.out == ""
        assert "Copied to clipboard" in captured.err

    def test_org_copy_goes_to_clipboard(self, board):
        assert main(["--app", "safari", "--type", "org", "--deliver", "copy"]) == 0
        assert board["text"] == "[[https://example.com][Example]]"

    def test_list(self, capsys):
        assert main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "Applications: [s]afari [m]ail" in out
        assert "Link types:   [p]lain [m]arkdown [o]rg [h]tml" in out

    def test_config_file_disables_app(self, tmp_path, capsys):
        path = tmp_path / "other.toml"
        path.write_text('[grablink]\ndisabled_apps = ["mail"]\n', encoding="utf-8")
        assert main(["--config", str(path), "--list"]) == 0
        assert "[m]ail" not in capsys.readouterr().out

    def test_unsupported_platform(self, monkeypatch, capsys):
        def unsupported(platform=None):
            raise RuntimeError("No link providers available for platform 'linux'.")

        monkeypatch.setattr(_router, "get_registry", unsupported)
        assert main(["--list"]) == 1
        assert "No link providers available" in capsys.readouterr().err

    def test_invalid_deliver_choice(self):
        with pytest.raises(SystemExit):
            main(["--deliver", "store"])
