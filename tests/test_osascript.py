"""Tests for the osascript and helper command runners."""

from __future__ import annotations

import subprocess

import pytest

from grablink.errors import AutomationFailure
from grablink.providers import _osascript


class _Completed:
    def __init__(self, returncode=0, stdout="", stderr=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class TestRunApplescript:
    def test_returns_stripped_stdout(self, monkeypatch):
        seen = {}

        def fake_run(args, **kwargs):
            seen["args"] = args
            seen["kwargs"] = kwargs
            return _Completed(stdout="https://x/\n")

        monkeypatch.setattr(subprocess, "run", fake_run)
        assert _osascript.run_applescript('return "x"') == "https://x/"
        assert seen["args"] == ["osascript", "-e", 'return "x"']
        assert seen["kwargs"]["timeout"] == 10.0

    def test_nonzero_exit(self, monkeypatch):
        monkeypatch.setattr(
            subprocess,
            "run",
            lambda args, **kw: _Completed(returncode=1, stderr="execution error: not running\n"),
        )
        with pytest.raises(AutomationFailure, match="not running") as excinfo:
            _osascript.run_applescript("x")
        assert excinfo.value.stderr == "execution error: not running"

    def test_timeout(self, monkeypatch):
        def fake_run(args, **kwargs):
            raise subprocess.TimeoutExpired(args, kwargs["timeout"])

        monkeypatch.setattr(subprocess, "run", fake_run)
        with pytest.raises(AutomationFailure, match="timed out after 2s"):
            _osascript.run_applescript("x", timeout=2)

    def test_missing_binary(self, monkeypatch):
        def fake_run(args, **kwargs):
            raise FileNotFoundError("osascript")

        monkeypatch.setattr(subprocess, "run", fake_run)
        with pytest.raises(AutomationFailure, match="Could not run osascript"):
            _osascript.run_applescript("x")


class TestRunCommand:
    def test_returns_stdout(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", lambda args, **kw: _Completed(stdout="p1\n"))
        assert _osascript.run_command(["lsof"]) == "p1\n"

    def test_nonzero_exit_names_command(self, monkeypatch):
        monkeypatch.setattr(
            subprocess, "run", lambda args, **kw: _Completed(returncode=1, stderr="")
        )
        with pytest.raises(AutomationFailure, match="ps failed"):
            _osascript.run_command(["ps", "-t", "ttys001"])
