"""macOS link providers: one AppleScript round trip per application.

Every provider is a zero-argument callable returning ``None`` (nothing to
link), a :class:`LinkRecord`, or a list of records (Finder selections).
Scripts print ``target::split::title``, one record per line.

Requires macOS automation permission for the terminal running grablink:
  System Settings > Privacy & Security > Automation
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from grablink.clipboard import (
    get_clipboard,
    preserved_clipboard,
    restore_clipboard,
    save_clipboard,
    set_clipboard,
)
from grablink.errors import AutomationFailure
from grablink.providers._osascript import run_applescript, run_command
from grablink.records import FIELD_DELIMITER, LinkRecord, parse_record, parse_records
from grablink.registry import AppEntry

logger = logging.getLogger(__name__)

_D = FIELD_DELIMITER

# ---------------------------------------------------------------------------
# Browsers
# ---------------------------------------------------------------------------


class ChromiumProvider:
    """Active tab of the front window of a Chromium-based browser."""

    def __init__(self, app_name: str) -> None:
        self.app_name = app_name

    @property
    def script(self) -> str:
        return (
            f'tell application "{self.app_name}"\n'
            "  set theTab to active tab of front window\n"
            f'  return (URL of theTab) & "{_D}" & (title of theTab)\n'
            "end tell"
        )

    def __call__(self) -> LinkRecord | None:
        return parse_record(run_applescript(self.script))


_SAFARI_SCRIPT = f"""\
tell application "Safari"
  set theDoc to front document
  return (URL of theDoc) & "{_D}" & (name of theDoc)
end tell"""


def safari() -> LinkRecord | None:
    return parse_record(run_applescript(_SAFARI_SCRIPT))


_FIREFOX_TITLE_SCRIPT = """\
tell application "Firefox" to activate
tell application "System Events"
  tell process "Firefox" to return name of front window
end tell"""

# Focus the location bar, copy it, then leave the bar.
_FIREFOX_COPY_SCRIPT = """\
tell application "System Events"
  keystroke "l" using command down
  keystroke "c" using command down
  key code 53
end tell"""

_FIREFOX_SUFFIXES = (" — Mozilla Firefox", " - Mozilla Firefox")


def firefox(*, settle: float = 0.15) -> LinkRecord | None:
    """Firefox has no scripting dictionary, so copy the URL bar via the clipboard.

    The user's clipboard is restored before returning, on success or failure.
    """
    title = run_applescript(_FIREFOX_TITLE_SCRIPT)
    for suffix in _FIREFOX_SUFFIXES:
        if title.endswith(suffix):
            title = title[: -len(suffix)]
            break

    with preserved_clipboard(save_clipboard, restore_clipboard):
        set_clipboard("")
        run_applescript(_FIREFOX_COPY_SCRIPT)
        time.sleep(settle)
        url = (get_clipboard() or "").strip()

    if not url:
        return None
    return LinkRecord(target=url, title=title or url)


# ---------------------------------------------------------------------------
# Finder, Mail
# ---------------------------------------------------------------------------

_FINDER_SCRIPT = f"""\
tell application "Finder"
  set theItems to the selection
  if theItems is {{}} then
    if (count of Finder windows) is 0 then return ""
    set theItems to {{target of front Finder window}}
  end if
  set out to ""
  repeat with theItem in theItems
    set out to out & (URL of theItem) & "{_D}" & (name of theItem) & linefeed
  end repeat
  return out
end tell"""


def finder() -> list[LinkRecord]:
    """Every selected item, in selection order; the front window's folder otherwise."""
    return parse_records(run_applescript(_FINDER_SCRIPT))


_MAIL_SCRIPT = f"""\
tell application "Mail"
  set theMessages to selection
  if theMessages is {{}} then return ""
  set theMessage to item 1 of theMessages
  return "message://%3c" & (message id of theMessage) & "%3e" & "{_D}" & (subject of theMessage)
end tell"""


def mail() -> LinkRecord | None:
    return parse_record(run_applescript(_MAIL_SCRIPT))


# ---------------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------------

_TERMINAL_SCRIPT = f"""\
tell application "Terminal"
  if (count of windows) is 0 then return ""
  set theTab to selected tab of front window
  return (tty of theTab) & "{_D}" & (name of front window)
end tell"""


def _foreground_pid(tty: str) -> str:
    """PID of the foreground process group leader on ``tty`` (``+`` in STAT)."""
    output = run_command(["ps", "-t", tty.removeprefix("/dev/"), "-o", "pid=,stat="])
    rows = [line.split() for line in output.splitlines() if line.strip()]
    if not rows:
        raise AutomationFailure(f"No process found on {tty}")
    for pid, *stat in reversed(rows):
        if stat and "+" in stat[0]:
            return pid
    return rows[-1][0]


def _cwd_of(pid: str) -> str:
    output = run_command(["lsof", "-a", "-p", pid, "-d", "cwd", "-Fn"])
    for line in output.splitlines():
        if line.startswith("n"):
            return line[1:]
    raise AutomationFailure(f"Could not read working directory of process {pid}")


def terminal() -> LinkRecord | None:
    """Working directory of the front Terminal tab.

    No open window is nothing to link; any other scripting failure raises.
    """
    output = run_applescript(_TERMINAL_SCRIPT)
    tty, _, title = output.partition(_D)
    if not tty.strip():
        logger.debug("Terminal has no open window")
        return None
    cwd = _cwd_of(_foreground_pid(tty.strip()))
    return LinkRecord(target=Path(cwd).as_uri(), title=title.strip() or cwd)


# ---------------------------------------------------------------------------
# Skim
# ---------------------------------------------------------------------------

_SKIM_SCRIPT = f"""\
tell application "Skim"
  set theDoc to front document
  set thePage to index of current page of theDoc
  return (POSIX path of (get file of theDoc)) & "{_D}" & thePage & "{_D}" & (name of theDoc)
end tell"""


def skim() -> LinkRecord | None:
    """Front PDF and current page as a ``skim://path::page`` link."""
    output = run_applescript(_SKIM_SCRIPT)
    parts = output.split(_D, 2)
    if len(parts) != 3 or not parts[0]:
        return None
    path, page, name = (p.strip() for p in parts)
    return LinkRecord(target=f"skim://{path}::{page}", title=f"{name}, p. {page}")


# ---------------------------------------------------------------------------
# Registry wiring
# ---------------------------------------------------------------------------


def macos_apps() -> list[AppEntry]:
    """Shipped applications in menu order; dispatch key is the label's first letter."""
    return [
        AppEntry("chrome", "chrome", ChromiumProvider("Google Chrome")),
        AppEntry("safari", "safari", safari),
        AppEntry("firefox", "firefox", firefox),
        AppEntry("finder", "Finder", finder),
        AppEntry("mail", "mail", mail),
        AppEntry("terminal", "terminal", terminal),
        AppEntry("skim", "Skim", skim),
        AppEntry("brave", "brave", ChromiumProvider("Brave Browser")),
        AppEntry("edge", "edge", ChromiumProvider("Microsoft Edge")),
    ]
