"""Run AppleScript through ``osascript``."""

from __future__ import annotations

import logging
import subprocess

from grablink.errors import AutomationFailure

logger = logging.getLogger(__name__)


def run_applescript(script: str, *, timeout: float = 10.0) -> str:
    """Run ``script`` and return its stripped stdout.

    Raises:
        AutomationFailure: osascript is missing, timed out, or exited non-zero
            (application not running, scripting not permitted, no window...).
    """
    try:
        result = subprocess.run(
            ["osascript", "-e", script],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise AutomationFailure(f"osascript timed out after {timeout:g}s") from None
    except (FileNotFoundError, OSError) as exc:
        raise AutomationFailure(f"Could not run osascript: {exc}") from exc

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        logger.debug("osascript exited %d: %s", result.returncode, stderr)
        raise AutomationFailure(f"osascript failed: {stderr or 'unknown error'}", stderr=stderr)
    return (result.stdout or "").strip()


def run_command(args: list[str], *, timeout: float = 5.0) -> str:
    """Run a helper command (``ps``, ``lsof``) and return its stdout."""
    try:
        result = subprocess.run(args, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired:
        raise AutomationFailure(f"{args[0]} timed out after {timeout:g}s") from None
    except (FileNotFoundError, OSError) as exc:
        raise AutomationFailure(f"Could not run {args[0]}: {exc}") from exc
    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise AutomationFailure(f"{args[0]} failed: {stderr or 'unknown error'}", stderr=stderr)
    return result.stdout or ""
