"""Error taxonomy for link grabbing.

Every error is terminal for the current invocation.  Nothing is retried;
the user re-invokes the command.
"""

from __future__ import annotations


class GrabLinkError(Exception):
    """Base class for all user-facing grablink failures."""


class SelectionError(GrabLinkError):
    """The user (or the configuration) picked something that is not registered."""

    def __init__(self, message: str, *, char: str | None = None) -> None:
        super().__init__(message)
        self.char = char


class NoLinkAvailable(GrabLinkError):
    """The application handler had nothing to link (no document, tab, or selection)."""

    def __init__(self, app_label: str) -> None:
        super().__init__(f"No link available from {app_label}")
        self.app_label = app_label


class AutomationFailure(GrabLinkError):
    """The OS automation call itself failed (app not running, scripting denied, ...)."""

    def __init__(self, message: str, *, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


class RegistryError(GrabLinkError, ValueError):
    """Invalid registry configuration: duplicate id or dispatch key, unknown id."""


class ConfigError(GrabLinkError, ValueError):
    """The configuration file or environment holds an invalid value."""
