"""
grablink -- grab the current link from a running application.

Pick an application, retrieve the link it currently shows (URL or path
plus a title), format it as plain text, Markdown, Org or HTML, and
deliver it to an editing surface.

Quick start::

    import grablink

    # Formatted links without prompting or delivering
    links = grablink.grab_link("safari", "markdown")   # ["[Example](https://example.com)"]

    # Full dispatch against your own editor integration
    dispatcher = grablink.build_dispatcher(grablink.load_settings(), surface, prompter)
    result = dispatcher.run(grablink.Mode(default_app=True, default_type=True))
"""

from __future__ import annotations

from grablink._base import EditingSurface, Prompter, StoredLinks
from grablink._router import build_dispatcher, detect_platform, get_registry
from grablink.config import Settings, load_settings
from grablink.dispatcher import Dispatcher, GrabResult, Mode
from grablink.errors import (
    AutomationFailure,
    ConfigError,
    GrabLinkError,
    NoLinkAvailable,
    RegistryError,
    SelectionError,
)
from grablink.formatters import LinkTypeEntry, default_formatters
from grablink.records import LinkRecord
from grablink.registry import AppEntry, HandlerRegistry

__all__ = [
    "grab_link",
    "Dispatcher",
    "Mode",
    "GrabResult",
    "LinkRecord",
    "AppEntry",
    "LinkTypeEntry",
    "HandlerRegistry",
    "EditingSurface",
    "Prompter",
    "StoredLinks",
    "Settings",
    "load_settings",
    # Advanced / building blocks
    "build_dispatcher",
    "get_registry",
    "detect_platform",
    "default_formatters",
    # Errors
    "GrabLinkError",
    "SelectionError",
    "NoLinkAvailable",
    "AutomationFailure",
    "RegistryError",
    "ConfigError",
]


# ---------------------------------------------------------------------------
# Default dispatcher, used by the convenience function below
# ---------------------------------------------------------------------------

_default_dispatcher: Dispatcher | None = None


def _get_default_dispatcher() -> Dispatcher:
    global _default_dispatcher
    if _default_dispatcher is None:
        from grablink.surfaces import TerminalPrompter, TerminalSurface

        settings = load_settings()
        _default_dispatcher = build_dispatcher(
            settings,
            TerminalSurface(context=settings.context),
            TerminalPrompter(),
        )
    return _default_dispatcher


def grab_link(app: str, link_type: str = "plain") -> list[str]:
    """Return the formatted current link(s) of ``app``.

    Raises:
        SelectionError: Unknown application or link type id.
        NoLinkAvailable: The application has nothing to link.
        AutomationFailure: The automation call failed.
    """
    return _get_default_dispatcher().grab(app, link_type)
