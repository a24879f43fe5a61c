"""grablink MCP Server: link grabbing tools for AI agents.

Exposes the registered applications and link types, and a tool that
returns the formatted current link of an application.  Nothing here
prompts; the stdio transport owns stdout, so links are returned rather
than inserted.
"""

from __future__ import annotations

import json

from mcp.server.fastmcp import FastMCP

from grablink import clipboard
from grablink._base import Prompter
from grablink._router import build_dispatcher
from grablink.config import load_settings
from grablink.dispatcher import Dispatcher
from grablink.errors import GrabLinkError, SelectionError
from grablink.surfaces import TerminalSurface

mcp = FastMCP(
    name="grablink",
    instructions=(
        "grablink reads the link an application on the user's Mac is showing "
        "(browser tab, Finder selection, Mail message, PDF page) and formats it.\n\n"
        "TOOLS:\n"
        "- list_apps(): applications links can be grabbed from\n"
        "- list_link_types(): output formats (plain, markdown, org, html)\n"
        "- grab_link(app, link_type, copy): formatted link(s) of an application\n\n"
        "Omit 'app' to use the user's preferred application, and 'link_type' to "
        "use their preferred format."
    ),
)


class _NoPrompt(Prompter):
    def read_char(self, prompt: str) -> str:
        raise SelectionError("No application given and no preferred application configured")


# ---------------------------------------------------------------------------
# Dispatcher state (one per MCP server process)
# ---------------------------------------------------------------------------

_dispatcher: Dispatcher | None = None


def _get_dispatcher() -> Dispatcher:
    global _dispatcher
    if _dispatcher is None:
        settings = load_settings()
        _dispatcher = build_dispatcher(
            settings,
            TerminalSurface(context=settings.context),
            _NoPrompt(),
        )
    return _dispatcher


def _entries(registry) -> list[dict]:
    return [{"id": e.id, "label": e.label, "key": e.key} for e in registry.list()]


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool()
def list_apps() -> str:
    """List the applications links can be grabbed from, in menu order."""
    return json.dumps(_entries(_get_dispatcher().selector.apps))


@mcp.tool()
def list_link_types() -> str:
    """List the available link formats, in menu order."""
    return json.dumps(_entries(_get_dispatcher().selector.link_types))


@mcp.tool()
def grab_link(
    app: str | None = None,
    link_type: str | None = None,
    copy: bool = False,
) -> str:
    """Grab the current link of an application and format it.

    Finder may return several links (one per selected item); all other
    applications return one.

    Args:
        app: Application id from list_apps (e.g. "safari", "finder").
             Defaults to the user's preferred application.
        link_type: plain, markdown, org, or html. Defaults to the user's
                   preferred link type.
        copy: Also put the first link on the clipboard.
    """
    dispatcher = _get_dispatcher()
    selector = dispatcher.selector
    try:
        app_entry = selector.app(app) if app else selector.select_app(use_default=True)
        type_entry = (
            selector.link_type(link_type)
            if link_type
            else selector.select_link_type(
                use_default=True, context=dispatcher.surface.current_context()
            )
        )
        links = dispatcher.grab(app_entry.id, type_entry.id)
    except GrabLinkError as exc:
        return json.dumps({"success": False, "links": [], "error": str(exc)})

    if copy:
        clipboard.set_clipboard(links[0])
    return json.dumps(
        {
            "success": True,
            "app": app_entry.id,
            "link_type": type_entry.id,
            "links": links,
            "error": None,
        }
    )


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
