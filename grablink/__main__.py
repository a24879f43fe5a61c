"""CLI for grabbing links: grab-link / python -m grablink"""

from __future__ import annotations

import argparse
import logging
import sys

from grablink._router import build_dispatcher
from grablink.config import load_settings
from grablink.dispatcher import Mode
from grablink.errors import GrabLinkError
from grablink.selector import menu_item
from grablink.surfaces import TerminalPrompter, TerminalSurface

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grab-link",
        description="Grab the current link from an application and format it",
    )
    parser.add_argument(
        "--default-app",
        action="store_true",
        help="Skip the application prompt and use the configured preferred app",
    )
    parser.add_argument(
        "--default-type",
        action="store_true",
        help="Skip the link type prompt; use the preferred or context-inferred type",
    )
    parser.add_argument(
        "--deliver",
        type=str,
        default="insert",
        choices=["insert", "copy"],
        help="insert: print the link; copy: put it on the clipboard (default: insert)",
    )
    parser.add_argument("--app", type=str, default=None, help="Application id (skips the prompt)")
    parser.add_argument("--type", type=str, default=None, help="Link type id (skips the prompt)")
    parser.add_argument(
        "--context",
        type=str,
        default=None,
        help="Editing context used to infer the link type (e.g. org-mode, notes.md)",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to config.toml")
    parser.add_argument(
        "--list", action="store_true", help="List applications and link types, then exit"
    )
    parser.add_argument("--verbose", action="store_true", help="Print debug logging to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        settings = load_settings(args.config)
        context = args.context or settings.context
        surface = TerminalSurface(context=context)
        dispatcher = build_dispatcher(settings, surface, TerminalPrompter())

        if args.list:
            selector = dispatcher.selector
            print("Applications: " + " ".join(menu_item(e) for e in selector.apps.list()))
            print("Link types:   " + " ".join(menu_item(e) for e in selector.link_types.list()))
            return 0

        mode = Mode(
            default_app=args.default_app,
            default_type=args.default_type,
            deliver=args.deliver,
        )
        result = dispatcher.run(mode, app=args.app, link_type=args.type)
    except (GrabLinkError, RuntimeError) as exc:
        # RuntimeError: unsupported platform
        print(f"grab-link: {exc}", file=sys.stderr)
        return 1

    if result.delivery == "copy":
        print(f"Copied to clipboard: {result.text}", file=sys.stderr)
    elif result.delivery == "store":
        print(f"Stored link: {result.text}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
