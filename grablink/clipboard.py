"""System clipboard access through AppKit's general pasteboard.

Requires ``pyobjc-framework-Cocoa`` (macOS only).  AppKit is imported on
first use so the rest of the package imports anywhere.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


def _pasteboard():
    from AppKit import NSPasteboard

    return NSPasteboard.generalPasteboard()


def get_clipboard() -> str | None:
    """Return the clipboard's text, or None if it holds no text."""
    from AppKit import NSPasteboardTypeString

    text = _pasteboard().stringForType_(NSPasteboardTypeString)
    return str(text) if text is not None else None


def set_clipboard(text: str) -> None:
    from AppKit import NSPasteboardTypeString

    pb = _pasteboard()
    pb.clearContents()
    pb.setString_forType_(text, NSPasteboardTypeString)


def save_clipboard() -> list[dict[str, bytes]]:
    """Snapshot every pasteboard item, with the data of each of its types.

    Covers non-text content (images, file references) that
    :func:`get_clipboard` cannot see.
    """
    saved = []
    for item in _pasteboard().pasteboardItems() or []:
        types = {}
        for pb_type in item.types():
            data = item.dataForType_(pb_type)
            if data is not None:
                types[str(pb_type)] = bytes(data)
        saved.append(types)
    return saved


def restore_clipboard(saved: list[dict[str, bytes]]) -> None:
    """Replace the pasteboard contents with a :func:`save_clipboard` snapshot."""
    from AppKit import NSPasteboardItem
    from Foundation import NSData

    items = []
    for types in saved:
        item = NSPasteboardItem.alloc().init()
        for pb_type, data in types.items():
            item.setData_forType_(NSData.dataWithBytes_length_(data, len(data)), pb_type)
        items.append(item)

    pb = _pasteboard()
    pb.clearContents()
    if items:
        pb.writeObjects_(items)


@contextmanager
def preserved_clipboard(
    read=save_clipboard,
    write=restore_clipboard,
) -> Iterator[None]:
    """Borrow the clipboard and put its previous content back on exit.

    The prior content is restored whether the body succeeds or raises.  A
    ``read`` that returns None saved nothing, and the clipboard is left
    as the body leaves it.
    """
    saved = read()
    try:
        yield
    finally:
        if saved is not None:
            write(saved)
            logger.debug("Clipboard restored")
