"""Abstract interfaces for the collaborators the dispatcher drives."""

from __future__ import annotations

from abc import ABC, abstractmethod


class StoredLinks(ABC):
    """A host-side list of stored links (target/title pairs, not formatted text)."""

    @abstractmethod
    def push(self, target: str, title: str) -> None:
        """Store one link at the head of the host's list."""
        ...


class EditingSurface(ABC):
    """Interface of the editor (or terminal) that receives grabbed links.

    The dispatcher only ever calls the methods defined here.  Delivery is
    assumed to succeed; any exception raised by an implementation is
    propagated unchanged.
    """

    # ---- delivery --------------------------------------------------------

    @abstractmethod
    def insert_at_cursor(self, text: str) -> None:
        """Insert ``text`` at the current cursor position."""
        ...

    @abstractmethod
    def set_clipboard(self, text: str) -> None:
        """Replace the system clipboard content with ``text``."""
        ...

    @abstractmethod
    def get_clipboard(self) -> str | None:
        """Return the current clipboard text, or None if it holds no text."""
        ...

    @property
    def stored_links(self) -> StoredLinks | None:
        """Return the host's stored-links registry, or None if it has none."""
        return None

    # ---- context ---------------------------------------------------------

    @abstractmethod
    def current_context(self) -> str | None:
        """Describe the current editing context (a mode name, a file name, ...).

        Used only to infer a link type.  None when the surface cannot tell.
        """
        ...


class Prompter(ABC):
    """Reads a single character in answer to a menu prompt."""

    @abstractmethod
    def read_char(self, prompt: str) -> str:
        """Show ``prompt`` and return the one character the user typed."""
        ...
