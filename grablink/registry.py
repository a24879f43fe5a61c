"""Ordered registries of applications and link types.

Both registries share one contract: entries are keyed by ``id``, kept in
insertion order (which is also the menu order), and each carries a single
dispatch character used by the interactive prompt.  The dispatch key is
computed once when the entry is built and must be unique within its
registry, so two entries can never collapse onto the same keypress.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from grablink.errors import RegistryError

logger = logging.getLogger(__name__)


def resolve_dispatch_key(entry_id: str, label: str, key: str | None) -> str:
    if not entry_id:
        raise RegistryError("Registry entry id must not be empty")
    if not label:
        raise RegistryError(f"Entry '{entry_id}' must have a display label")
    key = key if key is not None else label[0]
    if len(key) != 1:
        raise RegistryError(f"Dispatch key for '{entry_id}' must be one character, got {key!r}")
    return key


@dataclass(frozen=True)
class AppEntry:
    """An application the user can grab a link from.

    ``handler`` is a zero-argument provider returning ``None``, a
    :class:`~grablink.records.LinkRecord`, or a sequence of records.
    """

    id: str
    label: str
    handler: Callable[[], object]
    key: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", resolve_dispatch_key(self.id, self.label, self.key))


class _Entry(Protocol):
    id: str
    label: str
    key: str | None


E = TypeVar("E", bound=_Entry)


class Registry(Generic[E]):
    """Insertion-ordered mapping from id to entry with unique dispatch keys."""

    kind = "entry"

    def __init__(self, entries: Iterable[E] = ()) -> None:
        self._entries: dict[str, E] = {}
        for entry in entries:
            self.register(entry)

    # ---- lookup ----------------------------------------------------------

    def get(self, entry_id: str) -> E | None:
        return self._entries.get(entry_id)

    def by_key(self, char: str) -> E | None:
        """Return the entry whose dispatch key is exactly ``char`` (case-sensitive)."""
        for entry in self._entries.values():
            if entry.key == char:
                return entry
        return None

    def list(self) -> list[E]:
        return list(self._entries.values())

    def ids(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def __iter__(self) -> Iterator[E]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._entries)

    # ---- administrative mutation ----------------------------------------

    def register(self, entry: E) -> None:
        """Add a new entry at the end of the menu.

        Raises:
            RegistryError: If the id or the dispatch key is already taken.
        """
        if entry.id in self._entries:
            raise RegistryError(f"Duplicate {self.kind} id '{entry.id}'")
        self._check_key(entry)
        self._entries[entry.id] = entry
        logger.debug("Registered %s '%s' on key %r", self.kind, entry.id, entry.key)

    def replace(self, entry: E) -> None:
        """Swap the entry with the same id in place, keeping its menu position.

        Registers the entry at the end when no entry has that id yet.
        """
        if entry.id not in self._entries:
            self.register(entry)
            return
        self._check_key(entry, ignore=entry.id)
        self._entries[entry.id] = entry
        logger.debug("Replaced %s '%s'", self.kind, entry.id)

    def remove(self, entry_id: str) -> E:
        """Drop an entry (for example an application the operator does not use)."""
        try:
            entry = self._entries.pop(entry_id)
        except KeyError:
            raise RegistryError(f"Unknown {self.kind} id '{entry_id}'") from None
        logger.debug("Removed %s '%s'", self.kind, entry_id)
        return entry

    def _check_key(self, entry: E, ignore: str | None = None) -> None:
        for other in self._entries.values():
            if other.id != ignore and other.key == entry.key:
                raise RegistryError(
                    f"Dispatch key {entry.key!r} of {self.kind} '{entry.id}' "
                    f"already used by '{other.id}'"
                )


class HandlerRegistry(Registry[AppEntry]):
    kind = "application"
