"""Resolve which application and which link type to use.

Three strategies:

- interactive: show the registry as a one-line menu, read one character,
  pick the entry with that dispatch key;
- preferred default: use a configured id verbatim, no menu;
- context inference (link type only): match the editing context against
  an ordered list of patterns, falling back to ``plain``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from grablink._base import Prompter
from grablink.errors import ConfigError, SelectionError
from grablink.formatters import PLAIN, FormatterRegistry, LinkTypeEntry
from grablink.registry import AppEntry, HandlerRegistry, Registry

logger = logging.getLogger(__name__)

FROM_CONTEXT = "from-context"


@dataclass(frozen=True)
class ContextRule:
    """Maps editing contexts matching ``pattern`` to ``link_type``."""

    pattern: str
    link_type: str

    def matches(self, context: str) -> bool:
        return re.search(self.pattern, context) is not None


DEFAULT_CONTEXT_RULES: tuple[ContextRule, ...] = (
    ContextRule(r"^org(-mode)?$|\.org$", "org"),
    ContextRule(r"^(gfm|markdown)(-mode)?$|\.(md|markdown)$", "markdown"),
    ContextRule(r"^(html|mhtml|web)(-mode)?$|\.html?$", "html"),
)


def menu_item(entry: AppEntry | LinkTypeEntry) -> str:
    """Render ``[c]hrome`` when the key leads the label, ``[x] label`` otherwise."""
    if entry.label.startswith(entry.key):
        return f"[{entry.key}]{entry.label[1:]}"
    return f"[{entry.key}] {entry.label}"


def build_menu(title: str, registry: Registry) -> str:
    items = " ".join(menu_item(entry) for entry in registry.list())
    return f"{title}: {items}:"


def infer_link_type(
    context: str | None,
    rules: Iterable[ContextRule] = DEFAULT_CONTEXT_RULES,
) -> str:
    """Return the link type of the first rule matching ``context``, else ``plain``."""
    if context:
        for rule in rules:
            if rule.matches(context):
                return rule.link_type
    return PLAIN


class Selector:
    """Picks the application and link type for one dispatch."""

    def __init__(
        self,
        apps: HandlerRegistry,
        link_types: FormatterRegistry,
        prompter: Prompter,
        *,
        preferred_app: str | None = None,
        preferred_link_type: str | None = FROM_CONTEXT,
        context_rules: Iterable[ContextRule] = DEFAULT_CONTEXT_RULES,
    ) -> None:
        self._apps = apps
        self._link_types = link_types
        self._prompter = prompter
        self.preferred_app = preferred_app
        self.preferred_link_type = preferred_link_type
        self.context_rules = tuple(context_rules)
        for rule in self.context_rules:
            if rule.link_type not in link_types:
                raise ConfigError(
                    f"Context rule {rule.pattern!r} names unknown link type '{rule.link_type}'"
                )

    @property
    def apps(self) -> HandlerRegistry:
        return self._apps

    @property
    def link_types(self) -> FormatterRegistry:
        return self._link_types

    # ---- interactive -----------------------------------------------------

    def prompt(self, title: str, registry: Registry):
        """Show the registry as a menu and return the entry for the typed key."""
        char = self._prompter.read_char(build_menu(title, registry))
        entry = registry.by_key(char)
        if entry is None:
            raise SelectionError(f"Invalid key: {char!r}", char=char)
        return entry

    # ---- application -----------------------------------------------------

    def select_app(self, *, use_default: bool = False) -> AppEntry:
        if use_default and self.preferred_app:
            logger.debug("Using preferred application '%s'", self.preferred_app)
            return self.app(self.preferred_app)
        if use_default:
            logger.debug("No preferred application configured; prompting")
        return self.prompt("Grab link from", self._apps)

    # ---- link type -------------------------------------------------------

    def select_link_type(
        self,
        *,
        use_default: bool = False,
        context: str | None = None,
    ) -> LinkTypeEntry:
        if not use_default:
            return self.prompt("Link type", self._link_types)

        if self.preferred_link_type and self.preferred_link_type != FROM_CONTEXT:
            link_type = self.preferred_link_type
        else:
            link_type = infer_link_type(context, self.context_rules)
            logger.debug("Inferred link type '%s' from context %r", link_type, context)
        return self.link_type(link_type)

    def link_type(self, link_type_id: str) -> LinkTypeEntry:
        entry = self._link_types.get(link_type_id)
        if entry is None:
            raise SelectionError(f"Unknown link type '{link_type_id}'")
        return entry

    def app(self, app_id: str) -> AppEntry:
        entry = self._apps.get(app_id)
        if entry is None:
            raise SelectionError(f"Unknown application '{app_id}'")
        return entry
