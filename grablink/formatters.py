"""Link-type formatters.

Each formatter is a pure ``(target, title) -> str`` function.  None of them
escape their input: ``html`` in particular passes ``target`` and ``title``
through as-is.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from grablink.registry import Registry, resolve_dispatch_key

Formatter = Callable[[str, str], str]

# Org reads a doubled colon inside a description as a field separator.
_COLON_RUN = re.compile(r":{2,}")


def format_plain(target: str, title: str) -> str:
    return target


def format_markdown(target: str, title: str) -> str:
    return f"[{title}]({target})"


def format_org(target: str, title: str) -> str:
    return f"[[{target}][{_COLON_RUN.sub(':', title)}]]"


def format_html(target: str, title: str) -> str:
    return f'<a href="{target}">{title}</a>'


@dataclass(frozen=True)
class LinkTypeEntry:
    id: str
    label: str
    formatter: Formatter
    key: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", resolve_dispatch_key(self.id, self.label, self.key))


class FormatterRegistry(Registry[LinkTypeEntry]):
    kind = "link type"


PLAIN = "plain"
MARKDOWN = "markdown"
ORG = "org"
HTML = "html"


def default_formatters() -> FormatterRegistry:
    """Build the registry of the four standard link types, in menu order."""
    return FormatterRegistry(
        [
            LinkTypeEntry(PLAIN, "plain", format_plain),
            LinkTypeEntry(MARKDOWN, "markdown", format_markdown),
            LinkTypeEntry(ORG, "org", format_org),
            LinkTypeEntry(HTML, "html", format_html),
        ]
    )
