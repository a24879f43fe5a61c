"""Dispatcher: selection, handler call, formatting, delivery."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from grablink._base import EditingSurface
from grablink.errors import AutomationFailure, GrabLinkError, NoLinkAvailable
from grablink.formatters import ORG, LinkTypeEntry
from grablink.records import Absent, LinkRecord, normalize_result, records_of
from grablink.registry import AppEntry
from grablink.selector import Selector

logger = logging.getLogger(__name__)

Deliver = Literal["insert", "copy"]
Delivery = Literal["insert", "copy", "store"]


@dataclass(frozen=True)
class Mode:
    """How one invocation selects and delivers.

    ``default_app``/``default_type`` skip the corresponding prompt.  The
    delivery action is independent of the prompt level.
    """

    default_app: bool = False
    default_type: bool = False
    deliver: Deliver = "insert"


@dataclass
class GrabResult:
    """Outcome of a successful dispatch."""

    app: str
    link_type: str
    delivery: Delivery
    text: str
    texts: list[str] = field(default_factory=list)


class Dispatcher:
    """Runs one grab from selection through delivery.

    Usage::

        dispatcher = Dispatcher(selector, surface)
        result = dispatcher.run(Mode(deliver="copy"))
        print(result.text)

    Any failure before delivery (bad key, nothing to link, automation
    error) raises before the surface is touched.
    """

    def __init__(self, selector: Selector, surface: EditingSurface) -> None:
        self._selector = selector
        self._surface = surface

    @property
    def selector(self) -> Selector:
        return self._selector

    @property
    def surface(self) -> EditingSurface:
        return self._surface

    def run(
        self,
        mode: Mode | None = None,
        *,
        app: str | None = None,
        link_type: str | None = None,
    ) -> GrabResult:
        """Grab, format, and deliver a link.

        Args:
            mode: Prompt level and delivery action (defaults to prompting
                  for both and inserting).
            app: Explicit application id; bypasses the application prompt.
            link_type: Explicit link type id; bypasses the link type prompt.
        """
        mode = mode or Mode()

        if app is not None:
            app_entry = self._selector.app(app)
        else:
            app_entry = self._selector.select_app(use_default=mode.default_app)

        if link_type is not None:
            type_entry = self._selector.link_type(link_type)
        elif mode.default_type:
            type_entry = self._selector.select_link_type(
                use_default=True,
                context=self._surface.current_context(),
            )
        else:
            type_entry = self._selector.select_link_type()

        records = self.fetch(app_entry)
        texts = [type_entry.formatter(r.target, r.title) for r in records]

        delivery = self._deliver(mode.deliver, type_entry, records, texts)
        logger.debug(
            "Delivered %d link(s) from '%s' as %s via %s",
            len(texts),
            app_entry.id,
            type_entry.id,
            delivery,
        )
        return GrabResult(
            app=app_entry.id,
            link_type=type_entry.id,
            delivery=delivery,
            text=texts[0],
            texts=texts,
        )

    def grab(self, app: str, link_type: str = "plain") -> list[str]:
        """Return formatted links for explicit ids, without prompting or delivering."""
        app_entry = self._selector.app(app)
        type_entry = self._selector.link_type(link_type)
        return [type_entry.formatter(r.target, r.title) for r in self.fetch(app_entry)]

    def fetch(self, app_entry: AppEntry) -> list[LinkRecord]:
        """Call the application's handler and return at least one record.

        Raises:
            NoLinkAvailable: The handler had nothing to link.
            AutomationFailure: The handler raised something other than a
                GrabLinkError, or returned an unsupported shape.
        """
        logger.debug("Calling handler for '%s'", app_entry.id)
        try:
            result = normalize_result(app_entry.handler())
        except GrabLinkError:
            raise
        except Exception as exc:
            raise AutomationFailure(f"{app_entry.label}: {exc}") from exc

        if isinstance(result, Absent):
            raise NoLinkAvailable(app_entry.label)
        return records_of(result)

    def _deliver(
        self,
        deliver: Deliver,
        type_entry: LinkTypeEntry,
        records: list[LinkRecord],
        texts: list[str],
    ) -> Delivery:
        if deliver == "insert":
            self._surface.insert_at_cursor("\n".join(texts))
            return "insert"

        stored = self._surface.stored_links
        if type_entry.id == ORG and stored is not None:
            first = records[0]
            stored.push(first.target, first.title)
            return "store"

        self._surface.set_clipboard(texts[0])
        return "copy"
