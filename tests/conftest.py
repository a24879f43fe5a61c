"""Shared fakes for the editing surface, prompter, and applications."""

from __future__ import annotations

import pytest

from grablink._base import EditingSurface, Prompter, StoredLinks
from grablink.formatters import default_formatters
from grablink.records import LinkRecord
from grablink.registry import AppEntry, HandlerRegistry
from grablink.selector import Selector


class FakeStoredLinks(StoredLinks):
    def __init__(self) -> None:
        self.pairs: list[tuple[str, str]] = []

    def push(self, target: str, title: str) -> None:
        self.pairs.append((target, title))


class FakeSurface(EditingSurface):
    def __init__(
        self,
        *,
        context: str | None = None,
        stored: FakeStoredLinks | None = None,
    ) -> None:
        self.buffer = ""
        self.clipboard: str | None = "previous clipboard"
        self.context = context
        self.stored = stored
        self.calls: list[str] = []

    def insert_at_cursor(self, text: str) -> None:
        self.calls.append("insert")
        self.buffer += text

    def set_clipboard(self, text: str) -> None:
        self.calls.append("set_clipboard")
        self.clipboard = text

    def get_clipboard(self) -> str | None:
        return self.clipboard

    @property
    def stored_links(self) -> StoredLinks | None:
        return self.stored

    def current_context(self) -> str | None:
        return self.context


class ScriptedPrompter(Prompter):
    """Answers prompts from a fixed sequence of characters."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def read_char(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answers.pop(0)


def app_registry(**results) -> HandlerRegistry:
    """Registry whose handlers return the given values, keyed by id."""
    return HandlerRegistry(
        AppEntry(app_id, app_id, (lambda value=value: value)) for app_id, value in results.items()
    )


EXAMPLE = LinkRecord("https://example.com", "Example")


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def apps() -> HandlerRegistry:
    return app_registry(
        safari=EXAMPLE,
        Finder=[
            LinkRecord("file:///tmp/a.txt", "a.txt"),
            LinkRecord("file:///tmp/b.txt", "b.txt"),
        ],
        mail=None,
    )


@pytest.fixture
def make_selector(apps):
    def _make(*answers: str, **kwargs) -> Selector:
        return Selector(apps, default_formatters(), ScriptedPrompter(*answers), **kwargs)

    return _make
