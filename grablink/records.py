"""Normalized handler results.

A provider may hand back ``None``, a single :class:`LinkRecord`, or a
sequence of them.  :func:`normalize_result` folds all of those into one of
three explicit shapes so the dispatcher never has to guess::

    Absent()                    # nothing to link
    One(LinkRecord(...))        # the usual case
    Many((LinkRecord(...), ...))  # multi-selection (Finder)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# Separates fields in the text that automation scripts print.
FIELD_DELIMITER = "::split::"


@dataclass(frozen=True)
class LinkRecord:
    """A link target (URL, file URI, custom scheme) plus its human title."""

    target: str
    title: str


@dataclass(frozen=True)
class Absent:
    pass


@dataclass(frozen=True)
class One:
    record: LinkRecord


@dataclass(frozen=True)
class Many:
    records: tuple[LinkRecord, ...]


HandlerResult = Absent | One | Many


def records_of(result: HandlerResult) -> list[LinkRecord]:
    """Flatten a tagged result to a list (empty for ``Absent``)."""
    if isinstance(result, One):
        return [result.record]
    if isinstance(result, Many):
        return list(result.records)
    return []


def normalize_result(raw: object) -> HandlerResult:
    """Convert whatever a provider returned into a tagged result.

    Records with an empty target count as absent.  An empty sequence is
    absent too, and a one-element sequence collapses to ``One``.
    """
    if isinstance(raw, (Absent, One, Many)):
        records = records_of(raw)
    elif raw is None:
        records = []
    elif isinstance(raw, LinkRecord):
        records = [raw]
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        records = list(raw)
        for item in records:
            if not isinstance(item, LinkRecord):
                raise TypeError(f"Handler returned a non-LinkRecord item: {item!r}")
    else:
        raise TypeError(f"Unsupported handler result: {raw!r}")

    records = [r for r in records if r.target]
    if not records:
        return Absent()
    if len(records) == 1:
        return One(records[0])
    return Many(tuple(records))


def parse_record(line: str, delimiter: str = FIELD_DELIMITER) -> LinkRecord | None:
    """Parse ``target<delimiter>title`` as printed by an automation script.

    Only the first delimiter splits, so a title that happens to contain the
    delimiter keeps it.  A line without a delimiter is a bare target whose
    title defaults to the target.  Blank lines give ``None``.
    """
    line = line.strip("\r\n")
    if not line.strip():
        return None
    target, sep, title = line.partition(delimiter)
    target = target.strip()
    if not target:
        return None
    return LinkRecord(target=target, title=title.strip() if sep else target)


def parse_records(output: str, delimiter: str = FIELD_DELIMITER) -> list[LinkRecord]:
    """Parse newline-separated records, skipping blank lines."""
    records = []
    for line in output.splitlines():
        record = parse_record(line, delimiter)
        if record is not None:
            records.append(record)
    return records
