"""Windowed duration aggregation over the timesheet."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional, Union

from worklog_engine.codec import decode
from worklog_engine.errors import AggregationError, DateParseError, InvalidEncoding
from worklog_engine.schema import LogEntry, ParsedEntry, Report, ReportEntry

logger = logging.getLogger(__name__)

Decoder = Callable[[str], ParsedEntry]


def _as_local(value: datetime) -> datetime:
    # naive values are taken as local wall-clock time
    return value.astimezone()


def parse_report_date(value: str) -> datetime:
    """Parse `YYYY-M-D` (leading zeros optional) or an ISO 8601 timestamp."""

    text = value.strip()
    try:
        parsed = datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise DateParseError(f"can't parse report date '{value}'") from exc
    return parsed if parsed.tzinfo else _as_local(parsed)


def aggregate(
    entries: Iterable[LogEntry],
    report_from: datetime,
    report_to: datetime,
    decode: Decoder = decode,
) -> Report:
    """Attribute time between consecutive entries inside `[report_from, report_to)`.

    Each entry is credited with the time since the previous qualifying entry.
    The first entry, and the first entry of every new calendar day, get a
    zero-length span anchored at their own timestamp.
    """

    report = Report(report_from=report_from, report_to=report_to)
    previous: Optional[datetime] = None

    for index, saved in enumerate(entries, start=1):
        if not saved.task:
            continue
        ts = _as_local(saved.end)
        if ts < report_from or ts >= report_to:
            continue
        try:
            parsed = decode(saved.task)
        except InvalidEncoding:
            logger.debug("Skipping entry %d: %r matches no task grammar", index, saved.task)
            continue

        entry = ReportEntry(
            id=saved.id,
            title=parsed.title,
            timestamp=ts,
            is_break=parsed.is_break,
            is_ignored=parsed.is_ignored,
        )

        if previous is None:
            previous = ts
            entry.start = entry.end = ts
            report.entries.append(entry)
            continue

        if ts.date() != previous.date():
            previous = ts
        entry.start = entry.end = previous
        entry.duration = ts - previous
        previous = ts

        if parsed.is_break and parsed.is_ignored:
            raise AggregationError(f"entry {saved.id!r} has both break and ignore set")
        if parsed.is_break:
            report.break_hours += entry.duration
        elif parsed.is_ignored:
            report.ignore_hours += entry.duration
        else:
            report.task_hours += entry.duration
        report.entries.append(entry)

    return report


def compute_report(
    store,
    date_from: Union[str, datetime],
    date_to: Union[str, datetime],
    decode: Decoder = decode,
) -> Report:
    """Report on `store` from the start of `date_from` through the whole `date_to` day."""

    report_from = parse_report_date(date_from) if isinstance(date_from, str) else date_from
    report_to = parse_report_date(date_to) if isinstance(date_to, str) else date_to
    if report_from.tzinfo is None:
        report_from = _as_local(report_from)
    if report_to.tzinfo is None:
        report_to = _as_local(report_to)
    report_to += timedelta(days=1)

    return aggregate(store.read_all(), report_from, report_to, decode=decode)
