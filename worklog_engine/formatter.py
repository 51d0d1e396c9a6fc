"""Render reports as text, JSON or a FullCalendar event feed."""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Union

from worklog_engine.errors import RenderError
from worklog_engine.schema import Report, ReportEntry

BREAK_CLASS = "breakEntry"
IGNORE_CLASS = "ignoreEntry"
_DAY_RULE = "-" * 23


class ReportFormat(Enum):
    TEXT = "text"
    JSON = "json"
    FC = "fc"


def _nanoseconds(value: timedelta) -> int:
    return (value.days * 86_400 + value.seconds) * 1_000_000_000 + value.microseconds * 1_000


def _json_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, timedelta):
        return _nanoseconds(value)
    return value


def _compact(fields: dict) -> dict:
    """Drop empty and zero values, then make the rest JSON friendly."""
    return {key: _json_value(value) for key, value in fields.items() if value not in (None, "", [], False, timedelta(0))}


def entry_to_dict(entry: ReportEntry) -> dict:
    return _compact(
        {
            "id": entry.id,
            "break": entry.is_break,
            "classNames": entry.class_names,
            "duration": entry.duration,
            "ignore": entry.is_ignored,
            "start": entry.start,
            "end": entry.end,
            "title": entry.title,
            "timestamp": entry.timestamp,
            "url": entry.url,
        }
    )


def report_to_dict(report: Report) -> dict:
    return {
        "reportFrom": report.report_from.isoformat(),
        "reportTo": report.report_to.isoformat(),
        "ignoreTotalHours": _nanoseconds(report.ignore_hours),
        "breakTotalHours": _nanoseconds(report.break_hours),
        "taskTotalHours": _nanoseconds(report.task_hours),
        "entries": [entry_to_dict(entry) for entry in report.entries],
    }


def fullcalendar_events(report: Report) -> list[dict]:
    """Map entries to FullCalendar events spanning `[start, start + duration]`."""

    events = []
    for entry in report.entries:
        classes = []
        if entry.is_break:
            classes.append(BREAK_CLASS)
        if entry.is_ignored:
            classes.append(IGNORE_CLASS)

        start = entry.start or entry.timestamp
        events.append(
            {
                "start": start.isoformat(),
                "end": (start + (entry.duration or timedelta(0))).isoformat(),
                "title": entry.title,
                "url": "",
                "classNames": classes,
            }
        )
    return events


def _clock(value: datetime) -> str:
    return f"{value.hour}:{value.minute:02d}"


def render_text(report: Report) -> str:
    lines = [
        f"Report Start: {report.report_from}",
        f"Report End: {report.report_to}",
        f"Total Task Hours: {report.task_hours}",
        f"Total Break Hours: {report.break_hours}",
        f"Total Ignore Hours: {report.ignore_hours}",
    ]

    day = None
    for entry in report.entries:
        anchor = entry.end or entry.timestamp
        if anchor.date() != day:
            day = anchor.date()
            lines.append("")
            lines.append(f"{_DAY_RULE} {anchor:%A}, {anchor:%Y-%m-%d} {_DAY_RULE}")

        start = entry.start or entry.timestamp
        duration = entry.duration or timedelta(0)
        lines.append(f"({duration}) {_clock(start)}-{_clock(entry.timestamp)} -- {entry.title}")

    return "\n".join(lines) + "\n"


def render(report: Report, fmt: Union[ReportFormat, str] = ReportFormat.TEXT) -> str:
    """Render `report` in one of the ReportFormat shapes."""

    try:
        fmt = ReportFormat(fmt)
    except ValueError as exc:
        raise RenderError(f"unknown report format '{fmt}'") from exc

    if fmt is ReportFormat.JSON:
        return json.dumps(report_to_dict(report))
    if fmt is ReportFormat.FC:
        return json.dumps(fullcalendar_events(report))
    return render_text(report)
