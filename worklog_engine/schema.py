"""Core data schema for timesheet entries and reports."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional


@dataclass
class LogEntry:
    """One persisted timesheet row; `end` is when the task was logged."""

    id: str
    end: datetime
    task: str


@dataclass
class ParsedEntry:
    """Title and modifiers decoded from a task string."""

    title: str
    is_break: bool = False
    is_ignored: bool = False


@dataclass
class ReportEntry:
    """Entry as attributed by a report computation.

    `start`/`end` hold the span anchor (the previous entry's timestamp, or the
    entry's own one at the first entry of a day); `timestamp` is the moment
    the entry was logged.
    """

    id: str
    title: str
    timestamp: datetime
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    duration: Optional[timedelta] = None
    is_break: bool = False
    is_ignored: bool = False
    url: str = ""
    class_names: list[str] = field(default_factory=list)


@dataclass
class Report:
    report_from: datetime
    report_to: datetime
    ignore_hours: timedelta = timedelta(0)
    break_hours: timedelta = timedelta(0)
    task_hours: timedelta = timedelta(0)
    entries: list[ReportEntry] = field(default_factory=list)
