"""TOML adapter for the persisted timesheet.

The file holds one `[[entries]]` table per logged task::

    [[entries]]
    id = "0b6f..."
    end = 2019-01-01T09:00:00-05:00
    task = "write report"
"""

from __future__ import annotations

import tomllib
from datetime import datetime
from pathlib import Path

import tomli_w

from worklog_engine.errors import DecodeError, StorageError
from worklog_engine.schema import LogEntry


def _parse_item(item: dict, index: int) -> LogEntry:
    if not isinstance(item, dict):
        raise DecodeError(f"Entry {index}: expected a table")

    end = item.get("end")
    if not isinstance(end, datetime):
        raise DecodeError(f"Entry {index}: missing or malformed end timestamp")

    entry_id = item.get("id", "")
    task = item.get("task", "")
    if not isinstance(entry_id, str) or not isinstance(task, str):
        raise DecodeError(f"Entry {index}: id and task must be strings")

    return LogEntry(id=entry_id, end=end, task=task)


def parse(text: str) -> list[LogEntry]:
    """Parse timesheet text into entries, keeping file order."""

    try:
        payload = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise DecodeError(f"TOML formatting error: {exc}") from exc

    items = payload.get("entries", [])
    if not isinstance(items, list):
        raise DecodeError("'entries' must be an array of tables")

    return [_parse_item(item, i) for i, item in enumerate(items, start=1)]


def parse_bytes(data: bytes) -> list[LogEntry]:
    """Parse raw timesheet bytes, which must be UTF-8."""

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"timesheet is not valid UTF-8: {exc}") from exc
    return parse(text)


def load(file_path) -> list[LogEntry]:
    """Read and parse a timesheet file."""

    try:
        data = Path(file_path).read_bytes()
    except OSError as exc:
        raise StorageError(f"can't read timesheet {file_path}: {exc}") from exc
    return parse_bytes(data)


def dumps(entries: list[LogEntry]) -> str:
    """Encode entries as timesheet text."""

    payload = {
        "entries": [{"id": entry.id, "end": entry.end, "task": entry.task} for entry in entries],
    }
    return tomli_w.dumps(payload)
