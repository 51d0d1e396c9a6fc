"""Checks applied to a hand-edited timesheet before it replaces the original."""

from __future__ import annotations

import logging
import uuid

from worklog_engine.adapters import toml_adapter
from worklog_engine.errors import DecodeError, EmptyResultError
from worklog_engine.schema import LogEntry

logger = logging.getLogger(__name__)


def new_entry_id() -> str:
    return str(uuid.uuid4())


def validate_edit(file_path) -> list[LogEntry]:
    """Decode an edited timesheet and repair its identifiers.

    Every repeat of an id already seen, and every empty id, gets a fresh one
    without prompting. Entry order is not checked.
    """

    try:
        entries = toml_adapter.load(file_path)
    except DecodeError as exc:
        raise DecodeError(f"{exc} - please try editing again") from exc

    if not entries:
        raise EmptyResultError(f"got zero entries from edit of {file_path}")

    seen: set[str] = set()
    for entry in entries:
        if entry.id and entry.id not in seen:
            seen.add(entry.id)
            continue
        fresh = new_entry_id()
        logger.warning("Duplicate ID found - %r - fixing, new ID = %s", entry.id, fresh)
        entry.id = fresh
        seen.add(fresh)
    return entries
