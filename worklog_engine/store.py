"""Timesheet storage: locked appends, unlocked reads and guarded hand edits."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from datetime import datetime
from functools import partial
from pathlib import Path
from typing import Callable, Optional

from worklog_engine.adapters import toml_adapter
from worklog_engine.config import Settings, load_settings
from worklog_engine.editor import launch_editor
from worklog_engine.errors import EmptyLogError, EmptyResultError, StorageError
from worklog_engine.locking import file_lock
from worklog_engine.schema import LogEntry
from worklog_engine.validator import new_entry_id, validate_edit

logger = logging.getLogger(__name__)

HELLO_TASK = "hello"


def _local_now() -> datetime:
    return datetime.now().astimezone().replace(microsecond=0)


class EntryStore:
    """Owns one timesheet file.

    Mutations hold a non-blocking exclusive lock on the file and rewrite it
    whole. Reads are not locked and may observe a concurrent writer's state.
    """

    def __init__(
        self,
        file_path,
        editor: Optional[Callable[[Path], None]] = None,
        clock: Callable[[], datetime] = _local_now,
    ):
        self.path = Path(file_path)
        self._editor = editor
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "EntryStore":
        return cls(settings.data_file, editor=partial(launch_editor, settings=settings))

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(self.path.name + ".bak")

    def read_all(self) -> list[LogEntry]:
        return toml_adapter.load(self.path)

    def append(self, task: str) -> LogEntry:
        """Log `task` now under a fresh id, creating the timesheet if missing."""

        with file_lock(self.path, "a+b") as handle:
            handle.seek(0)
            entries = toml_adapter.parse_bytes(handle.read())
            entry = LogEntry(id=new_entry_id(), end=self._clock(), task=task)
            entries.append(entry)
            try:
                handle.seek(0)
                handle.truncate()
                handle.write(toml_adapter.dumps(entries).encode("utf-8"))
                handle.flush()
            except OSError as exc:
                raise StorageError(f"error saving new data to {self.path}: {exc}") from exc

        logger.info("Logged %r at %s", task, entry.end.isoformat())
        return entry

    def add(self, words: list[str]) -> LogEntry:
        return self.append(" ".join(words))

    def hello(self) -> LogEntry:
        """Mark the start of a working day."""
        return self.append(HELLO_TASK)

    def stretch(self) -> LogEntry:
        """Log the most recent task again, extending it up to now."""

        entries = self.read_all()
        if not entries:
            raise EmptyLogError(f"no entries in {self.path} to stretch")
        last = entries[-1]
        if not last.task:
            raise EmptyLogError("missing task description for stretch")
        return self.append(last.task)

    def _copy_to_temp(self) -> Path:
        fd, tmp_name = tempfile.mkstemp(
            prefix=self.path.name,
            suffix=self.path.suffix,
            dir=self.path.parent,
        )
        os.close(fd)
        tmp_path = Path(tmp_name)
        shutil.copyfile(self.path, tmp_path)
        return tmp_path

    def edit(self) -> None:
        """Edit a copy of the timesheet and swap it in once it validates.

        copy -> external edit -> lock and validate the copy -> back up the
        original to `<file>.bak` -> replace the original. The timesheet stays
        locked throughout and is untouched by any failure. Errors with
        `retry` set (editor failure, format error) invite the caller to run
        the whole transaction again.
        """

        if not self.path.exists():
            raise StorageError(f"no timesheet at {self.path} to edit")
        editor = self._editor or partial(launch_editor, settings=load_settings())

        with file_lock(self.path, "rb"):
            try:
                tmp_path = self._copy_to_temp()
            except OSError as exc:
                raise StorageError(f"can't copy {self.path} for editing: {exc}") from exc

            committed = False
            try:
                editor(tmp_path)

                with file_lock(tmp_path, "rb"):
                    try:
                        entries = validate_edit(tmp_path)
                    except EmptyResultError as exc:
                        raise EmptyResultError(
                            f"got zero entries from edit - manually remove {self.path} to clear all tasks"
                        ) from exc

                try:
                    shutil.copyfile(self.path, self.backup_path)
                    tmp_path.write_text(toml_adapter.dumps(entries), encoding="utf-8")
                    os.replace(tmp_path, self.path)
                except OSError as exc:
                    raise StorageError(f"saving edited timesheet failed: {exc}") from exc
                committed = True
            finally:
                if not committed:
                    tmp_path.unlink(missing_ok=True)

        logger.info("Saved %d edited entries to %s (backup at %s)", len(entries), self.path, self.backup_path)
