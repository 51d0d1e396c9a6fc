"""Non-blocking exclusive advisory locks on timesheet files."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

from worklog_engine.errors import LockError, StorageError

logger = logging.getLogger(__name__)


def _lock(handle: IO) -> None:
    if sys.platform == "win32":
        import msvcrt

        # every handle locks byte 0, whatever its open mode put the position at
        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_NBLCK, 1)
    else:
        import fcntl

        fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)


def _unlock(handle: IO) -> None:
    if sys.platform == "win32":
        import msvcrt

        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        import fcntl

        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


@contextmanager
def file_lock(path, mode: str = "a+b") -> Iterator[IO]:
    """Open `path` and hold an exclusive lock on it for the block.

    The handle is opened in binary mode. Fails immediately with LockError
    when another process holds the lock; there is no waiting or retry. The
    lock is released and the handle closed on every exit path.
    """

    path = Path(path)
    try:
        handle = open(path, mode)
    except OSError as exc:
        raise StorageError(f"can't open or create {path}: {exc}") from exc

    try:
        try:
            _lock(handle)
        except OSError as exc:
            raise LockError(f"unable to get file lock on {path}") from exc
        logger.debug("Locked %s", path)
        try:
            yield handle
        finally:
            _unlock(handle)
            logger.debug("Unlocked %s", path)
    finally:
        handle.close()
