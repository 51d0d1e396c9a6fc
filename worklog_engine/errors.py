"""Exceptions raised by the timesheet store, report engine and formatter."""

from __future__ import annotations


class WorklogError(Exception):
    """Base class; `retry` tells an interactive caller to run the operation again."""

    retry = False


class StorageError(WorklogError):
    """The timesheet could not be opened, read or written."""


class LockError(WorklogError):
    """An exclusive lock on a timesheet file could not be acquired."""


class DecodeError(WorklogError, ValueError):
    """The timesheet content is not valid structured text."""

    retry = True


class InvalidEncoding(WorklogError, ValueError):
    """A task string matches no entry grammar."""


class EmptyLogError(WorklogError):
    """The timesheet holds no usable entry for the operation."""


class EmptyResultError(WorklogError):
    """An edited timesheet decoded to zero entries."""


class AggregationError(WorklogError):
    """An entry was classified as both a break and ignored."""


class DateParseError(WorklogError, ValueError):
    """A report boundary date is malformed."""


class RenderError(WorklogError, ValueError):
    """A report could not be rendered in the requested format."""


class EditorError(WorklogError):
    """The external editor could not be started or exited with an error."""

    retry = True
