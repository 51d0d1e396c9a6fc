"""Task text grammar: a title optionally followed by a break or ignore modifier."""

from __future__ import annotations

import re

from worklog_engine.errors import InvalidEncoding
from worklog_engine.schema import ParsedEntry

BREAK_MARKER = "**"
IGNORE_MARKER = "***"

_ENTRY_RE = re.compile(
    r"(?P<title>[a-zA-Z0-9,._+:@%/-]+[a-zA-Z0-9,._+:@%/\-\t ]*)"
    r"(?P<mod>\*{2,3}(?!\*))?"
)


def decode(task: str) -> ParsedEntry:
    """Decode task text into a title and its break/ignore flags.

    Only one modifier token can match, so at most one flag is set.
    """

    match = _ENTRY_RE.search(task)
    if match is None:
        raise InvalidEncoding(f"invalid task string {task!r}")

    modifier = match.group("mod")
    return ParsedEntry(
        title=match.group("title").rstrip(" \t"),
        is_break=modifier == BREAK_MARKER,
        is_ignored=modifier == IGNORE_MARKER,
    )
