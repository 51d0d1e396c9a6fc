"""Launch the user's editor on a timesheet copy."""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from pathlib import Path

from worklog_engine.config import Settings
from worklog_engine.errors import EditorError

logger = logging.getLogger(__name__)


def editor_command(path, settings: Settings) -> list[str]:
    """Build the argv that opens `path` in the configured editor."""

    command = shlex.split(settings.editor, posix=sys.platform != "win32")
    if settings.terminal and sys.platform != "win32":
        command = [*shlex.split(settings.terminal), "-e", *command]
    return [*command, str(path)]


def launch_editor(path: Path, settings: Settings) -> None:
    """Run the editor attached to the current terminal and wait for it to exit."""

    argv = editor_command(path, settings)
    logger.info("Running editor: %s", argv)
    try:
        subprocess.run(argv, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise EditorError(f"editor {argv[0]!r} failed: {exc}") from exc
