"""Environment-driven settings for the timesheet tools."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_DIR = "~/.omw"
DEFAULT_FILE_NAME = "omw.toml"
DEFAULT_EDITOR = "notepad" if sys.platform == "win32" else "vi"


@dataclass
class Settings:
    """Resolved locations and external tools."""

    data_dir: Path
    data_file: Path
    editor: str = DEFAULT_EDITOR
    terminal: Optional[str] = None
    log_level: str = "WARNING"

    def ensure_directories(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.data_file.parent.mkdir(parents=True, exist_ok=True)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from OMW_DIR, OMW_FILE, EDITOR, OMW_TERM and OMW_LOG_LEVEL."""

    env = os.environ if environ is None else environ

    data_dir = Path(env.get("OMW_DIR") or DEFAULT_DIR).expanduser()
    data_file_raw = env.get("OMW_FILE")
    data_file = Path(data_file_raw).expanduser() if data_file_raw else data_dir / DEFAULT_FILE_NAME

    log_level = (env.get("OMW_LOG_LEVEL") or "WARNING").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"OMW_LOG_LEVEL: unknown logging level '{log_level}'")

    return Settings(
        data_dir=data_dir,
        data_file=data_file,
        editor=env.get("EDITOR") or DEFAULT_EDITOR,
        terminal=env.get("OMW_TERM") or None,
        log_level=log_level,
    )
