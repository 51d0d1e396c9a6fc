import shlex
import sys
from pathlib import Path

import pytest

from worklog_engine.config import Settings
from worklog_engine.editor import editor_command, launch_editor
from worklog_engine.errors import EditorError


def settings_for(editor, terminal=None):
    return Settings(data_dir=Path("."), data_file=Path("omw.toml"), editor=editor, terminal=terminal)


@pytest.mark.skipif(sys.platform == "win32", reason="terminal wrapping is POSIX only")
def test_editor_command_with_terminal():
    argv = editor_command("/tmp/omw.toml", settings_for("vim -n", terminal="xterm"))
    assert argv == ["xterm", "-e", "vim", "-n", "/tmp/omw.toml"]


def test_editor_command_plain():
    assert editor_command("sheet.toml", settings_for("vi")) == ["vi", "sheet.toml"]


def test_launch_editor_success(tmp_path):
    target = tmp_path / "sheet.toml"
    script = "import sys, pathlib; pathlib.Path(sys.argv[1]).write_text('edited')"
    launch_editor(target, settings_for(f"{shlex.quote(sys.executable)} -c {shlex.quote(script)}"))
    assert target.read_text() == "edited"


def test_launch_editor_nonzero_exit(tmp_path):
    editor = f"{shlex.quote(sys.executable)} -c 'raise SystemExit(3)'"
    with pytest.raises(EditorError) as excinfo:
        launch_editor(tmp_path / "sheet.toml", settings_for(editor))
    assert excinfo.value.retry


def test_launch_editor_missing_binary(tmp_path):
    with pytest.raises(EditorError):
        launch_editor(tmp_path / "sheet.toml", settings_for("no-such-editor-binary-omw"))
