import json

import pytest

from worklog_engine.cli import main
from worklog_engine.store import EntryStore


@pytest.fixture
def sheet(tmp_path, monkeypatch):
    path = tmp_path / "omw.toml"
    monkeypatch.setenv("OMW_DIR", str(tmp_path))
    monkeypatch.setenv("OMW_FILE", str(path))
    return path


def test_add_then_report_json(sheet, capsys):
    assert main(["add", "write", "report"]) == 0
    assert main(["add", "coffee", "**"]) == 0
    capsys.readouterr()

    assert main(["report", "--format", "json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [e["title"] for e in payload["entries"]] == ["write report", "coffee"]
    assert payload["entries"][1]["break"] is True


def test_hello_and_stretch(sheet):
    assert main(["hello"]) == 0
    assert main(["stretch"]) == 0
    assert [e.task for e in EntryStore(sheet).read_all()] == ["hello", "hello"]


def test_stretch_on_missing_sheet_fails(sheet, capsys):
    assert main(["stretch"]) == 1
    assert "omw stretch:" in capsys.readouterr().err


def test_report_bad_date(sheet, capsys):
    sheet.write_text("", encoding="utf-8")
    assert main(["report", "--from", "someday"]) == 1
    assert "can't parse report date" in capsys.readouterr().err


def test_file_option_overrides_environment(tmp_path, sheet):
    other = tmp_path / "other" / "sheet.toml"
    assert main(["--file", str(other), "add", "mail"]) == 0
    assert other.exists()
    assert not sheet.exists()


def test_non_utf8_sheet_reports_error(sheet, capsys):
    sheet.write_bytes('[[entries]]\nid = "a"\nend = 2019-01-01T09:00:00\ntask = "café"\n'.encode("latin-1"))
    assert main(["report", "--from", "2019-01-01", "--to", "2019-01-01"]) == 1
    assert "not valid UTF-8" in capsys.readouterr().err


def test_bad_log_level_is_reported(sheet, monkeypatch, capsys):
    monkeypatch.setenv("OMW_LOG_LEVEL", "chatty")
    assert main(["hello"]) == 1
    assert "OMW_LOG_LEVEL" in capsys.readouterr().err
    assert not sheet.exists()


def test_edit_retry_prompt_at_end_of_input(sheet, monkeypatch, capsys):
    sheet.write_text('[[entries]]\nid = "a"\nend = 2019-01-01T09:00:00\ntask = "hello"\n', encoding="utf-8")
    original = sheet.read_bytes()
    monkeypatch.setenv("EDITOR", "no-such-editor-binary-omw")
    monkeypatch.delenv("OMW_TERM", raising=False)

    def closed_stdin(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed_stdin)

    assert main(["edit"]) == 1
    assert "omw edit:" in capsys.readouterr().err
    assert sheet.read_bytes() == original
