"""Streamlit report viewer and task logger for worklog-engine."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Any

from worklog_engine.config import load_settings
from worklog_engine.errors import WorklogError
from worklog_engine.formatter import ReportFormat, entry_to_dict, render
from worklog_engine.report import compute_report
from worklog_engine.store import EntryStore


def _hours(value: timedelta) -> float:
    return round(value.total_seconds() / 3600.0, 2)


def _hours_by_day(report) -> dict[str, float]:
    per_day: dict[str, float] = defaultdict(float)
    for entry in report.entries:
        if entry.duration and not entry.is_break and not entry.is_ignored:
            per_day[entry.timestamp.date().isoformat()] += _hours(entry.duration)
    return dict(per_day)


def build_view(store: EntryStore, date_from: date, date_to: date) -> dict[str, Any]:
    """Compute the report once and return a UI-friendly payload."""

    report = compute_report(store, date_from.isoformat(), date_to.isoformat())
    return {
        "task_hours": _hours(report.task_hours),
        "break_hours": _hours(report.break_hours),
        "ignore_hours": _hours(report.ignore_hours),
        "rows": [entry_to_dict(entry) for entry in report.entries],
        "hours_by_day": _hours_by_day(report),
        "outputs": {fmt.value: render(report, fmt) for fmt in ReportFormat},
    }


def main() -> None:
    import streamlit as st

    settings = load_settings()

    st.set_page_config(page_title="omw timesheet", layout="wide")
    st.title("omw: Timesheet Report")

    with st.sidebar:
        st.header("Timesheet")
        file_path = st.text_input("Timesheet file", value=str(settings.data_file))
        today = date.today()
        date_from = st.date_input("From", value=today - timedelta(days=today.weekday()))
        date_to = st.date_input("To", value=today)

        st.header("Log a task")
        task = st.text_input("Task", placeholder="write report, or coffee **")
        log_clicked = st.button("Log now", type="primary")

    store = EntryStore(file_path)

    if log_clicked:
        if not task.strip():
            st.warning("Enter a task description first.")
        else:
            try:
                entry = store.append(task.strip())
                st.success(f"Logged '{entry.task}' at {entry.end:%H:%M}.")
            except WorklogError as exc:
                st.error(f"Could not log task: {exc}")

    if date_to < date_from:
        st.error("'To' must not be before 'From'.")
        return

    try:
        view = build_view(store, date_from, date_to)
    except WorklogError as exc:
        st.error(f"Report error: {exc}")
        return

    c1, c2, c3 = st.columns(3)
    c1.metric("Task hours", view["task_hours"])
    c2.metric("Break hours", view["break_hours"])
    c3.metric("Ignored hours", view["ignore_hours"])

    if view["hours_by_day"]:
        st.subheader("Task hours per day")
        st.bar_chart(view["hours_by_day"])

    st.subheader("Entries")
    if view["rows"]:
        st.dataframe(view["rows"], use_container_width=True)
    else:
        st.info("No entries in the selected range.")

    with st.expander("Text report"):
        st.code(view["outputs"][ReportFormat.TEXT.value])
    with st.expander("JSON"):
        st.code(view["outputs"][ReportFormat.JSON.value], language="json")
    with st.expander("FullCalendar feed"):
        st.code(view["outputs"][ReportFormat.FC.value], language="json")


if __name__ == "__main__":
    main()
