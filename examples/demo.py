"""Demo script for worklog-engine: report on the bundled sample timesheet."""

from worklog_engine.formatter import ReportFormat, render
from worklog_engine.report import compute_report
from worklog_engine.store import EntryStore


def main() -> None:
    store = EntryStore("examples/sample_timesheet.toml")
    report = compute_report(store, "2019-1-1", "2019-1-2")
    print(render(report, ReportFormat.TEXT))
    print("FullCalendar:", render(report, ReportFormat.FC))


if __name__ == "__main__":
    main()
