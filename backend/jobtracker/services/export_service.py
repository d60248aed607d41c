import csv
import io

CSV_HEADER = [
    "Position", "Company Name", "Platform", "Job Link", "Contract Type", "Work Model",
    "Location", "Salary Expectation", "Status", "CV Version", "Notes",
    "Date Applied", "Last Updated", "Reminder Sent",
]


def _row(app) -> list[str]:
    return [
        app.position,
        app.company_name,
        app.platform or "",
        app.job_link or "",
        app.contract_type or "",
        app.work_model or "",
        app.location or "",
        app.salary_expectation or "",
        getattr(app.status, "value", app.status),
        app.cv_version or "",
        app.notes or "",
        app.date_applied,
        app.last_updated,
        "Yes" if app.is_reminder_sent else "No",
    ]


def export_applications_csv(applications) -> str:
    """Serialize applications in the given order. Fields holding a comma,
    quote or line break are quoted with inner quotes doubled."""
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for app in applications:
        writer.writerow(_row(app))
    return output.getvalue()
