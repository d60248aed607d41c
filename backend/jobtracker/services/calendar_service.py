from datetime import timedelta
from icalendar import Alarm, Calendar, Event

from jobtracker.utils.timestamps import parse_ts


def _reminder_event(app) -> Event:
    event = Event()
    event.add("uid", f"reminder-{app.id}@jobtracker")
    event.add("summary", f"Follow up: {app.position} at {app.company_name}")

    day = parse_ts(app.reminder_date).date()
    event.add("dtstart", day)
    event.add("dtend", day + timedelta(days=1))

    description_parts = [f"Status: {getattr(app.status, 'value', app.status)}"]
    if app.job_link:
        description_parts.append(f"Job link: {app.job_link}")
    if app.notes:
        description_parts.append(f"Notes: {app.notes}")
    event.add("description", "\n".join(description_parts))

    alarm = Alarm()
    alarm.add("action", "DISPLAY")
    alarm.add("trigger", timedelta(hours=9))  # 09:00 on the reminder day
    alarm.add("description", f"Follow up on {app.position} at {app.company_name}")
    event.add_component(alarm)
    return event


def generate_reminder_calendar(applications) -> bytes:
    cal = Calendar()
    cal.add("prodid", "-//JobTracker//EN")
    cal.add("version", "2.0")
    for app in applications:
        if app.reminder_date:
            cal.add_component(_reminder_event(app))
    return cal.to_ical()
