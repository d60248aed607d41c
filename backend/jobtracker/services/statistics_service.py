import math
from dataclasses import dataclass, field

from jobtracker.models.enums import ApplicationStatus
from jobtracker.utils.timestamps import parse_ts

# Statuses that count as an employer having answered an application.
RESPONDED_STATUSES = frozenset({
    ApplicationStatus.SCREENING.value,
    ApplicationStatus.INTERVIEW_HR.value,
    ApplicationStatus.INTERVIEW_USER.value,
    ApplicationStatus.OFFERING.value,
    ApplicationStatus.REJECTED.value,
})

# Terminal outcomes; last_updated marks when the outcome was recorded.
CLOSED_STATUSES = frozenset({
    ApplicationStatus.OFFERING.value,
    ApplicationStatus.REJECTED.value,
    ApplicationStatus.GHOSTED.value,
})

TOP_COMPANIES_LIMIT = 5
SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class ApplicationStats:
    total_applications: int = 0
    status_distribution: dict[str, int] = field(default_factory=dict)
    response_rate: int = 0
    success_rate: int = 0
    avg_days_to_response: int = 0
    monthly_applications: dict[str, int] = field(default_factory=dict)
    top_companies: list[dict] = field(default_factory=list)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _pct(num: int, denom: int) -> int:
    return round_half_up(num / denom * 100) if denom > 0 else 0


def calculate_application_stats(applications) -> ApplicationStats:
    status_distribution: dict[str, int] = {}
    monthly: dict[str, int] = {}
    companies: dict[str, int] = {}
    total = applied = responded = offers = 0
    response_days = response_count = 0

    for app in applications:
        total += 1
        status = getattr(app.status, "value", app.status)
        status_distribution[status] = status_distribution.get(status, 0) + 1
        companies[app.company_name] = companies.get(app.company_name, 0) + 1

        if status != ApplicationStatus.WISHLIST.value:
            applied += 1
        if status in RESPONDED_STATUSES:
            responded += 1
        if status == ApplicationStatus.OFFERING.value:
            offers += 1

        date_applied = parse_ts(app.date_applied)
        if date_applied is not None:
            month = date_applied.strftime("%Y-%m")
            monthly[month] = monthly.get(month, 0) + 1

        if status in CLOSED_STATUSES:
            last_updated = parse_ts(app.last_updated)
            if date_applied is not None and last_updated is not None:
                days = math.floor((last_updated - date_applied).total_seconds() / SECONDS_PER_DAY)
                if days >= 0:
                    response_days += days
                    response_count += 1

    # sorted() is stable, so equal counts keep first-seen order
    top = sorted(companies.items(), key=lambda item: item[1], reverse=True)[:TOP_COMPANIES_LIMIT]

    return ApplicationStats(
        total_applications=total,
        status_distribution=status_distribution,
        response_rate=_pct(responded, applied),
        success_rate=_pct(offers, total),
        avg_days_to_response=round_half_up(response_days / response_count) if response_count else 0,
        monthly_applications=monthly,
        top_companies=[{"company": name, "count": count} for name, count in top],
    )
