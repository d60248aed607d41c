from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from jobtracker.models.enums import ApplicationStatus, Priority


class ApplicationCreate(BaseModel):
    position: str | None = None
    company_name: str | None = None
    platform: str | None = None
    job_link: str | None = None
    contract_type: str | None = None
    work_model: str | None = None
    location: str | None = None
    salary_expectation: str | None = None
    cv_version: str | None = None
    notes: str | None = None
    status: ApplicationStatus | None = None
    priority: Priority | None = None
    is_bookmarked: bool = False
    date_applied: datetime | None = None
    reminder_date: datetime | None = None


class ApplicationUpdate(BaseModel):
    position: str | None = None
    company_name: str | None = None
    platform: str | None = None
    job_link: str | None = None
    contract_type: str | None = None
    work_model: str | None = None
    location: str | None = None
    salary_expectation: str | None = None
    cv_version: str | None = None
    notes: str | None = None
    status: ApplicationStatus | None = None
    priority: Priority | None = None
    is_bookmarked: bool | None = None
    date_applied: datetime | None = None
    reminder_date: datetime | None = None
    is_reminder_sent: bool | None = None


class StatusUpdate(BaseModel):
    status: ApplicationStatus


class ApplicationSettingsUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    application_id: str | None = Field(None, alias="applicationId")
    is_bookmarked: bool | None = Field(None, alias="isBookmarked")
    priority: Priority | None = None


class ApplicationResponse(BaseModel):
    id: str
    user_id: str
    position: str
    company_name: str
    platform: str | None = None
    job_link: str | None = None
    contract_type: str | None = None
    work_model: str | None = None
    location: str | None = None
    salary_expectation: str | None = None
    cv_version: str | None = None
    notes: str | None = None
    status: ApplicationStatus
    priority: Priority = Priority.MEDIUM
    is_bookmarked: bool = False
    date_applied: str
    last_updated: str
    reminder_date: str | None = None
    is_reminder_sent: bool = False
    is_ghosted: bool = False
    tags: list[str] = []


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationResponse]
    total: int
    page: int
    per_page: int | None
