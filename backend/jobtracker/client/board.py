"""Local board state with optimistic status moves.

Each record's in-flight change goes through
``IDLE -> PENDING -> COMMITTED | ROLLED_BACK``. A rollback restores the
record exactly as it was before the move.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from jobtracker.models.enums import ApplicationStatus
from jobtracker.schemas.application import ApplicationResponse
from jobtracker.services.pipeline_service import sort_applications
from jobtracker.utils.timestamps import format_ts, utc_now


class ChangeState(str, Enum):
    IDLE = "IDLE"
    PENDING = "PENDING"
    COMMITTED = "COMMITTED"
    ROLLED_BACK = "ROLLED_BACK"


@dataclass
class PendingChange:
    application_id: str
    previous: ApplicationResponse
    pending: ApplicationResponse
    state: ChangeState = ChangeState.PENDING


class BoardState:
    def __init__(self, applications: list[ApplicationResponse] | None = None):
        self._records: dict[str, ApplicationResponse] = {}
        self._changes: dict[str, PendingChange] = {}
        for app in applications or []:
            self._records[app.id] = app

    @property
    def applications(self) -> list[ApplicationResponse]:
        return sort_applications(self._records.values())

    def get(self, application_id: str) -> ApplicationResponse:
        return self._records[application_id]

    def columns(self) -> dict[str, list[ApplicationResponse]]:
        grouped: dict[str, list[ApplicationResponse]] = {s.value: [] for s in ApplicationStatus}
        for app in self.applications:
            grouped[ApplicationStatus(app.status).value].append(app)
        return grouped

    def state_of(self, application_id: str) -> ChangeState:
        change = self._changes.get(application_id)
        return change.state if change else ChangeState.IDLE

    def upsert(self, application: ApplicationResponse):
        self._records[application.id] = application

    def remove(self, application_id: str):
        self._records.pop(application_id, None)
        self._changes.pop(application_id, None)

    def move(self, application_id: str, status: ApplicationStatus, now: datetime | None = None) -> PendingChange:
        if self.state_of(application_id) == ChangeState.PENDING:
            raise ValueError(f"Application {application_id} already has a pending change")
        previous = self._records[application_id]
        pending = previous.model_copy(update={
            "status": ApplicationStatus(status),
            "last_updated": format_ts(now or utc_now()),
        })
        self._records[application_id] = pending
        change = PendingChange(application_id=application_id, previous=previous, pending=pending)
        self._changes[application_id] = change
        return change

    def _pending_change(self, application_id: str) -> PendingChange:
        change = self._changes.get(application_id)
        if change is None or change.state != ChangeState.PENDING:
            raise ValueError(f"Application {application_id} has no pending change")
        return change

    def commit(self, application_id: str, server_record: ApplicationResponse | None = None) -> PendingChange:
        change = self._pending_change(application_id)
        if server_record is not None:
            self._records[application_id] = server_record
        change.state = ChangeState.COMMITTED
        return change

    def rollback(self, application_id: str) -> PendingChange:
        change = self._pending_change(application_id)
        self._records[application_id] = change.previous
        change.state = ChangeState.ROLLED_BACK
        return change
