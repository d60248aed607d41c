import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from jobtracker.dependencies import RequestContext
from jobtracker.models.application import Application
from jobtracker.models.enums import ApplicationStatus
from jobtracker.utils.timestamps import now_iso

logger = logging.getLogger(__name__)

NOT_FOUND_ERROR = "Application not found or unauthorized"


@dataclass
class StatusChangeResult:
    success: bool
    application: Application | None = None
    error: str | None = None


def get_owned_application(db: Session, ctx: RequestContext, application_id: str) -> Application | None:
    return (
        db.query(Application)
        .filter(Application.id == application_id, Application.user_id == ctx.user_id)
        .first()
    )


def list_user_applications(db: Session, ctx: RequestContext) -> list[Application]:
    return (
        db.query(Application)
        .filter(Application.user_id == ctx.user_id)
        .order_by(Application.date_applied.desc())
        .all()
    )


def update_application_status(
    db: Session, ctx: RequestContext, application_id: str, status: ApplicationStatus
) -> StatusChangeResult:
    """Move an application to ``status``. Any status may follow any other."""
    app = get_owned_application(db, ctx, application_id)
    if app is None:
        return StatusChangeResult(success=False, error=NOT_FOUND_ERROR)

    previous = app.status
    app.status = ApplicationStatus(status).value
    app.last_updated = now_iso()
    db.commit()
    db.refresh(app)
    logger.info("Application %s moved %s -> %s", app.id, previous, app.status)
    return StatusChangeResult(success=True, application=app)


def mark_reminder_sent(db: Session, ctx: RequestContext, application_id: str) -> StatusChangeResult:
    app = get_owned_application(db, ctx, application_id)
    if app is None:
        return StatusChangeResult(success=False, error=NOT_FOUND_ERROR)

    app.is_reminder_sent = True
    app.last_updated = now_iso()
    db.commit()
    db.refresh(app)
    return StatusChangeResult(success=True, application=app)
