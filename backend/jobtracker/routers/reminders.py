from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.dependencies import RequestContext, require_session
from jobtracker.models.application import Application
from jobtracker.routers.applications import application_to_response
from jobtracker.schemas.application import ApplicationResponse
from jobtracker.schemas.reminder import ReminderCreate
from jobtracker.services.application_service import (
    get_owned_application,
    list_user_applications,
    mark_reminder_sent,
)
from jobtracker.services.calendar_service import generate_reminder_calendar
from jobtracker.services.pipeline_service import ghosted_applications
from jobtracker.utils.timestamps import format_ts, start_of_today_iso

router = APIRouter(prefix="/reminders", tags=["reminders"])


def _pending_reminders(db: Session, ctx: RequestContext) -> list[Application]:
    return (
        db.query(Application)
        .filter(Application.user_id == ctx.user_id)
        .filter(Application.reminder_date.isnot(None))
        .filter(Application.reminder_date >= start_of_today_iso())
        .filter(Application.is_reminder_sent.is_(False))
        .order_by(Application.reminder_date.asc())
        .all()
    )


@router.get("", response_model=list[ApplicationResponse])
async def list_reminders(ctx: RequestContext = Depends(require_session), db: Session = Depends(get_db)):
    return [application_to_response(a) for a in _pending_reminders(db, ctx)]


@router.post("", response_model=ApplicationResponse)
async def set_reminder(
    req: ReminderCreate,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    if not req.application_id or not req.reminder_date:
        raise HTTPException(status_code=400, detail="Missing required fields")

    app = get_owned_application(db, ctx, req.application_id)
    if not app:
        raise HTTPException(status_code=404, detail="Application not found or unauthorized")
    app.reminder_date = format_ts(req.reminder_date)
    db.commit()
    db.refresh(app)
    return application_to_response(app)


@router.post("/{application_id}/sent", response_model=ApplicationResponse)
async def acknowledge_reminder(
    application_id: str,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    result = mark_reminder_sent(db, ctx, application_id)
    if not result.success:
        raise HTTPException(status_code=404, detail=result.error)
    return application_to_response(result.application)


@router.get("/ghosted", response_model=list[ApplicationResponse])
async def list_ghosted(ctx: RequestContext = Depends(require_session), db: Session = Depends(get_db)):
    apps = ghosted_applications(list_user_applications(db, ctx))
    return [application_to_response(a) for a in apps]


@router.get("/calendar")
async def reminders_calendar(ctx: RequestContext = Depends(require_session), db: Session = Depends(get_db)):
    apps = _pending_reminders(db, ctx)
    if not apps:
        raise HTTPException(status_code=404, detail="No pending reminders")

    return Response(
        content=generate_reminder_calendar(apps),
        media_type="text/calendar",
        headers={"Content-Disposition": 'attachment; filename="job_reminders.ics"'},
    )
