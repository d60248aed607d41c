import uuid
from datetime import datetime
from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.dependencies import RequestContext, require_session
from jobtracker.models.application import Application
from jobtracker.models.enums import ApplicationStatus, Priority
from jobtracker.schemas.application import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationUpdate,
    StatusUpdate,
)
from jobtracker.services.application_service import get_owned_application, update_application_status
from jobtracker.services.pipeline_service import is_ghosted, sort_applications
from jobtracker.utils.timestamps import format_ts, now_iso

router = APIRouter(prefix="/applications", tags=["applications"])

REQUIRED_TEXT_FIELDS = ("position", "company_name")
NON_NULL_FIELDS = ("status", "priority", "is_bookmarked", "date_applied", "is_reminder_sent")


def application_to_response(app: Application) -> ApplicationResponse:
    return ApplicationResponse(
        id=app.id,
        user_id=app.user_id,
        position=app.position,
        company_name=app.company_name,
        platform=app.platform,
        job_link=app.job_link,
        contract_type=app.contract_type,
        work_model=app.work_model,
        location=app.location,
        salary_expectation=app.salary_expectation,
        cv_version=app.cv_version,
        notes=app.notes,
        status=app.status,
        priority=app.priority or Priority.MEDIUM,
        is_bookmarked=bool(app.is_bookmarked),
        date_applied=app.date_applied,
        last_updated=app.last_updated,
        reminder_date=app.reminder_date,
        is_reminder_sent=bool(app.is_reminder_sent),
        is_ghosted=is_ghosted(app),
        tags=sorted(t.name for t in app.tags),
    )


def _to_column_value(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return format_ts(value)
    return value


@router.post("", response_model=ApplicationResponse, status_code=201)
async def create_application(
    req: ApplicationCreate,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    if not req.position or not req.company_name:
        raise HTTPException(status_code=400, detail="Position and company name are required")

    now = now_iso()
    app = Application(
        id=str(uuid.uuid4()),
        user_id=ctx.user_id,
        position=req.position,
        company_name=req.company_name,
        platform=req.platform,
        job_link=req.job_link,
        contract_type=req.contract_type,
        work_model=req.work_model,
        location=req.location,
        salary_expectation=req.salary_expectation,
        cv_version=req.cv_version,
        notes=req.notes,
        status=(req.status or ApplicationStatus.APPLIED).value,
        priority=(req.priority or Priority.MEDIUM).value,
        is_bookmarked=req.is_bookmarked,
        date_applied=format_ts(req.date_applied) if req.date_applied else now,
        last_updated=now,
        reminder_date=format_ts(req.reminder_date) if req.reminder_date else None,
        is_reminder_sent=False,
    )
    db.add(app)
    db.commit()
    db.refresh(app)
    return application_to_response(app)


@router.get("", response_model=ApplicationListResponse)
async def list_applications(
    status: ApplicationStatus | None = None,
    q: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    page: int = Query(1, ge=1),
    per_page: int | None = Query(None, ge=1, le=100),
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    query = db.query(Application).filter(Application.user_id == ctx.user_id)

    if status:
        query = query.filter(Application.status == status.value)
    if q:
        query = query.filter(
            Application.position.ilike(f"%{q}%")
            | Application.company_name.ilike(f"%{q}%")
            | Application.platform.ilike(f"%{q}%")
            | Application.notes.ilike(f"%{q}%")
        )
    if start_date:
        query = query.filter(Application.date_applied >= format_ts(start_date))
    if end_date:
        query = query.filter(Application.date_applied <= format_ts(end_date))

    apps = sort_applications(query.order_by(Application.date_applied.desc()).all())
    total = len(apps)
    if per_page:
        apps = apps[(page - 1) * per_page:page * per_page]

    return ApplicationListResponse(
        applications=[application_to_response(a) for a in apps],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: str,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    app = get_owned_application(db, ctx, application_id)
    if not app:
        raise HTTPException(status_code=404, detail="Application not found")
    return application_to_response(app)


@router.put("/{application_id}", response_model=ApplicationResponse)
async def update_application(
    application_id: str,
    req: ApplicationUpdate,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    update_data = req.model_dump(exclude_unset=True)
    for key in REQUIRED_TEXT_FIELDS:
        if key in update_data and not update_data[key]:
            raise HTTPException(status_code=400, detail=f"{key} cannot be empty")
    for key in NON_NULL_FIELDS:
        if key in update_data and update_data[key] is None:
            raise HTTPException(status_code=400, detail=f"{key} cannot be null")

    app = get_owned_application(db, ctx, application_id)
    if not app:
        raise HTTPException(status_code=404, detail="Application not found or unauthorized")

    for key, value in update_data.items():
        setattr(app, key, _to_column_value(value))
    app.last_updated = now_iso()

    db.commit()
    db.refresh(app)
    return application_to_response(app)


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def change_status(
    application_id: str,
    req: StatusUpdate,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    result = update_application_status(db, ctx, application_id, req.status)
    if not result.success:
        raise HTTPException(status_code=404, detail=result.error)
    return application_to_response(result.application)


@router.delete("/{application_id}")
async def delete_application(
    application_id: str,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    app = get_owned_application(db, ctx, application_id)
    if not app:
        raise HTTPException(status_code=404, detail="Application not found or unauthorized")
    db.delete(app)
    db.commit()
    return {"message": "Application deleted successfully"}
