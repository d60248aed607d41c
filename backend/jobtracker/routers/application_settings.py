from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.dependencies import RequestContext, require_session
from jobtracker.routers.applications import application_to_response
from jobtracker.schemas.application import ApplicationResponse, ApplicationSettingsUpdate
from jobtracker.services.application_service import get_owned_application

router = APIRouter(tags=["applications"])


@router.put("/application-settings", response_model=ApplicationResponse)
async def update_application_settings(
    req: ApplicationSettingsUpdate,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    """Toggle bookmark and priority. These do not touch last_updated."""
    if not req.application_id:
        raise HTTPException(status_code=400, detail="Missing application ID")

    app = get_owned_application(db, ctx, req.application_id)
    if not app:
        raise HTTPException(status_code=404, detail="Application not found or unauthorized")

    if req.is_bookmarked is not None:
        app.is_bookmarked = req.is_bookmarked
    if req.priority is not None:
        app.priority = req.priority.value
    db.commit()
    db.refresh(app)
    return application_to_response(app)
