from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.dependencies import RequestContext, require_session
from jobtracker.services.application_service import list_user_applications
from jobtracker.services.export_service import export_applications_csv

router = APIRouter(tags=["export"])


@router.get("/export")
async def csv_export(ctx: RequestContext = Depends(require_session), db: Session = Depends(get_db)):
    csv_data = export_applications_csv(list_user_applications(db, ctx))
    return Response(
        content=csv_data,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="job_applications.csv"'},
    )
