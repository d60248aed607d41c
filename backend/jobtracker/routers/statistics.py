from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.dependencies import RequestContext, require_session
from jobtracker.schemas.statistics import StatisticsResponse
from jobtracker.services.application_service import list_user_applications
from jobtracker.services.statistics_service import calculate_application_stats

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("", response_model=StatisticsResponse)
async def get_statistics(ctx: RequestContext = Depends(require_session), db: Session = Depends(get_db)):
    stats = calculate_application_stats(list_user_applications(db, ctx))
    return StatisticsResponse(**asdict(stats))
