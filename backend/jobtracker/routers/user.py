from fastapi import APIRouter, Depends

from jobtracker.dependencies import RequestContext, require_session
from jobtracker.schemas.auth import UserResponse

router = APIRouter(tags=["user"])


@router.get("/user", response_model=UserResponse)
async def current_user(ctx: RequestContext = Depends(require_session)):
    return UserResponse(user_id=ctx.user_id, username=ctx.username)
