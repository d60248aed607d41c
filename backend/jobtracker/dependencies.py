from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.models.user import User
from jobtracker.services.session_service import session_service

NOT_AUTHENTICATED = "User not authenticated"


@dataclass(frozen=True)
class RequestContext:
    """The authenticated caller of a single request."""

    user_id: str
    username: str
    token: str


async def require_session(
    authorization: str | None = Header(None),
    db: Session = Depends(get_db),
) -> RequestContext:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail=NOT_AUTHENTICATED)
    token = authorization[7:]
    user_id = session_service.resolve(token)
    if user_id is None:
        raise HTTPException(status_code=401, detail=NOT_AUTHENTICATED)
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        session_service.sign_out(token)
        raise HTTPException(status_code=401, detail=NOT_AUTHENTICATED)
    return RequestContext(user_id=user.id, username=user.username, token=token)
