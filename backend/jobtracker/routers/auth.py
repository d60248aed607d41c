from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.dependencies import RequestContext, require_session
from jobtracker.schemas.auth import (
    Credentials,
    SigninResponse,
    SignupResponse,
    ThrottleResponse,
    UserResponse,
)
from jobtracker.services.session_service import session_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(req: Credentials, db: Session = Depends(get_db)):
    if not req.username or not req.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    user = session_service.create_user(db, req.username, req.password)
    if user is None:
        raise HTTPException(status_code=409, detail="Username already exists")
    return SignupResponse(
        message="User created successfully",
        user=UserResponse(user_id=user.id, username=user.username),
    )


@router.post("/signin", response_model=SigninResponse, responses={429: {"model": ThrottleResponse}})
async def signin(req: Credentials, request: Request, db: Session = Depends(get_db)):
    if not req.username or not req.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    client_host = request.client.host if request.client else "unknown"
    result = session_service.sign_in(db, req.username, req.password, throttle_key=f"signin:{client_host}")
    if result is None:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    if "error" in result:
        raise HTTPException(status_code=429, detail=result)
    return SigninResponse(**result)


@router.post("/signout")
async def signout(ctx: RequestContext = Depends(require_session)):
    session_service.sign_out(ctx.token)
    return {"message": "Signed out"}
