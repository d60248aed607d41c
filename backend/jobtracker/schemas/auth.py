from pydantic import BaseModel


class Credentials(BaseModel):
    username: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    user_id: str
    username: str


class SignupResponse(BaseModel):
    message: str
    user: UserResponse


class SigninResponse(BaseModel):
    token: str
    expires_in_seconds: int
    user_id: str
    username: str


class ThrottleResponse(BaseModel):
    error: str
    retry_after_seconds: float
