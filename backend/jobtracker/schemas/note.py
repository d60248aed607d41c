from pydantic import BaseModel


class NoteCreate(BaseModel):
    content: str | None = None


class NoteResponse(BaseModel):
    id: str
    application_id: str
    content: str
    created_at: str
