import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.dependencies import RequestContext, require_session
from jobtracker.models.note import ApplicationNote
from jobtracker.schemas.note import NoteCreate, NoteResponse
from jobtracker.services.application_service import get_owned_application
from jobtracker.utils.timestamps import now_iso

router = APIRouter(prefix="/application-notes/{application_id}", tags=["notes"])


def _note_to_response(note: ApplicationNote) -> NoteResponse:
    return NoteResponse(
        id=note.id,
        application_id=note.application_id,
        content=note.content,
        created_at=note.created_at,
    )


@router.get("", response_model=list[NoteResponse])
async def list_notes(
    application_id: str,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    if not get_owned_application(db, ctx, application_id):
        raise HTTPException(status_code=404, detail="Application not found")
    notes = (
        db.query(ApplicationNote)
        .filter(ApplicationNote.application_id == application_id)
        .order_by(ApplicationNote.created_at.desc())
        .all()
    )
    return [_note_to_response(n) for n in notes]


@router.post("", response_model=NoteResponse, status_code=201)
async def add_note(
    application_id: str,
    req: NoteCreate,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    if not req.content:
        raise HTTPException(status_code=400, detail="Missing required fields")
    if not get_owned_application(db, ctx, application_id):
        raise HTTPException(status_code=404, detail="Application not found")

    note = ApplicationNote(
        id=str(uuid.uuid4()),
        application_id=application_id,
        content=req.content,
        created_at=now_iso(),
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    return _note_to_response(note)


@router.delete("/{note_id}")
async def delete_note(
    application_id: str,
    note_id: str,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    if not get_owned_application(db, ctx, application_id):
        raise HTTPException(status_code=404, detail="Application not found")

    note = (
        db.query(ApplicationNote)
        .filter(ApplicationNote.id == note_id, ApplicationNote.application_id == application_id)
        .first()
    )
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    db.delete(note)
    db.commit()
    return {"message": "Note deleted successfully"}
