import uuid
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobtracker.config import settings
from jobtracker.database import get_db
from jobtracker.dependencies import RequestContext, require_session
from jobtracker.models.tag import Tag, application_tags
from jobtracker.schemas.tag import (
    ApplicationTagCreate,
    ApplicationTagResponse,
    TagCreate,
    TagResponse,
)
from jobtracker.services.application_service import get_owned_application

router = APIRouter(prefix="/tags", tags=["tags"])


def _tag_to_response(tag: Tag, db: Session) -> TagResponse:
    count = (
        db.query(func.count(application_tags.c.application_id))
        .filter(application_tags.c.tag_id == tag.id)
        .scalar()
    )
    return TagResponse(id=tag.id, name=tag.name, color=tag.color, application_count=count)


def _get_owned_tag(db: Session, ctx: RequestContext, tag_id: str) -> Tag | None:
    return db.query(Tag).filter(Tag.id == tag_id, Tag.user_id == ctx.user_id).first()


@router.get("", response_model=list[TagResponse])
async def list_tags(ctx: RequestContext = Depends(require_session), db: Session = Depends(get_db)):
    tags = db.query(Tag).filter(Tag.user_id == ctx.user_id).order_by(Tag.name).all()
    return [_tag_to_response(t, db) for t in tags]


@router.post("", response_model=TagResponse, status_code=201)
async def create_tag(
    req: TagCreate,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    """Create a tag, or return the caller's existing tag of the same name."""
    if not req.name:
        raise HTTPException(status_code=400, detail="Tag name is required")

    tag = db.query(Tag).filter(Tag.user_id == ctx.user_id, Tag.name == req.name).first()
    if not tag:
        tag = Tag(
            id=str(uuid.uuid4()),
            user_id=ctx.user_id,
            name=req.name,
            color=req.color or settings.default_tag_color,
        )
        db.add(tag)
        db.commit()
        db.refresh(tag)
    return _tag_to_response(tag, db)


# Application-tag association endpoints
application_tags_router = APIRouter(prefix="/application-tags/{application_id}", tags=["tags"])


@application_tags_router.get("", response_model=list[TagResponse])
async def list_application_tags(
    application_id: str,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    app = get_owned_application(db, ctx, application_id)
    if not app:
        raise HTTPException(status_code=404, detail="Application not found")
    return [_tag_to_response(t, db) for t in sorted(app.tags, key=lambda t: t.name)]


@application_tags_router.post("", response_model=ApplicationTagResponse, status_code=201)
async def add_tag_to_application(
    application_id: str,
    req: ApplicationTagCreate,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    if not req.tag_id:
        raise HTTPException(status_code=400, detail="Missing required fields")

    app = get_owned_application(db, ctx, application_id)
    if not app:
        raise HTTPException(status_code=404, detail="Application not found")
    tag = _get_owned_tag(db, ctx, req.tag_id)
    if not tag:
        raise HTTPException(status_code=404, detail="Tag not found")

    if tag in app.tags:
        raise HTTPException(status_code=400, detail="Tag already associated with application")
    app.tags.append(tag)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Tag already associated with application")
    return ApplicationTagResponse(application_id=app.id, tag_id=tag.id)


@application_tags_router.delete("/{tag_id}")
async def remove_tag_from_application(
    application_id: str,
    tag_id: str,
    ctx: RequestContext = Depends(require_session),
    db: Session = Depends(get_db),
):
    app = get_owned_application(db, ctx, application_id)
    if not app:
        raise HTTPException(status_code=404, detail="Application not found")
    tag = _get_owned_tag(db, ctx, tag_id)
    if not tag:
        raise HTTPException(status_code=404, detail="Tag not found")

    if tag not in app.tags:
        raise HTTPException(status_code=404, detail="Tag not associated with application")
    app.tags.remove(tag)
    db.commit()
    return {"message": "Tag removed from application successfully"}
