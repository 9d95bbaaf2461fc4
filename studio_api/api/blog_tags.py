"""Blog tag API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from studio_api.api.blog import get_post
from studio_api.api.dependencies import api_rate_limit, require_session
from studio_api.database import get_db
from studio_api.errors import DuplicateResource, NotFound
from studio_api.models.blog_tag import BlogTag
from studio_api.schemas.auth import MessageResponse
from studio_api.schemas.blog import BlogTagCreate, BlogTagResponse, PostTagsUpdate

DUPLICATE_TAG = "A tag with this name already exists"

router = APIRouter(prefix="/api/blog", tags=["blog-tags"], dependencies=[Depends(api_rate_limit)])


@router.get("/tags", response_model=list[BlogTagResponse])
def list_tags(db: Annotated[Session, Depends(get_db)]):
    """Get all tags by name."""
    return db.query(BlogTag).order_by(BlogTag.name).all()


@router.post("/tags", response_model=BlogTagResponse, status_code=status.HTTP_201_CREATED)
def create_tag(
    tag_data: BlogTagCreate,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a tag."""
    existing = (
        db.query(BlogTag)
        .filter(or_(BlogTag.name == tag_data.name, BlogTag.slug == tag_data.slug))
        .first()
    )
    if existing:
        raise DuplicateResource(DUPLICATE_TAG)

    tag = BlogTag(name=tag_data.name, slug=tag_data.slug)
    db.add(tag)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateResource(DUPLICATE_TAG) from None
    db.refresh(tag)
    return tag


@router.post("/{post_id}/tags", response_model=MessageResponse)
def set_post_tags(
    post_id: int,
    tags_data: PostTagsUpdate,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Replace a post's tags with the given set."""
    post = get_post(db, post_id)

    tag_ids = set(tags_data.tag_ids)
    tags = db.query(BlogTag).filter(BlogTag.id.in_(tag_ids)).all() if tag_ids else []
    missing = tag_ids - {tag.id for tag in tags}
    if missing:
        raise NotFound(f"Tag not found: {min(missing)}")

    post.tags = tags
    db.commit()
    return MessageResponse(message="Tags updated successfully")
