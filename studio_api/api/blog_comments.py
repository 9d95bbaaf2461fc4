"""Blog comment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from studio_api.api.blog import PathText, get_visible_post_by_slug
from studio_api.api.dependencies import api_rate_limit, get_session_state, require_session
from studio_api.database import get_db
from studio_api.errors import NotFound, ValidationError
from studio_api.models.blog_comment import BlogComment
from studio_api.schemas.auth import MessageResponse
from studio_api.schemas.blog import BlogCommentCreate, BlogCommentResponse
from studio_api.services.sessions import SessionState

router = APIRouter(
    prefix="/api/blog", tags=["blog-comments"], dependencies=[Depends(api_rate_limit)]
)


def get_comment(db: Session, comment_id: int) -> BlogComment:
    comment = db.query(BlogComment).filter(BlogComment.id == comment_id).first()
    if not comment:
        raise NotFound("Comment not found")
    return comment


@router.get("/{slug}/comments", response_model=list[BlogCommentResponse])
def list_comments(
    slug: PathText,
    db: Annotated[Session, Depends(get_db)],
    state: Annotated[SessionState, Depends(get_session_state)],
):
    """Get approved comments on a post, newest first."""
    post = get_visible_post_by_slug(db, slug, state)

    return (
        db.query(BlogComment)
        .filter(BlogComment.post_id == post.id, BlogComment.approved.is_(True))
        .order_by(BlogComment.created_at.desc(), BlogComment.id.desc())
        .all()
    )


@router.post(
    "/{slug}/comments",
    response_model=BlogCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    slug: PathText,
    comment_data: BlogCommentCreate,
    db: Annotated[Session, Depends(get_db)],
    state: Annotated[SessionState, Depends(get_session_state)],
):
    """Comment on a post.

    Signed-in users' comments are published immediately. Guests must give a
    name and email and their comments wait for approval.
    """
    post = get_visible_post_by_slug(db, slug, state)

    if not state.is_authenticated and not (comment_data.guest_name and comment_data.guest_email):
        field = "guestEmail" if comment_data.guest_name else "guestName"
        raise ValidationError([{"field": field, "message": "Please provide your name and email"}])

    comment = BlogComment(
        post_id=post.id,
        user_id=state.user_id,
        guest_name=None if state.is_authenticated else comment_data.guest_name,
        guest_email=None if state.is_authenticated else comment_data.guest_email,
        content=comment_data.content,
        approved=state.is_authenticated,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


@router.post("/comments/{comment_id}/approve", response_model=BlogCommentResponse)
def approve_comment(
    comment_id: int,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Publish a pending guest comment."""
    comment = get_comment(db, comment_id)
    comment.approved = True
    db.commit()
    db.refresh(comment)
    return comment


@router.delete("/comments/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: int,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a comment."""
    comment = get_comment(db, comment_id)
    db.delete(comment)
    db.commit()
    return MessageResponse(message="Comment deleted successfully")
