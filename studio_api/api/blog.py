"""Blog post API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from studio_api.api.dependencies import api_rate_limit, get_session_state, require_session
from studio_api.database import get_db
from studio_api.errors import DuplicateResource, NotFound
from studio_api.models.blog_post import BlogPost
from studio_api.schemas.auth import MessageResponse
from studio_api.schemas.blog import BlogPostCreate, BlogPostResponse, BlogPostUpdate
from studio_api.services.sessions import SessionState

DUPLICATE_SLUG = "A post with this slug already exists"

# Path text compared against text columns, which cannot hold NUL
PathText = Annotated[str, Path(pattern=r"^[^\x00]*$")]

router = APIRouter(prefix="/api/blog", tags=["blog"], dependencies=[Depends(api_rate_limit)])


def visible_posts(db: Session, state: SessionState) -> Query:
    """Posts the caller may read. Drafts are only visible to signed-in users."""
    query = db.query(BlogPost)
    if not state.is_authenticated:
        query = query.filter(BlogPost.published.is_(True))
    return query


def get_post(db: Session, post_id: int) -> BlogPost:
    """Get a post by id or fail with 404."""
    post = db.query(BlogPost).filter(BlogPost.id == post_id).first()
    if not post:
        raise NotFound("Blog post not found")
    return post


def get_visible_post_by_slug(db: Session, slug: str, state: SessionState) -> BlogPost:
    """Get a post by slug, hiding drafts from anonymous callers."""
    post = visible_posts(db, state).filter(BlogPost.slug == slug).first()
    if not post:
        raise NotFound("Blog post not found")
    return post


def ensure_slug_available(db: Session, slug: str, exclude_id: int | None = None) -> None:
    query = db.query(BlogPost.id).filter(BlogPost.slug == slug)
    if exclude_id is not None:
        query = query.filter(BlogPost.id != exclude_id)
    if query.first():
        raise DuplicateResource(DUPLICATE_SLUG)


def commit_post(db: Session, post: BlogPost) -> BlogPost:
    """Commit, mapping a lost slug race to DuplicateResource."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateResource(DUPLICATE_SLUG) from None
    db.refresh(post)
    return post


@router.get("", response_model=list[BlogPostResponse])
def list_posts(
    db: Annotated[Session, Depends(get_db)],
    state: Annotated[SessionState, Depends(get_session_state)],
):
    """Get all posts, newest first."""
    return visible_posts(db, state).order_by(BlogPost.created_at.desc(), BlogPost.id.desc()).all()


@router.get("/category/{category}", response_model=list[BlogPostResponse])
def list_posts_by_category(
    category: PathText,
    db: Annotated[Session, Depends(get_db)],
):
    """Get published posts in a category, newest first."""
    return (
        db.query(BlogPost)
        .filter(BlogPost.category == category, BlogPost.published.is_(True))
        .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        .all()
    )


@router.get("/search/{query}", response_model=list[BlogPostResponse])
def search_posts(
    query: PathText,
    db: Annotated[Session, Depends(get_db)],
):
    """Case-insensitive search over title, excerpt and content of published posts."""
    return (
        db.query(BlogPost)
        .filter(
            BlogPost.published.is_(True),
            or_(
                BlogPost.title.icontains(query, autoescape=True),
                BlogPost.excerpt.icontains(query, autoescape=True),
                BlogPost.content.icontains(query, autoescape=True),
            ),
        )
        .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        .all()
    )


@router.get("/{slug}", response_model=BlogPostResponse)
def get_post_by_slug(
    slug: PathText,
    db: Annotated[Session, Depends(get_db)],
    state: Annotated[SessionState, Depends(get_session_state)],
):
    """Get a single post by slug."""
    return get_visible_post_by_slug(db, slug, state)


@router.post("", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: BlogPostCreate,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a post. Requires a signed-in user."""
    ensure_slug_available(db, post_data.slug)

    post = BlogPost(**post_data.model_dump(), author_id=user_id)
    db.add(post)
    return commit_post(db, post)


@router.put("/{post_id}", response_model=BlogPostResponse)
def update_post(
    post_id: int,
    post_data: BlogPostUpdate,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the fields present in the request."""
    post = get_post(db, post_id)

    changes = post_data.model_dump(exclude_unset=True)
    # Explicit nulls are only meaningful for the optional image
    changes = {k: v for k, v in changes.items() if v is not None or k == "featured_image"}
    if "slug" in changes and changes["slug"] != post.slug:
        ensure_slug_available(db, changes["slug"], exclude_id=post.id)

    for field, value in changes.items():
        setattr(post, field, value)

    return commit_post(db, post)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a post along with its comments, images and tag links."""
    post = get_post(db, post_id)
    db.delete(post)
    db.commit()
    return MessageResponse(message="Blog post deleted successfully")
