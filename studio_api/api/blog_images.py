"""Blog image API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from studio_api.api.blog import get_post
from studio_api.api.dependencies import api_rate_limit, require_session
from studio_api.database import get_db
from studio_api.errors import NotFound
from studio_api.models.blog_image import BlogImage
from studio_api.schemas.auth import MessageResponse
from studio_api.schemas.blog import BlogImageCreate, BlogImageResponse

router = APIRouter(
    prefix="/api/blog", tags=["blog-images"], dependencies=[Depends(api_rate_limit)]
)


@router.post("/images", response_model=BlogImageResponse, status_code=status.HTTP_201_CREATED)
def create_image(
    image_data: BlogImageCreate,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Record an uploaded image, optionally attached to a post."""
    if image_data.post_id is not None:
        get_post(db, image_data.post_id)

    image = BlogImage(**image_data.model_dump(), uploaded_by=user_id)
    db.add(image)
    db.commit()
    db.refresh(image)
    return image


@router.get("/{post_id}/images", response_model=list[BlogImageResponse])
def list_images(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Get images attached to a post, newest first."""
    return (
        db.query(BlogImage)
        .filter(BlogImage.post_id == post_id)
        .order_by(BlogImage.created_at.desc(), BlogImage.id.desc())
        .all()
    )


@router.delete("/images/{image_id}", response_model=MessageResponse)
def delete_image(
    image_id: int,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an image."""
    image = db.query(BlogImage).filter(BlogImage.id == image_id).first()
    if not image:
        raise NotFound("Image not found")

    db.delete(image)
    db.commit()
    return MessageResponse(message="Image deleted successfully")
