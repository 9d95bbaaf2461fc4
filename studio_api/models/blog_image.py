"""Blog image model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from studio_api.database import Base
from studio_api.models.mixins import TimestampMixin


class BlogImage(Base, TimestampMixin):
    """Uploaded image, optionally attached to a post."""

    __tablename__ = "blog_images"

    id = Column(Integer, primary_key=True, index=True)
    url = Column(String(2048), nullable=False)
    alt_text = Column(String(500), nullable=True)
    caption = Column(Text, nullable=True)
    post_id = Column(
        Integer, ForeignKey("blog_posts.id", ondelete="CASCADE"), nullable=True, index=True
    )
    uploaded_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    post = relationship("BlogPost", back_populates="images")
