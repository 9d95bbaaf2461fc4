"""Blog comment model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from studio_api.database import Base
from studio_api.models.mixins import TimestampMixin


class BlogComment(Base, TimestampMixin):
    """Comment left by a signed-in user or a guest.

    Guest comments stay hidden until approved.
    """

    __tablename__ = "blog_comments"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(
        Integer, ForeignKey("blog_posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    guest_name = Column(String(255), nullable=True)
    guest_email = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    approved = Column(Boolean, nullable=False, default=False)

    # Relationships
    post = relationship("BlogPost", back_populates="comments")
