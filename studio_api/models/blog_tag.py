"""Blog tag model."""

from sqlalchemy import Column, Integer, String

from studio_api.database import Base
from studio_api.models.mixins import TimestampMixin


class BlogTag(Base, TimestampMixin):
    """Tag that can be attached to any number of posts."""

    __tablename__ = "blog_tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(255), unique=True, nullable=False)
