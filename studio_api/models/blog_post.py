"""Blog post model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from studio_api.database import Base
from studio_api.models.mixins import TimestampMixin

blog_post_tags = Table(
    "blog_post_tags",
    Base.metadata,
    Column("post_id", Integer, ForeignKey("blog_posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("blog_tags.id", ondelete="CASCADE"), primary_key=True),
)


class BlogPost(Base, TimestampMixin):
    """Blog post, addressed publicly by its unique slug."""

    __tablename__ = "blog_posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=False)
    author = Column(String(255), nullable=False)  # display name shown on the post
    author_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    category = Column(String(100), nullable=False, index=True)
    read_time = Column(String(50), nullable=False)
    published = Column(Boolean, nullable=False, default=True)
    featured_image = Column(String(2048), nullable=True)

    # Relationships
    tags = relationship("BlogTag", secondary=blog_post_tags, order_by="BlogTag.name")
    comments = relationship(
        "BlogComment", back_populates="post", cascade="all, delete-orphan", passive_deletes=True
    )
    images = relationship("BlogImage", back_populates="post", passive_deletes=True)
