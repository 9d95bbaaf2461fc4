"""Blog schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, Field, model_validator
from pydantic_core import PydanticCustomError

from studio_api.schemas.common import (
    CamelModel,
    CamelResponse,
    Email,
    Slug,
    Url,
    required,
    slugify,
)

# First path segments under /api/blog that belong to other routes
RESERVED_SLUGS = {"category", "comments", "images", "search", "tags"}


def check_post_slug(value: str) -> str:
    if value in RESERVED_SLUGS:
        raise PydanticCustomError("slug", "The slug '{slug}' is reserved", {"slug": value})
    return value


PostSlug = Annotated[Slug, AfterValidator(check_post_slug)]
Title = Annotated[str, Field(max_length=255), required("Title")]
Content = Annotated[str, Field(max_length=200000), required("Content")]
Excerpt = Annotated[str, Field(max_length=1000), required("Excerpt")]
Author = Annotated[str, Field(max_length=255), required("Author")]
Category = Annotated[str, Field(max_length=100), required("Category")]
ReadTime = Annotated[str, Field(max_length=50), required("Read time")]

# --- Tags ---


class BlogTagCreate(CamelModel):
    """Create a tag. The slug is derived from the name when omitted."""

    name: Annotated[str, Field(max_length=100), required("Tag name")]
    slug: Slug | None = None

    @model_validator(mode="after")
    def fill_slug(self) -> "BlogTagCreate":
        if self.slug is None:
            self.slug = slugify(self.name)
            if not self.slug:
                raise PydanticCustomError("slug", "Tag name must contain letters or numbers")
        return self


class BlogTagResponse(CamelResponse):
    """Tag response."""

    id: int
    name: str
    slug: str


class PostTagsUpdate(CamelModel):
    """Replace the set of tags on a post."""

    tag_ids: list[Annotated[int, Field(gt=0)]]


# --- Posts ---


class BlogPostCreate(CamelModel):
    """Create a blog post."""

    title: Title
    slug: PostSlug
    content: Content
    excerpt: Excerpt
    author: Author
    category: Category
    read_time: ReadTime
    featured_image: Url | None = None
    published: bool = True


class BlogPostUpdate(CamelModel):
    """Partial update of a blog post."""

    title: Title | None = None
    slug: PostSlug | None = None
    content: Content | None = None
    excerpt: Excerpt | None = None
    author: Author | None = None
    category: Category | None = None
    read_time: ReadTime | None = None
    featured_image: Url | None = None
    published: bool | None = None


class BlogPostResponse(CamelResponse):
    """Blog post response."""

    id: int
    title: str
    slug: str
    content: str
    excerpt: str
    author: str
    author_id: int | None
    category: str
    read_time: str
    featured_image: str | None
    published: bool
    tags: list[BlogTagResponse] = []
    created_at: datetime
    updated_at: datetime


# --- Comments ---


class BlogCommentCreate(CamelModel):
    """Post a comment. Guests must give a name and email."""

    content: Annotated[str, Field(max_length=5000), required("Comment")]
    guest_name: str | None = Field(None, max_length=255)
    guest_email: Email | None = None


class BlogCommentResponse(CamelResponse):
    """Comment response. The guest email is never echoed back."""

    id: int
    post_id: int
    user_id: int | None
    guest_name: str | None
    content: str
    approved: bool
    created_at: datetime


# --- Images ---


class BlogImageCreate(CamelModel):
    """Register an uploaded image."""

    url: Url
    alt_text: str | None = Field(None, max_length=500)
    caption: str | None = Field(None, max_length=1000)
    post_id: int | None = None


class BlogImageResponse(CamelResponse):
    """Image response."""

    id: int
    url: str
    alt_text: str | None
    caption: str | None
    post_id: int | None
    uploaded_by: int | None
    created_at: datetime
