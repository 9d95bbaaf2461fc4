"""SQLAlchemy models."""

from studio_api.models.blog_comment import BlogComment
from studio_api.models.blog_image import BlogImage
from studio_api.models.blog_post import BlogPost, blog_post_tags
from studio_api.models.blog_tag import BlogTag
from studio_api.models.newsletter import NewsletterSubscription
from studio_api.models.registration import Registration
from studio_api.models.session_record import SessionRecord
from studio_api.models.submission import AssetSubmission, GameSubmission
from studio_api.models.user import User

__all__ = [
    "User",
    "SessionRecord",
    "Registration",
    "GameSubmission",
    "AssetSubmission",
    "NewsletterSubscription",
    "BlogPost",
    "BlogTag",
    "BlogComment",
    "BlogImage",
    "blog_post_tags",
]
