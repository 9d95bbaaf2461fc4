"""Pydantic schemas for API requests and responses."""

from studio_api.schemas.auth import (
    AuthResponse,
    MessageResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from studio_api.schemas.blog import (
    BlogCommentCreate,
    BlogCommentResponse,
    BlogImageCreate,
    BlogImageResponse,
    BlogPostCreate,
    BlogPostResponse,
    BlogPostUpdate,
    BlogTagCreate,
    BlogTagResponse,
    PostTagsUpdate,
)
from studio_api.schemas.newsletter import NewsletterSubscribe
from studio_api.schemas.registration import RegistrationCreate, RegistrationResponse
from studio_api.schemas.submission import (
    AssetSubmissionCreate,
    AssetSubmissionResponse,
    AssetSubmissionResult,
    GameSubmissionCreate,
    GameSubmissionResponse,
    GameSubmissionResult,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "MessageResponse",
    "RegistrationCreate",
    "RegistrationResponse",
    "GameSubmissionCreate",
    "GameSubmissionResponse",
    "GameSubmissionResult",
    "AssetSubmissionCreate",
    "AssetSubmissionResponse",
    "AssetSubmissionResult",
    "NewsletterSubscribe",
    "BlogPostCreate",
    "BlogPostUpdate",
    "BlogPostResponse",
    "BlogCommentCreate",
    "BlogCommentResponse",
    "BlogTagCreate",
    "BlogTagResponse",
    "PostTagsUpdate",
    "BlogImageCreate",
    "BlogImageResponse",
]
