"""Schema-based validation of inbound payloads.

Every request body passes through pydantic models from ``studio_api.schemas``.
Failures, whether raised here or by FastAPI's own body parsing, are reported
as a single ``ValidationError`` with the first violated field and the full
ordered list of violations.
"""

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from studio_api.errors import ValidationError
from studio_api.schemas import (
    AssetSubmissionCreate,
    BlogCommentCreate,
    BlogImageCreate,
    BlogPostCreate,
    BlogPostUpdate,
    BlogTagCreate,
    GameSubmissionCreate,
    NewsletterSubscribe,
    PostTagsUpdate,
    RegistrationCreate,
    UserLogin,
    UserRegister,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Location prefixes FastAPI adds in front of the field path
REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}

SCHEMAS: dict[str, type[BaseModel]] = {
    "register": UserRegister,
    "login": UserLogin,
    "registration": RegistrationCreate,
    "game_submission": GameSubmissionCreate,
    "asset_submission": AssetSubmissionCreate,
    "newsletter": NewsletterSubscribe,
    "blog_post": BlogPostCreate,
    "blog_post_update": BlogPostUpdate,
    "blog_comment": BlogCommentCreate,
    "blog_tag": BlogTagCreate,
    "blog_image": BlogImageCreate,
    "post_tags": PostTagsUpdate,
}


def describe_errors(raw_errors: Iterable[Mapping[str, Any]]) -> list[dict[str, str | None]]:
    """Flatten pydantic error dicts into ``{"field", "message"}`` pairs, in order."""
    violations: list[dict[str, str | None]] = []
    for error in raw_errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in REQUEST_PARTS:
            loc = loc[1:]
        field = ".".join(loc) or None

        error_type = error.get("type")
        if error_type == "json_invalid":
            violations.append({"field": None, "message": "Request body is not valid JSON"})
        elif error_type == "missing":
            violations.append({"field": field, "message": f"{field or 'Request body'} is required"})
        elif error_type in ("model_type", "model_attributes_type", "dict_type") and not field:
            violations.append({"field": None, "message": "Request body must be a JSON object"})
        else:
            violations.append({"field": field, "message": error.get("msg", "Invalid value")})
    return violations


def parse_payload(schema: type[ModelT], payload: Mapping[str, Any] | str | bytes) -> ModelT:
    """Validate a mapping or JSON document against a schema.

    Unknown keys are dropped. Raises ``ValidationError`` on any violation.
    """
    try:
        if isinstance(payload, str | bytes):
            return schema.model_validate_json(payload)
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(describe_errors(e.errors())) from None


def validate(schema_name: str, payload: Mapping[str, Any] | str | bytes) -> BaseModel:
    """Validate a payload against a schema registered under ``schema_name``."""
    try:
        schema = SCHEMAS[schema_name]
    except KeyError:
        raise LookupError(f"Unknown schema: {schema_name}") from None
    return parse_payload(schema, payload)
