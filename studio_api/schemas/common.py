"""Shared field types and base models for request/response schemas."""

import re
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_http_url = TypeAdapter(HttpUrl)

# Largest values the INTEGER and BIGINT columns hold
INT32_MAX = 2**31 - 1
INT64_MAX = 2**63 - 1


class CamelModel(BaseModel):
    """Base model speaking the front-end's camelCase JSON.

    Accepts both camelCase and snake_case keys on input, drops unknown keys,
    and serializes responses with camelCase keys.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("*")
    @classmethod
    def reject_null_characters(cls, value):
        # PostgreSQL text columns cannot store NUL
        if isinstance(value, str) and "\x00" in value:
            raise PydanticCustomError("null_character", "Null characters are not allowed")
        return value


class CamelResponse(CamelModel):
    """Response model read from ORM objects."""

    model_config = ConfigDict(from_attributes=True)


def check_email(value: str) -> str:
    """Check address grammar only; the stored value keeps the caller's casing."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("email", "Please enter a valid email address") from None
    return value


def check_url(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except PydanticValidationError:
        raise PydanticCustomError("url", "Please enter a valid URL") from None
    return value


def check_slug(value: str) -> str:
    if not SLUG_PATTERN.match(value):
        raise PydanticCustomError(
            "slug", "Slug may only contain lowercase letters, numbers and single hyphens"
        )
    return value


def required(label: str):
    """Validator rejecting blank strings with a '<label> is required' message."""

    def check(value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("required", f"{label} is required")
        return value

    return AfterValidator(check)


def reject_bool(value):
    """JSON true/false would otherwise be read as 1/0."""
    if isinstance(value, bool):
        raise PydanticCustomError("int_type", "Please enter a whole number")
    return value


def slugify(value: str) -> str:
    """Turn a display name into a URL slug."""
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


Email = Annotated[str, Field(max_length=255), AfterValidator(check_email)]
Url = Annotated[str, Field(max_length=2048), AfterValidator(check_url)]
Slug = Annotated[str, Field(max_length=255), required("Slug"), AfterValidator(check_slug)]
Count = Annotated[int, Field(ge=0, le=INT32_MAX), BeforeValidator(reject_bool)]
BigCount = Annotated[int, Field(ge=0, le=INT64_MAX), BeforeValidator(reject_bool)]
