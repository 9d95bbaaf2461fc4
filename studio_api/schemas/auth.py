"""Authentication schemas."""

import re
from typing import Annotated

from pydantic import AfterValidator, Field
from pydantic_core import PydanticCustomError

from studio_api.schemas.common import CamelModel, CamelResponse, Email

PASSWORD_RULES = [
    (re.compile(r".{8,}", re.DOTALL), "Password must be at least 8 characters"),
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[^A-Za-z0-9]"), "Password must contain at least one special character"),
]


def check_password_policy(value: str) -> str:
    """Reject passwords failing any rule, reporting the first one broken."""
    for pattern, message in PASSWORD_RULES:
        if not pattern.search(value):
            raise PydanticCustomError("password_policy", message)
    return value


def check_name(value: str) -> str:
    value = value.strip()
    if len(value) < 2:
        raise PydanticCustomError("name", "Name must be at least 2 characters")
    return value


def check_login_password(value: str) -> str:
    if not value:
        raise PydanticCustomError("required", "Password is required")
    return value


class UserRegister(CamelModel):
    """User registration request."""

    email: Email
    password: Annotated[str, Field(max_length=128), AfterValidator(check_password_policy)]
    name: Annotated[str, Field(max_length=255), AfterValidator(check_name)]


class UserLogin(CamelModel):
    """User login request."""

    email: Email
    password: Annotated[str, Field(max_length=128), AfterValidator(check_login_password)]


class UserResponse(CamelResponse):
    """User information response. Never carries the password hash."""

    id: int
    email: str
    name: str


class AuthResponse(CamelModel):
    """Response body of register, login and me."""

    user: UserResponse


class MessageResponse(CamelModel):
    """Plain acknowledgement."""

    message: str
