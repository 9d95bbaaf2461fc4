"""Registration-interest schemas."""

from datetime import datetime

from pydantic import Field

from studio_api.schemas.common import CamelModel, CamelResponse, Email


class RegistrationCreate(CamelModel):
    """Register interest in the studio's services."""

    email: Email
    interest: str | None = Field(None, max_length=255)  # "Game Development", "Asset Purchase", ...


class RegistrationResponse(CamelResponse):
    """Stored registration row."""

    id: int
    email: str
    interest: str | None
    user_id: int | None
    created_at: datetime
