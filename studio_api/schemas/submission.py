"""Game and asset submission schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import Field

from studio_api.schemas.common import (
    BigCount,
    CamelModel,
    CamelResponse,
    Count,
    Email,
    Url,
    required,
)


class GameSubmissionCreate(CamelModel):
    """Submit a game for a metrics review."""

    email: Email
    game_name: Annotated[str, Field(max_length=255), required("Game name")]
    game_link: Url
    daily_active_users: BigCount | None = None
    total_visits: BigCount | None = None
    revenue: BigCount | None = None


class GameSubmissionResponse(CamelResponse):
    """Stored game submission."""

    id: int
    email: str
    game_name: str
    game_link: str
    daily_active_users: int | None
    total_visits: int | None
    revenue: int | None
    user_id: int | None
    created_at: datetime


class GameSubmissionResult(CamelModel):
    """Acknowledgement plus the stored game submission."""

    message: str
    submission: GameSubmissionResponse


class AssetSubmissionCreate(CamelModel):
    """Submit assets for purchase consideration."""

    email: Email
    assets_count: Count | None = None
    asset_links: str | None = Field(None, max_length=10000)
    additional_notes: str | None = Field(None, max_length=10000)


class AssetSubmissionResponse(CamelResponse):
    """Stored asset submission."""

    id: int
    email: str
    assets_count: int | None
    asset_links: str | None
    additional_notes: str | None
    user_id: int | None
    created_at: datetime


class AssetSubmissionResult(CamelModel):
    """Acknowledgement plus the stored asset submission."""

    message: str
    submission: AssetSubmissionResponse
