"""Game and asset submission models."""

from sqlalchemy import BigInteger, Column, ForeignKey, Integer, String, Text

from studio_api.database import Base
from studio_api.models.mixins import TimestampMixin


class GameSubmission(Base, TimestampMixin):
    """A game sent in for review, with optional self-reported metrics."""

    __tablename__ = "game_submissions"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    game_name = Column(String(255), nullable=False)
    game_link = Column(String(2048), nullable=False)
    daily_active_users = Column(BigInteger, nullable=True)
    total_visits = Column(BigInteger, nullable=True)
    revenue = Column(BigInteger, nullable=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )


class AssetSubmission(Base, TimestampMixin):
    """Assets offered to the studio."""

    __tablename__ = "asset_submissions"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    assets_count = Column(Integer, nullable=True)
    asset_links = Column(Text, nullable=True)
    additional_notes = Column(Text, nullable=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
