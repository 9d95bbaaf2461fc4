"""Registration-interest model."""

from sqlalchemy import Column, ForeignKey, Integer, String

from studio_api.database import Base
from studio_api.models.mixins import TimestampMixin


class Registration(Base, TimestampMixin):
    """Interest registered through the public site."""

    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    interest = Column(String(255), nullable=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
