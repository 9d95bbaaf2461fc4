"""User model."""

from sqlalchemy import Column, Integer, String

from studio_api.database import Base
from studio_api.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Registered account. Email is unique and compared exactly as stored."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
