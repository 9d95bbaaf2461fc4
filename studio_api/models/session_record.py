"""Server-side session model."""

from sqlalchemy import JSON, Column, DateTime, Index, String

from studio_api.database import Base


class SessionRecord(Base):
    """One row per live session, keyed by the opaque id carried in the cookie."""

    __tablename__ = "session"

    sid = Column(String(255), primary_key=True)
    sess = Column(JSON, nullable=False)  # {"user_id": int}
    expire = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("ix_session_expire", "expire"),)
