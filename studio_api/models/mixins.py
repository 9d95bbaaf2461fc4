"""Mixins for SQLAlchemy models."""

from sqlalchemy import Column, DateTime, func


class TimestampMixin:
    """Database-assigned ``created_at``/``updated_at`` columns.

    Both are set by the server clock so ordering by ``created_at`` is consistent
    across API workers. Defaults are fetched right after INSERT, so a committed
    row can be serialized without another round-trip.
    """

    __mapper_args__ = {"eager_defaults": True}

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
