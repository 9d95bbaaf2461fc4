"""Newsletter subscription model."""

from sqlalchemy import Column, ForeignKey, Integer, String

from studio_api.database import Base
from studio_api.models.mixins import TimestampMixin


class NewsletterSubscription(Base, TimestampMixin):
    """A subscribed address. Each address appears once."""

    __tablename__ = "newsletter_subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
