"""Newsletter schemas."""

from studio_api.schemas.common import CamelModel, Email


class NewsletterSubscribe(CamelModel):
    """Newsletter subscription request."""

    email: Email
