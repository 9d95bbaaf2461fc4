"""Newsletter endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from studio_api.api.dependencies import api_rate_limit, get_optional_user_id
from studio_api.database import get_db
from studio_api.errors import DuplicateResource
from studio_api.models.newsletter import NewsletterSubscription
from studio_api.schemas.auth import MessageResponse
from studio_api.schemas.newsletter import NewsletterSubscribe

ALREADY_SUBSCRIBED = "This email is already subscribed"

router = APIRouter(
    prefix="/api/newsletter", tags=["newsletter"], dependencies=[Depends(api_rate_limit)]
)


@router.post("/subscribe", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def subscribe(
    subscription_data: NewsletterSubscribe,
    db: Annotated[Session, Depends(get_db)],
    user_id: Annotated[int | None, Depends(get_optional_user_id)],
):
    """Subscribe an address to the newsletter."""
    existing = (
        db.query(NewsletterSubscription)
        .filter(NewsletterSubscription.email == subscription_data.email)
        .first()
    )
    if existing:
        raise DuplicateResource(ALREADY_SUBSCRIBED)

    db.add(NewsletterSubscription(email=subscription_data.email, user_id=user_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateResource(ALREADY_SUBSCRIBED) from None

    return MessageResponse(message="Successfully subscribed to newsletter")
