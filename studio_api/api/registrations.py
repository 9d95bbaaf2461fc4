"""Registration-interest endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from studio_api.api.dependencies import api_rate_limit, get_optional_user_id
from studio_api.database import get_db
from studio_api.models.registration import Registration
from studio_api.schemas.registration import RegistrationCreate, RegistrationResponse

router = APIRouter(
    prefix="/api/registrations", tags=["registrations"], dependencies=[Depends(api_rate_limit)]
)


@router.post("", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
def create_registration(
    registration_data: RegistrationCreate,
    db: Annotated[Session, Depends(get_db)],
    user_id: Annotated[int | None, Depends(get_optional_user_id)],
):
    """Record interest from the public site."""
    registration = Registration(
        email=registration_data.email,
        interest=registration_data.interest,
        user_id=user_id,
    )
    db.add(registration)
    db.commit()
    db.refresh(registration)
    return registration
