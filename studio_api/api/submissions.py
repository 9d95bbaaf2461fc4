"""Game and asset submission endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from studio_api.api.dependencies import api_rate_limit, get_optional_user_id
from studio_api.database import get_db
from studio_api.models.submission import AssetSubmission, GameSubmission
from studio_api.schemas.submission import (
    AssetSubmissionCreate,
    AssetSubmissionResult,
    GameSubmissionCreate,
    GameSubmissionResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/submissions", tags=["submissions"], dependencies=[Depends(api_rate_limit)]
)


@router.post("/game", response_model=GameSubmissionResult, status_code=status.HTTP_201_CREATED)
def submit_game(
    submission_data: GameSubmissionCreate,
    db: Annotated[Session, Depends(get_db)],
    user_id: Annotated[int | None, Depends(get_optional_user_id)],
):
    """Submit a game for review. Signed-in users are recorded as the owner."""
    submission = GameSubmission(**submission_data.model_dump(), user_id=user_id)
    db.add(submission)
    db.commit()
    db.refresh(submission)

    logger.info(f"Game submission {submission.id} received")
    return {"message": "Game submission saved successfully", "submission": submission}


@router.post("/asset", response_model=AssetSubmissionResult, status_code=status.HTTP_201_CREATED)
def submit_assets(
    submission_data: AssetSubmissionCreate,
    db: Annotated[Session, Depends(get_db)],
    user_id: Annotated[int | None, Depends(get_optional_user_id)],
):
    """Offer assets to the studio. Signed-in users are recorded as the owner."""
    submission = AssetSubmission(**submission_data.model_dump(), user_id=user_id)
    db.add(submission)
    db.commit()
    db.refresh(submission)

    logger.info(f"Asset submission {submission.id} received")
    return {"message": "Asset submission saved successfully", "submission": submission}
