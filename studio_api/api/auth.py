"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from studio_api.api.dependencies import (
    api_rate_limit,
    auth_rate_limit,
    get_current_user,
    get_session_manager,
    get_session_state,
)
from studio_api.database import get_db
from studio_api.errors import InvalidCredentials
from studio_api.models.user import User
from studio_api.schemas.auth import (
    AuthResponse,
    MessageResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from studio_api.services.auth import create_user, verify_credentials
from studio_api.services.sessions import SessionManager, SessionState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"], dependencies=[Depends(api_rate_limit)])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(auth_rate_limit)],
)
def register(
    user_data: UserRegister,
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
):
    """Register a new user and sign them in."""
    user = create_user(db, user_data.email, user_data.password, user_data.name)

    state = sessions.attach_user(sessions.load_request(request), user.id)
    sessions.write_cookie(response, state)

    logger.info(f"Registered user {user.id}")
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse, dependencies=[Depends(auth_rate_limit)])
def login(
    credentials: UserLogin,
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
):
    """Login with email and password."""
    try:
        user = verify_credentials(db, credentials.email, credentials.password)
    except InvalidCredentials:
        logger.warning("Failed login attempt")
        raise

    state = sessions.attach_user(sessions.load_request(request), user.id)
    sessions.write_cookie(response, state)

    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    state: Annotated[SessionState, Depends(get_session_state)],
):
    """Destroy the session. Succeeds for anonymous and stale sessions too."""
    sessions.destroy(state)
    sessions.clear_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=AuthResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return AuthResponse(user=UserResponse.model_validate(current_user))
