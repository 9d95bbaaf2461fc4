"""FastAPI dependencies for sessions, authentication and rate limiting."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from studio_api.config import Settings
from studio_api.database import get_db
from studio_api.errors import Unauthenticated
from studio_api.models.user import User
from studio_api.services.auth import get_user
from studio_api.services.rate_limit import RateLimiter
from studio_api.services.sessions import SessionManager, SessionState


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_client_ip(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> str:
    """Client address, taking the first X-Forwarded-For hop when behind a trusted proxy."""
    if settings.trust_proxy_headers:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def api_rate_limit(
    client_ip: Annotated[str, Depends(get_client_ip)],
    limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
) -> None:
    """General budget applied to every API router."""
    limiter.check_api(client_ip)


def auth_rate_limit(
    client_ip: Annotated[str, Depends(get_client_ip)],
    limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
) -> None:
    """Stricter budget for register and login."""
    limiter.check_auth(client_ip)


def get_session_manager(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SessionManager:
    """Get session manager bound to the request's database session."""
    return SessionManager(db, settings)


def get_session_state(
    request: Request,
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
) -> SessionState:
    """Resolve the request's session cookie. Anonymous when absent or stale."""
    return sessions.load_request(request)


def get_optional_user_id(
    state: Annotated[SessionState, Depends(get_session_state)],
) -> int | None:
    """User id bound to the session, if any. Used by public forms to attribute ownership."""
    return state.user_id


def get_current_user(
    state: Annotated[SessionState, Depends(get_session_state)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the user bound to the session, or fail with 401."""
    if not state.is_authenticated:
        raise Unauthenticated()

    user = get_user(db, state.user_id)
    if user is None:
        raise Unauthenticated("User not found")

    return user


def require_session(
    state: Annotated[SessionState, Depends(get_session_state)],
) -> int:
    """Require an authenticated session and return its user id."""
    if not state.is_authenticated:
        raise Unauthenticated()
    return state.user_id
