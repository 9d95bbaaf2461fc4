"""Server-side sessions bound to a signed cookie.

The cookie carries only an opaque session id, signed with itsdangerous so a
tampered value is rejected before any database round-trip. The session row
holds the authentication state and its expiry; a session without a live row
is anonymous.

States:
    anonymous      no cookie, bad signature, or no live row
    authenticated  live row with a user id
    destroyed      row deleted on logout; the old cookie reads as anonymous
    expired        row past its expiry; reads as anonymous until pruned
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from fastapi import Request, Response
from itsdangerous import BadSignature, URLSafeTimedSerializer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from studio_api.config import Settings
from studio_api.errors import SessionStoreUnavailable
from studio_api.models.session_record import SessionRecord

logger = logging.getLogger(__name__)

COOKIE_SALT = "session-cookie"


def utcnow() -> datetime:
    return datetime.now(UTC)


def new_session_id() -> str:
    """Generate an unguessable session id."""
    return secrets.token_urlsafe(32)


@dataclass
class SessionState:
    """Session as seen by one request."""

    sid: str | None = None
    user_id: int | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


class SessionManager:
    """Reads, binds and destroys sessions for one request's database session."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.serializer = URLSafeTimedSerializer(settings.session_secret, salt=COOKIE_SALT)

    def sign(self, sid: str) -> str:
        return self.serializer.dumps(sid)

    def unsign(self, cookie_value: str) -> str | None:
        """Recover the session id from a cookie, or None when tampered or too old."""
        try:
            max_age = self.settings.session_max_age_seconds
            return self.serializer.loads(cookie_value, max_age=max_age)
        except BadSignature:
            return None

    def load(self, cookie_value: str | None) -> SessionState:
        """Resolve a cookie to a session state. Pure read."""
        if not cookie_value:
            return SessionState()

        sid = self.unsign(cookie_value)
        if sid is None:
            logger.debug("Ignoring session cookie with invalid signature")
            return SessionState()

        try:
            record = (
                self.db.query(SessionRecord)
                .filter(SessionRecord.sid == sid, SessionRecord.expire > utcnow())
                .first()
            )
        except SQLAlchemyError as e:
            logger.exception("Session lookup failed")
            raise SessionStoreUnavailable() from e

        if record is None:
            return SessionState()

        user_id = (record.sess or {}).get("user_id")
        return SessionState(sid=sid, user_id=int(user_id) if user_id is not None else None)

    def load_request(self, request: Request) -> SessionState:
        return self.load(request.cookies.get(self.settings.session_cookie_name))

    def current_user_id(self, state: SessionState) -> int | None:
        return state.user_id

    def attach_user(self, state: SessionState, user_id: int) -> SessionState:
        """Bind a user to a fresh session id and commit it before returning.

        The previous id, if any, is retired so a pre-login id never becomes
        authenticated. Expired rows from any user are swept in the same commit.
        """
        sid = new_session_id()
        now = utcnow()
        expire = now + timedelta(seconds=self.settings.session_max_age_seconds)
        try:
            self.db.query(SessionRecord).filter(SessionRecord.expire <= now).delete(
                synchronize_session=False
            )
            if state.sid:
                self.db.query(SessionRecord).filter(SessionRecord.sid == state.sid).delete()
            self.db.add(SessionRecord(sid=sid, sess={"user_id": user_id}, expire=expire))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to save session")
            raise SessionStoreUnavailable() from e

        return SessionState(sid=sid, user_id=user_id)

    def destroy(self, state: SessionState) -> SessionState:
        """Delete the session row. Safe to call on anonymous or already destroyed sessions."""
        if state.sid:
            try:
                self.db.query(SessionRecord).filter(SessionRecord.sid == state.sid).delete()
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.exception("Failed to destroy session")
                raise SessionStoreUnavailable() from e
        return SessionState()

    def write_cookie(self, response: Response, state: SessionState) -> None:
        """Send the signed session id to the client."""
        response.set_cookie(
            key=self.settings.session_cookie_name,
            value=self.sign(state.sid),
            max_age=self.settings.session_max_age_seconds,
            path="/",
            httponly=True,
            secure=self.settings.cookie_secure,
            samesite=self.settings.cookie_samesite,
        )

    def clear_cookie(self, response: Response) -> None:
        response.delete_cookie(
            key=self.settings.session_cookie_name,
            path="/",
            httponly=True,
            secure=self.settings.cookie_secure,
            samesite=self.settings.cookie_samesite,
        )
