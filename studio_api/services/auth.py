"""Credential store: password hashing and user lookup."""

import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from studio_api.errors import DuplicateEmail, InvalidCredentials
from studio_api.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Verified against when the email is unknown so both failure paths cost one bcrypt check
_DUMMY_HASH = pwd_context.hash("not-a-real-password")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, email: str, password: str, name: str) -> User:
    """Create a new user.

    The existence check and the insert are separate statements; when a
    concurrent registration wins the race, the unique constraint rejects our
    insert and it is reported the same way as the pre-check.
    """
    if get_user_by_email(db, email):
        raise DuplicateEmail()

    user = User(email=email, password_hash=get_password_hash(password), name=name)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Concurrent registration for {email} lost the insert race")
        raise DuplicateEmail() from None
    db.refresh(user)
    return user


def verify_credentials(db: Session, email: str, password: str) -> User:
    """Return the user for a matching email/password pair.

    Raises InvalidCredentials for an unknown email and for a wrong password alike.
    """
    user = get_user_by_email(db, email)
    if user is None:
        verify_password(password, _DUMMY_HASH)
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    return user
