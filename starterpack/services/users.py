"""User store operations: registration, credential checks, Google accounts, paging."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from starterpack.core.errors import DuplicateEmailError, InvalidCredentialsError
from starterpack.core.security import hash_password, verify_password
from starterpack.models import ROLE_USER, User
from starterpack.models.user import new_user_id
from starterpack.schemas.auth import GoogleIdentity

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.query(User).filter(User.email == normalize_email(email)).first()


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str | None = None,
    role: str = ROLE_USER,
    google_id: str | None = None,
) -> User:
    """
    Insert a new user with a generated id.

    The email lookup is only a fast path for a friendly error; the unique index
    on users.email decides concurrent registrations, and its IntegrityError is
    reported as DuplicateEmailError too.
    """
    email = normalize_email(email)
    if get_user_by_email(session, email) is not None:
        raise DuplicateEmailError()

    user = User(
        id=new_user_id(),
        name=name.strip(),
        email=email,
        password_hash=hash_password(password) if password is not None else None,
        role=role,
        google_id=google_id,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise DuplicateEmailError() from e
    session.refresh(user)

    logger.info(
        "User created",
        extra={
            "user_id": user.id,
            "role": user.role,
            "signup_method": "google" if google_id else "password",
        },
    )
    return user


def authenticate_user(session: Session, email: str, password: str) -> User:
    """Return the user for a matching email/password pair. Raises InvalidCredentialsError."""
    user = get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed", extra={"login_method": "password"})
        raise InvalidCredentialsError()
    return user


def get_or_create_google_user(session: Session, identity: GoogleIdentity) -> User:
    """
    Find the user for a verified Google identity by email, creating it on first login.

    Existing accounts are returned unchanged (no linking of google_id).
    google_id is not unique: a Google account whose email changed gets a new
    user for the new address, so the only insert conflict left is on email.
    """
    user = get_user_by_email(session, identity.email)
    if user is not None:
        return user

    name = (identity.name or "").strip() or identity.email.split("@", 1)[0]
    try:
        return create_user(
            session,
            name=name,
            email=identity.email,
            google_id=identity.subject,
        )
    except DuplicateEmailError:
        # Lost a race against a concurrent first login for the same email.
        user = get_user_by_email(session, identity.email)
        if user is None:
            raise
        return user


def list_users_page(session: Session, limit: int, offset: int) -> tuple[list[User], int]:
    """
    Return (users, total). Users are ordered by (created_at, id) so pages are stable.

    The page and the count are two separate reads.
    """
    users = (
        session.query(User)
        .order_by(User.created_at, User.id)
        .limit(limit)
        .offset(offset)
        .all()
    )
    total = session.query(func.count(User.id)).scalar() or 0
    return users, total


def user_claims(user: User) -> dict[str, str]:
    """Identity claims embedded in access tokens."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
    }
