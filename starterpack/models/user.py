"""ORM model for application users (password and Google sign-in)."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, String, func

from starterpack.models.base import Base

ROLE_USER = "user"
ROLE_ADMIN = "admin"
USER_ROLES = (ROLE_USER, ROLE_ADMIN)


def new_user_id() -> str:
    """Generate the identifier used for every new user, whatever the sign-up path."""
    return str(uuid.uuid4())


class User(Base):
    """
    User account for JWT authentication.

    password_hash is NULL for Google-only accounts; google_id is NULL for
    password-only accounts. role: 'admin' or 'user'
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )

    id = Column(String(36), primary_key=True, default=new_user_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=True)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    google_id = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
