"""SQLAlchemy ORM models."""

from starterpack.models.base import Base
from starterpack.models.user import ROLE_ADMIN, ROLE_USER, USER_ROLES, User

__all__ = ["Base", "User", "ROLE_ADMIN", "ROLE_USER", "USER_ROLES"]
