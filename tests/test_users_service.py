"""Unit tests for starterpack.services.users with mocked sessions."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError

from starterpack.core.errors import DuplicateEmailError, InvalidCredentialsError
from starterpack.core.security import hash_password, verify_password
from starterpack.models import User
from starterpack.schemas.auth import GoogleIdentity
from starterpack.services.users import (
    authenticate_user,
    create_user,
    get_or_create_google_user,
    normalize_email,
    user_claims,
)


def _session_returning(*users: User | None) -> MagicMock:
    """Session whose successive email lookups return the given users."""
    session = MagicMock()
    session.query.return_value.filter.return_value.first.side_effect = list(users)
    return session


def _user(**kwargs: object) -> User:
    defaults: dict[str, object] = {
        "id": "6a0f5c1e-0000-4000-8000-000000000001",
        "name": "Ada",
        "email": "ada@example.com",
        "password_hash": None,
        "role": "user",
        "google_id": None,
    }
    defaults.update(kwargs)
    return User(**defaults)


class TestNormalizeEmail(unittest.TestCase):
    def test_strips_and_lowercases(self) -> None:
        self.assertEqual(normalize_email("  Ada@Example.COM "), "ada@example.com")


class TestCreateUser(unittest.TestCase):
    def test_creates_with_uuid_and_hash(self) -> None:
        session = _session_returning(None)
        user = create_user(session, name="Ada", email="Ada@Example.com", password="p")

        session.add.assert_called_once_with(user)
        session.commit.assert_called_once()
        session.refresh.assert_called_once_with(user)
        self.assertEqual(len(user.id), 36)
        self.assertEqual(user.email, "ada@example.com")
        self.assertEqual(user.role, "user")
        self.assertIsNone(user.google_id)
        self.assertNotEqual(user.password_hash, "p")
        self.assertTrue(verify_password("p", user.password_hash))

    def test_each_user_gets_a_fresh_id(self) -> None:
        first = create_user(_session_returning(None), name="A", email="a@x.com", password="p")
        second = create_user(_session_returning(None), name="B", email="b@x.com", password="p")
        self.assertNotEqual(first.id, second.id)

    def test_duplicate_email_fast_path(self) -> None:
        session = _session_returning(_user())
        with self.assertRaises(DuplicateEmailError):
            create_user(session, name="Ada", email="ada@example.com", password="p")
        session.add.assert_not_called()
        session.commit.assert_not_called()

    def test_unique_constraint_violation_is_duplicate(self) -> None:
        session = _session_returning(None)
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))
        with self.assertRaises(DuplicateEmailError):
            create_user(session, name="Ada", email="ada@example.com", password="p")
        session.rollback.assert_called_once()


class TestAuthenticateUser(unittest.TestCase):
    def test_matching_password(self) -> None:
        stored = _user(password_hash=hash_password("right"))
        self.assertIs(authenticate_user(_session_returning(stored), "ada@example.com", "right"), stored)

    def test_wrong_password(self) -> None:
        stored = _user(password_hash=hash_password("right"))
        with self.assertRaises(InvalidCredentialsError) as wrong:
            authenticate_user(_session_returning(stored), "ada@example.com", "wrong")
        with self.assertRaises(InvalidCredentialsError) as unknown:
            authenticate_user(_session_returning(None), "nobody@example.com", "wrong")
        # Same message either way: no user enumeration.
        self.assertEqual(wrong.exception.message, unknown.exception.message)

    def test_google_only_account_cannot_password_login(self) -> None:
        stored = _user(password_hash=None, google_id="g-1")
        with self.assertRaises(InvalidCredentialsError):
            authenticate_user(_session_returning(stored), "ada@example.com", "anything")


class TestGetOrCreateGoogleUser(unittest.TestCase):
    def test_returns_existing_user_unchanged(self) -> None:
        existing = _user(password_hash="hash")
        session = _session_returning(existing)
        identity = GoogleIdentity(subject="g-1", email="ada@example.com", name="Ada L.")

        self.assertIs(get_or_create_google_user(session, identity), existing)
        self.assertIsNone(existing.google_id)
        session.add.assert_not_called()

    def test_creates_user_without_password(self) -> None:
        session = _session_returning(None, None)
        identity = GoogleIdentity(subject="g-1", email="grace@example.com", name="Grace")

        user = get_or_create_google_user(session, identity)

        self.assertEqual(user.google_id, "g-1")
        self.assertIsNone(user.password_hash)
        self.assertEqual(user.name, "Grace")
        self.assertEqual(len(user.id), 36)

    def test_name_falls_back_to_email_local_part(self) -> None:
        session = _session_returning(None, None)
        identity = GoogleIdentity(subject="g-2", email="grace@example.com")
        self.assertEqual(get_or_create_google_user(session, identity).name, "grace")

    def test_changed_email_creates_new_user(self) -> None:
        session = _session_returning(None, None)
        identity = GoogleIdentity(subject="g-1", email="new@example.com", name="Ada")

        user = get_or_create_google_user(session, identity)

        self.assertEqual(user.email, "new@example.com")
        self.assertEqual(user.google_id, "g-1")
        self.assertFalse(User.__table__.c.google_id.unique)
        session.commit.assert_called_once()

    def test_concurrent_first_login_returns_winner(self) -> None:
        winner = _user(email="grace@example.com", google_id="g-1")
        session = _session_returning(None, None, winner)
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))
        identity = GoogleIdentity(subject="g-1", email="grace@example.com", name="Grace")

        self.assertIs(get_or_create_google_user(session, identity), winner)


class TestUserClaims(unittest.TestCase):
    def test_claims_exclude_password(self) -> None:
        claims = user_claims(_user(password_hash="hash", role="admin"))
        self.assertEqual(
            claims,
            {
                "id": "6a0f5c1e-0000-4000-8000-000000000001",
                "name": "Ada",
                "email": "ada@example.com",
                "role": "admin",
            },
        )


if __name__ == "__main__":
    unittest.main()
