"""Unit tests for starterpack.core.config: defaults and validators."""

import unittest

from pydantic import SecretStr, ValidationError

from starterpack.core.config import DEFAULT_JWT_SECRET, Settings


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {"DATABASE_URL": "sqlite://"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestDefaults(unittest.TestCase):
    def test_token_lifetime_is_24_hours(self) -> None:
        self.assertEqual(_settings().JWT_EXPIRE_MINUTES, 1440)

    def test_pagination_defaults(self) -> None:
        settings = _settings()
        self.assertEqual(settings.USERS_PAGE_DEFAULT_LIMIT, 10)
        self.assertEqual(settings.USERS_PAGE_MAX_LIMIT, 100)

    def test_blank_google_client_id_is_none(self) -> None:
        self.assertIsNone(_settings(GOOGLE_CLIENT_ID="   ").GOOGLE_CLIENT_ID)


class TestValidators(unittest.TestCase):
    def test_rejects_unsupported_database_url(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            _settings(DATABASE_URL="mysql://root@localhost/app")
        message = str(ctx.exception)
        self.assertIn("postgresql://", message)
        self.assertIn("sqlite://", message)

    def test_accepts_sqlite_database_url(self) -> None:
        self.assertEqual(_settings(DATABASE_URL="\tsqlite://\n").DATABASE_URL, "sqlite://")

    def test_accepts_postgres_database_url(self) -> None:
        settings = _settings(DATABASE_URL=" postgresql://u:p@db:5432/app ")
        self.assertEqual(settings.DATABASE_URL, "postgresql://u:p@db:5432/app")

    def test_rejects_empty_jwt_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET=SecretStr("  "))

    def test_rejects_out_of_range_expiry(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=10081)

    def test_rejects_non_http_redirect_uri(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(GOOGLE_REDIRECT_URI="ftp://example.com/callback")

    def test_prod_requires_real_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(
                APP_ENV="prod",
                JWT_SECRET=SecretStr(DEFAULT_JWT_SECRET),
                COOKIE_SECURE=True,
            )

    def test_prod_requires_secure_cookie(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod", JWT_SECRET=SecretStr("a-real-secret"))

    def test_prod_with_secret_and_secure_cookie(self) -> None:
        settings = _settings(
            APP_ENV="prod",
            JWT_SECRET=SecretStr("a-real-secret"),
            COOKIE_SECURE=True,
        )
        self.assertTrue(settings.COOKIE_SECURE)


if __name__ == "__main__":
    unittest.main()
