"""Tests for the health check and root routes."""

import unittest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.exc import OperationalError

from starterpack.core.config import Settings
from starterpack.core.database import check_db_connected
from starterpack.main import create_app


class TestCheckDbConnected(unittest.TestCase):
    def test_reachable(self) -> None:
        self.assertTrue(check_db_connected(MagicMock()))

    def test_unreachable(self) -> None:
        db = MagicMock()
        db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
        self.assertFalse(check_db_connected(db))


class TestHealthRoutes(unittest.TestCase):
    def setUp(self) -> None:
        settings = Settings(
            _env_file=None,
            DATABASE_URL="sqlite://",
            JWT_SECRET=SecretStr("health-secret"),
        )
        self.client = TestClient(create_app(settings))
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def test_health(self) -> None:
        resp = self.client.get("/api/v1/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {"status": "ok", "environment": "dev", "database": "connected"},
        )

    def test_root(self) -> None:
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("message", resp.json())


if __name__ == "__main__":
    unittest.main()
