"""Shared builders for tests: isolated settings, apps and clients on a temp sqlite file."""

import tempfile
import unittest
from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app

TEST_SECRET = "test-signing-secret-0123456789abcdef"


def make_settings(db_dir: str, **overrides: Any) -> Settings:
    """Settings that ignore .env and point at a fresh sqlite file under db_dir."""
    values: dict[str, Any] = {
        "DATABASE_URL": f"sqlite:///{Path(db_dir) / 'test.db'}",
        "JWT_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
        "SEED_DEMO_USERS": True,
        "DB_AUTO_CREATE": True,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class ApiTestCase(unittest.TestCase):
    """Base case: a running app (lifespan entered) with demo users seeded."""

    settings_overrides: dict[str, Any] = {}

    def setUp(self) -> None:
        tmp = self.enterContext(tempfile.TemporaryDirectory())
        self.settings = make_settings(tmp, **self.settings_overrides)
        self.app = create_app(self.settings)
        self.client = self.enterContext(TestClient(self.app))

    def login(self, username: str, password: str) -> str:
        resp = self.client.post("/token", json={"username": username, "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["token"]

    def auth(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def admin_headers(self) -> dict[str, str]:
        return self.auth(self.login("admin", "password123"))

    def user_headers(self) -> dict[str, str]:
        return self.auth(self.login("user", "userpass"))
