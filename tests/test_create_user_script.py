"""Tests for the create_user CLI (app.scripts.create_user)."""

import contextlib
import io
import tempfile
import unittest
from unittest.mock import patch

from app.core.database import build_engine, build_session_factory
from app.scripts import create_user
from app.services.credentials import CredentialStore
from tests.helpers import make_settings


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        tmp = self.enterContext(tempfile.TemporaryDirectory())
        self.settings = make_settings(tmp)
        self.enterContext(patch.object(create_user, "get_settings", return_value=self.settings))

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin(self) -> None:
        code, out, _ = self._run("root", "root-password", "admin")
        self.assertEqual(code, 0)
        self.assertIn("role 'admin'", out)

        engine = build_engine(self.settings)
        self.addCleanup(engine.dispose)
        store = CredentialStore(build_session_factory(engine), bcrypt_rounds=4)
        self.assertEqual(store.authenticate("root", "root-password").role, "admin")

    def test_duplicate_fails(self) -> None:
        self.assertEqual(self._run("root", "root-password")[0], 0)
        code, _, err = self._run("root", "root-password")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)

    def test_short_password_fails(self) -> None:
        code, _, err = self._run("root", "short")
        self.assertEqual(code, 1)
        self.assertIn("Password must be", err)


if __name__ == "__main__":
    unittest.main()
