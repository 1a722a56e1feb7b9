"""Unit tests for app.core.config.Settings validation (startup must fail on bad signing config)."""

import unittest

from pydantic import ValidationError

from app.core.config import DEFAULT_JWT_SECRET, Settings

STRONG_SECRET = "prod-signing-secret-0123456789abcdefgh"


def _settings(**values: object) -> Settings:
    return Settings(_env_file=None, **values)


class TestSigningSecret(unittest.TestCase):
    def test_empty_secret_is_fatal(self) -> None:
        for secret in ("", "   "):
            with self.subTest(secret=secret):
                with self.assertRaises(ValidationError):
                    _settings(JWT_SECRET=secret)

    def test_placeholder_secret_refused_in_prod(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod", JWT_SECRET=DEFAULT_JWT_SECRET)

    def test_placeholder_secret_allowed_in_dev(self) -> None:
        self.assertEqual(_settings(APP_ENV="dev").JWT_SECRET.get_secret_value(), DEFAULT_JWT_SECRET)

    def test_secret_is_not_leaked_in_repr(self) -> None:
        s = _settings(JWT_SECRET="super-secret-value-0123456789abcdef")
        self.assertNotIn("super-secret-value", repr(s))


class TestDemoSeeding(unittest.TestCase):
    def test_on_by_default_in_dev(self) -> None:
        self.assertTrue(_settings(APP_ENV="dev").SEED_DEMO_USERS)

    def test_off_by_default_in_prod(self) -> None:
        self.assertFalse(_settings(APP_ENV="prod", JWT_SECRET=STRONG_SECRET).SEED_DEMO_USERS)

    def test_explicit_seeding_refused_in_prod(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod", JWT_SECRET=STRONG_SECRET, SEED_DEMO_USERS=True)

    def test_can_be_disabled_in_dev(self) -> None:
        self.assertFalse(_settings(APP_ENV="dev", SEED_DEMO_USERS=False).SEED_DEMO_USERS)


class TestOtherFields(unittest.TestCase):
    def test_defaults(self) -> None:
        s = _settings()
        self.assertEqual(s.TOKEN_TTL_SECONDS, 3600)
        self.assertEqual(s.JWT_ALGORITHM, "HS256")
        self.assertEqual(s.API_PREFIX, "")
        self.assertTrue(s.is_sqlite)

    def test_algorithm_must_be_hmac(self) -> None:
        self.assertEqual(_settings(JWT_ALGORITHM="hs512").JWT_ALGORITHM, "HS512")
        with self.assertRaises(ValidationError):
            _settings(JWT_ALGORITHM="RS256")

    def test_ttl_bounds(self) -> None:
        for ttl in (0, -5, 10**9):
            with self.subTest(ttl=ttl):
                with self.assertRaises(ValidationError):
                    _settings(TOKEN_TTL_SECONDS=ttl)

    def test_database_url(self) -> None:
        self.assertEqual(
            _settings(DATABASE_URL="postgres://u:p@db/app").DATABASE_URL,
            "postgresql://u:p@db/app",
        )
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://u:p@db/app")

    def test_api_prefix(self) -> None:
        self.assertEqual(_settings(API_PREFIX="/api/").API_PREFIX, "/api")
        with self.assertRaises(ValidationError):
            _settings(API_PREFIX="api")


if __name__ == "__main__":
    unittest.main()
