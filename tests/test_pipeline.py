"""Unit tests for the request pipeline stages in app.core.pipeline."""

import unittest
from unittest.mock import MagicMock

from app.core import pipeline
from app.core.errors import InvalidSignature, MalformedToken, TokenExpired
from app.core.pipeline import Continue, Reject, RequestView, extract_bearer_token
from app.core.roles import Role
from app.core.security import AuthenticatedIdentity


class TestExtractBearerToken(unittest.TestCase):
    def test_valid_forms(self) -> None:
        self.assertEqual(extract_bearer_token("Bearer abc.def.ghi"), "abc.def.ghi")
        self.assertEqual(extract_bearer_token("bearer abc"), "abc")
        self.assertEqual(extract_bearer_token("  Bearer   abc  "), "abc")

    def test_invalid_forms(self) -> None:
        for header in (None, "", "Bearer", "Bearer ", "Basic dXNlcjpwYXNz", "Token abc", "Bearer a b"):
            with self.subTest(header=header):
                self.assertIsNone(extract_bearer_token(header))


class TestPipeline(unittest.TestCase):
    def setUp(self) -> None:
        self.token_service = MagicMock()
        self.stages = pipeline.build_stages(self.token_service)

    def test_missing_header_short_circuits_with_401(self) -> None:
        result = pipeline.run(self.stages, RequestView(authorization=None))
        self.assertIsInstance(result, Reject)
        self.assertEqual(result.status_code, 401)
        self.assertEqual(result.headers["WWW-Authenticate"], "Bearer")
        self.token_service.verify.assert_not_called()

    def test_token_errors_become_401(self) -> None:
        for error in (MalformedToken(), InvalidSignature(), TokenExpired()):
            self.token_service.verify.side_effect = error
            with self.subTest(error=type(error).__name__):
                result = pipeline.run(self.stages, RequestView(authorization="Bearer t"))
                self.assertIsInstance(result, Reject)
                self.assertEqual(result.status_code, 401)
                self.assertEqual(result.detail, error.message)

    def test_valid_token_continues_with_identity(self) -> None:
        identity = AuthenticatedIdentity(subject="1", role="user")
        self.token_service.verify.return_value = identity
        result = pipeline.run(self.stages, RequestView(authorization="Bearer t"))
        self.assertEqual(result, Continue(identity))
        self.token_service.verify.assert_called_once_with("t")

    def test_insufficient_role_is_403_not_401(self) -> None:
        self.token_service.verify.return_value = AuthenticatedIdentity(subject="1", role="user")
        result = pipeline.run(
            self.stages, RequestView(authorization="Bearer t", required_role=Role.ADMIN)
        )
        self.assertIsInstance(result, Reject)
        self.assertEqual(result.status_code, 403)

    def test_later_stages_do_not_run_after_reject(self) -> None:
        never = MagicMock()
        stages = (*self.stages, never)
        pipeline.run(stages, RequestView(authorization=None))
        never.assert_not_called()

    def test_authorize_without_identity_is_401(self) -> None:
        result = pipeline.authorize(RequestView(authorization=None), None)
        self.assertIsInstance(result, Reject)
        self.assertEqual(result.status_code, 401)


if __name__ == "__main__":
    unittest.main()
