"""Unit tests for the role guard in app.core.roles."""

import unittest

from app.core.roles import Decision, Role, check, parse_role


class TestRoleGuard(unittest.TestCase):
    """admin satisfies any requirement; user only user-level; unknown roles never pass."""

    def test_matrix(self) -> None:
        cases = [
            ("admin", Role.ADMIN, Decision.ALLOW),
            ("admin", Role.USER, Decision.ALLOW),
            ("admin", None, Decision.ALLOW),
            ("user", Role.USER, Decision.ALLOW),
            ("user", None, Decision.ALLOW),
            ("user", Role.ADMIN, Decision.DENY),
        ]
        for role, required, expected in cases:
            with self.subTest(role=role, required=required):
                self.assertIs(check(role, required), expected)

    def test_unknown_roles_are_denied_everywhere(self) -> None:
        for role in ("", "superuser", "ADMIN", "guest"):
            for required in (None, Role.USER, Role.ADMIN):
                with self.subTest(role=role, required=required):
                    self.assertIs(check(role, required), Decision.DENY)

    def test_every_role_is_parseable(self) -> None:
        for role in Role:
            self.assertIs(parse_role(role.value), role)
        self.assertIsNone(parse_role("root"))


if __name__ == "__main__":
    unittest.main()
