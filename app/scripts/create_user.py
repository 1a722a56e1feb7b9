"""
Create a user (e.g. first admin). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin your-secure-password admin
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.database import build_engine, build_session_factory
from app.core.roles import Role
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, USERNAME_MAX_LEN
from app.models import Base
from app.services.credentials import CredentialStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user (no registration UI).")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role])
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    settings = get_settings()
    engine = build_engine(settings)
    try:
        if settings.DB_AUTO_CREATE:
            Base.metadata.create_all(engine)
        store = CredentialStore(build_session_factory(engine), bcrypt_rounds=settings.BCRYPT_ROUNDS)
        try:
            user = store.create_user(username, args.password, Role(args.role))
        except ValueError as e:
            print(str(e), file=sys.stderr)
            return 1
        print(f"Created user '{user.username}' with role '{user.role}'.")
        return 0
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
