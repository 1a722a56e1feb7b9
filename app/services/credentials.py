"""Credential store: resolves username/password pairs to users and manages roles."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from app.core.errors import UserNotFound
from app.core.roles import Role
from app.core.security import BCRYPT_ROUNDS, hash_password, verify_password
from app.models.base import is_storable_id
from app.models.user import User
from app.schemas.auth import UserItem

logger = logging.getLogger(__name__)

# Demo accounts seeded when SEED_DEMO_USERS is true: (username, password, role).
DEMO_USERS: tuple[tuple[str, str, Role], ...] = (
    ("admin", "password123", Role.ADMIN),
    ("user", "userpass", Role.USER),
)


class CredentialStore:
    """
    User lookups against the users table.

    Each call opens its own session from the pooled session factory, so one store
    instance is shared by all requests.
    """

    def __init__(self, session_factory: sessionmaker[Session], bcrypt_rounds: int = BCRYPT_ROUNDS) -> None:
        self._session_factory = session_factory
        self._bcrypt_rounds = bcrypt_rounds
        # Checked against when the username is unknown so both paths cost one bcrypt verify.
        self._dummy_hash = hash_password("timing-equalization-placeholder", rounds=bcrypt_rounds)

    def authenticate(self, username: str, password: str) -> UserItem | None:
        """Return the user if the password matches its stored hash, else None."""
        with self._session_factory() as db:
            user = db.scalars(select(User).where(User.username == username)).first()
            if user is None:
                verify_password(password, self._dummy_hash)
                return None
            if not verify_password(password, user.password_hash):
                return None
            return UserItem.model_validate(user)

    def get_by_id(self, user_id: int) -> UserItem | None:
        if not is_storable_id(user_id):
            return None
        with self._session_factory() as db:
            user = db.get(User, user_id)
            return UserItem.model_validate(user) if user is not None else None

    def list_users(self) -> list[UserItem]:
        with self._session_factory() as db:
            users = db.scalars(select(User).order_by(User.id)).all()
            return [UserItem.model_validate(u) for u in users]

    def count_users(self) -> int:
        with self._session_factory() as db:
            return db.scalar(select(func.count()).select_from(User)) or 0

    def create_user(self, username: str, password: str, role: Role = Role.USER) -> UserItem:
        """Create a user with a freshly hashed password. Raises ValueError if the username is taken."""
        with self._session_factory() as db:
            if db.scalars(select(User).where(User.username == username)).first() is not None:
                raise ValueError(f"User '{username}' already exists.")
            user = User(
                username=username,
                password_hash=hash_password(password, rounds=self._bcrypt_rounds),
                role=role.value,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info("Created user id=%s username=%s role=%s", user.id, user.username, user.role)
            return UserItem.model_validate(user)

    def set_role(self, user_id: int, role: Role) -> UserItem:
        """Change a user's role (admin-only route). Raises UserNotFound."""
        if not is_storable_id(user_id):
            raise UserNotFound(user_id)
        with self._session_factory() as db:
            user = db.get(User, user_id)
            if user is None:
                raise UserNotFound(user_id)
            previous = user.role
            user.role = role.value
            db.commit()
            db.refresh(user)
            logger.info("Changed role for user_id=%s: %s -> %s", user_id, previous, role.value)
            return UserItem.model_validate(user)

    def seed_demo_users(self) -> int:
        """Insert the demo accounts that do not exist yet; return how many were created."""
        created = 0
        for username, password, role in DEMO_USERS:
            with self._session_factory() as db:
                exists = db.scalars(select(User.id).where(User.username == username)).first()
            if exists is None:
                self.create_user(username, password, role)
                created += 1
        if created:
            logger.info("Seeded %s demo user(s)", created)
        return created
