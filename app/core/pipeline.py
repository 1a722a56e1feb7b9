"""
Request authentication/authorization pipeline.

A protected request runs through an explicit ordered tuple of stages. Each stage
is a plain function taking the request view and the identity produced so far and
returning either Continue(identity) or Reject(status, detail). The first Reject
short-circuits: later stages and the route handler never run.

FastAPI wiring is app.api.auth.require_role; nothing here depends on the framework.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from app.core import roles
from app.core.errors import AuthError
from app.core.roles import Role
from app.core.security import AuthenticatedIdentity, TokenService

logger = logging.getLogger(__name__)

UNAUTHORIZED = 401
FORBIDDEN = 403

_BEARER_HEADERS = {"WWW-Authenticate": "Bearer"}


@dataclass(frozen=True)
class RequestView:
    """What the stages may look at: the Authorization header and the route's requirement."""

    authorization: str | None
    required_role: Role | None = None


@dataclass(frozen=True)
class Continue:
    identity: AuthenticatedIdentity | None


@dataclass(frozen=True)
class Reject:
    status_code: int
    detail: str
    headers: Mapping[str, str] = field(default_factory=dict)


StageResult = Continue | Reject
Stage = Callable[[RequestView, AuthenticatedIdentity | None], StageResult]


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from 'Bearer <token>', or None if the header is absent or malformed."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        return None
    return token


def make_authenticate_stage(token_service: TokenService) -> Stage:
    """Stage 1: Unauthenticated -> Authenticated, or Rejected with 401."""

    def authenticate(
        request: RequestView, identity: AuthenticatedIdentity | None
    ) -> StageResult:
        token = extract_bearer_token(request.authorization)
        if token is None:
            logger.info("Rejected request: missing or malformed Authorization header")
            return Reject(UNAUTHORIZED, "Not authenticated", _BEARER_HEADERS)
        try:
            verified = token_service.verify(token)
        except AuthError as e:
            logger.info("Rejected request: reason=%s", e.reason)
            return Reject(UNAUTHORIZED, e.message, _BEARER_HEADERS)
        return Continue(verified)

    return authenticate


def authorize(request: RequestView, identity: AuthenticatedIdentity | None) -> StageResult:
    """Stage 2: role guard. Denial is 403, distinct from the 401 of stage 1."""
    if identity is None:
        return Reject(UNAUTHORIZED, "Not authenticated", _BEARER_HEADERS)
    if roles.check(identity.role, request.required_role) is roles.Decision.DENY:
        logger.info(
            "Forbidden: subject=%s role=%s required=%s",
            identity.subject,
            identity.role,
            request.required_role.value if request.required_role else "any",
        )
        return Reject(FORBIDDEN, "Insufficient role for this resource")
    return Continue(identity)


def build_stages(token_service: TokenService) -> tuple[Stage, ...]:
    return (make_authenticate_stage(token_service), authorize)


def run(stages: Sequence[Stage], request: RequestView) -> StageResult:
    """Run stages in order; stop at the first Reject."""
    identity: AuthenticatedIdentity | None = None
    for stage in stages:
        result = stage(request, identity)
        if isinstance(result, Reject):
            return result
        identity = result.identity
    return Continue(identity)
