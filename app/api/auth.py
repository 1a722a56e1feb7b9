"""Token issuance, auth dependencies (get_current_identity, require_admin) and user admin routes."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core import pipeline
from app.core.pipeline import Reject, RequestView
from app.core.roles import Role
from app.core.security import AuthenticatedIdentity, IssuedToken, TokenService
from app.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RoleUpdateRequest,
    TokenResponse,
    UserItem,
    UsersListResponse,
)
from app.services.credentials import CredentialStore

logger = logging.getLogger(__name__)
router = APIRouter()

# auto_error=False: a missing or non-bearer header is rejected by the pipeline, not here.
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credentials


def require_role(required: Role | None = None) -> Callable[..., AuthenticatedIdentity]:
    """
    Build a dependency that runs the auth pipeline for a route.

    required=None accepts any authenticated identity with a known role. A
    rejection is raised before any other route logic runs.
    """

    def dependency(
        request: Request,
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    ) -> AuthenticatedIdentity:
        view = RequestView(
            authorization=f"{credentials.scheme} {credentials.credentials}" if credentials else None,
            required_role=required,
        )
        result = pipeline.run(request.app.state.auth_stages, view)
        if isinstance(result, Reject):
            raise HTTPException(
                status_code=result.status_code,
                detail=result.detail,
                headers=dict(result.headers) or None,
            )
        return result.identity

    return dependency


get_current_identity = require_role()
require_admin = require_role(Role.ADMIN)


def _token_response(issued: IssuedToken) -> TokenResponse:
    return TokenResponse(
        token=issued.token,
        expires_in=issued.expires_in,
        refresh_token=issued.refresh_token,
    )


@router.post("/token", response_model=TokenResponse)
def issue_token(
    body: LoginRequest,
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a signed access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    return _token_response(tokens.issue(body.username, body.password))


@router.post("/token/refresh", response_model=TokenResponse)
def refresh_token(
    body: RefreshRequest,
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse:
    """Exchange a refresh token for a new access/refresh pair."""
    return _token_response(tokens.refresh(body.refresh_token))


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[AuthenticatedIdentity, Depends(require_admin)],
    credentials: Annotated[CredentialStore, Depends(get_credential_store)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(users=credentials.list_users())


@router.patch("/users/{user_id}/role", response_model=UserItem)
def change_user_role(
    user_id: int,
    body: RoleUpdateRequest,
    admin: Annotated[AuthenticatedIdentity, Depends(require_admin)],
    credentials: Annotated[CredentialStore, Depends(get_credential_store)],
) -> UserItem:
    """
    Change a user's role (admin only).

    Tokens already issued keep their embedded role until they expire; the new
    role applies from the next issuance or refresh.
    """
    logger.info("Role change requested by subject=%s for user_id=%s", admin.subject, user_id)
    return credentials.set_role(user_id, body.role)
