"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RoleUpdateRequest,
    TokenResponse,
    UserItem,
    UsersListResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.objects import (
    DeleteAck,
    ObjectCreate,
    ObjectPatch,
    ObjectProfile,
    ObjectRead,
    ObjectReplace,
    ObjectStats,
)

__all__ = [
    "DeleteAck",
    "HealthResponse",
    "LoginRequest",
    "ObjectCreate",
    "ObjectPatch",
    "ObjectProfile",
    "ObjectRead",
    "ObjectReplace",
    "ObjectStats",
    "RefreshRequest",
    "RoleUpdateRequest",
    "TokenResponse",
    "UserItem",
    "UsersListResponse",
]
