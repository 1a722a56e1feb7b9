"""Request/response schemas for token and user endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.roles import Role


class LoginRequest(BaseModel):
    """Credentials for token issuance."""

    # No minimum password length here: a short wrong password is a 401, not a 400.
    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RefreshRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str = Field(..., alias="refreshToken", min_length=1, description="Refresh token")


class TokenResponse(BaseModel):
    """Signed bearer token returned after successful login or refresh."""

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(..., description="Signed access token")
    expires_in: int = Field(..., alias="expiresIn", description="Access token lifetime in seconds")
    token_type: str = Field(default="bearer", alias="tokenType", description="Token type")
    refresh_token: str = Field(..., alias="refreshToken", description="Refresh token")


class UserItem(BaseModel):
    """User entry (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserItem]


class RoleUpdateRequest(BaseModel):
    role: Role
