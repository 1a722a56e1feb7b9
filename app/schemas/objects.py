"""Pydantic schemas for object payloads and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 10_000
EMAIL_MAX_LENGTH = 255
AGE_MAX = 150


def _check_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Name cannot be empty")
    return v


def _check_email(v: str) -> str:
    v = v.strip()
    if "@" not in v:
        raise ValueError("Invalid email format")
    return v


class ObjectCreate(BaseModel):
    """Fields accepted by POST /objects."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., max_length=NAME_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    email: str = Field(..., max_length=EMAIL_MAX_LENGTH)
    age: int | None = Field(default=None, ge=0, le=AGE_MAX)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)


class ObjectReplace(BaseModel):
    """Full update for PUT /objects/{id}: every field must be present (age may be null)."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., max_length=NAME_MAX_LENGTH)
    description: str = Field(..., max_length=DESCRIPTION_MAX_LENGTH)
    email: str = Field(..., max_length=EMAIL_MAX_LENGTH)
    age: int | None = Field(..., ge=0, le=AGE_MAX)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)


class ObjectPatch(BaseModel):
    """
    Partial update for PATCH /objects/{id}.

    Only fields present in the request body are applied (model_fields_set).
    name, description and email cannot be set to null; age can (clears it).
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    email: str | None = Field(default=None, max_length=EMAIL_MAX_LENGTH)
    age: int | None = Field(default=None, ge=0, le=AGE_MAX)

    @field_validator("name", "description", "email", mode="before")
    @classmethod
    def reject_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return None if v is None else _check_name(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return None if v is None else _check_email(v)


class ObjectRead(BaseModel):
    """Object as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    owner_id: int
    email: str
    age: int | None
    created_at: datetime
    updated_at: datetime


class ObjectProfile(BaseModel):
    """Profile view of one object (GET /objects/{id}/profile)."""

    id: int
    name: str
    email: str
    age: int | None
    profile_url: str
    created_at: datetime


class DeleteAck(BaseModel):
    deleted: bool = True
    id: int


class ObjectStats(BaseModel):
    """Aggregate counts over the object collection."""

    total_objects: int
    objects_with_age: int
    average_age: float
    total_users: int = 0
    server_uptime_seconds: float = 0.0
