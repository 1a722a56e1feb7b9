"""Object CRUD endpoints. Every route requires a bearer token."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.auth import get_current_identity
from app.core.database import get_db
from app.core.security import AuthenticatedIdentity
from app.schemas.objects import (
    DeleteAck,
    ObjectCreate,
    ObjectPatch,
    ObjectProfile,
    ObjectRead,
    ObjectReplace,
)
from app.services.objects import ObjectRepository

router = APIRouter()

Identity = Annotated[AuthenticatedIdentity, Depends(get_current_identity)]


def get_repository(db: Annotated[Session, Depends(get_db)]) -> ObjectRepository:
    return ObjectRepository(db)


Repository = Annotated[ObjectRepository, Depends(get_repository)]


@router.get("", response_model=list[ObjectRead])
def list_objects(
    _identity: Identity,
    repo: Repository,
    name: Annotated[str | None, Query(max_length=255)] = None,
    limit: Annotated[int | None, Query(ge=1, le=1000)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[ObjectRead]:
    """List objects in ascending id order, optionally filtered by name substring."""
    return [ObjectRead.model_validate(o) for o in repo.list(name=name, limit=limit, offset=offset)]


@router.post("", response_model=ObjectRead, status_code=status.HTTP_201_CREATED)
def create_object(identity: Identity, body: ObjectCreate, repo: Repository) -> ObjectRead:
    """Create an object owned by the calling user."""
    return ObjectRead.model_validate(repo.create(body, owner_id=int(identity.subject)))


@router.get("/{object_id}", response_model=ObjectRead)
def get_object(_identity: Identity, object_id: int, repo: Repository) -> ObjectRead:
    return ObjectRead.model_validate(repo.get(object_id))


@router.get("/{object_id}/profile", response_model=ObjectProfile)
def get_object_profile(_identity: Identity, object_id: int, repo: Repository) -> ObjectProfile:
    """Profile view: contact sub-fields plus a link back to this resource."""
    obj = repo.get(object_id)
    return ObjectProfile(
        id=obj.id,
        name=obj.name,
        email=obj.email,
        age=obj.age,
        profile_url=f"/objects/{obj.id}/profile",
        created_at=obj.created_at,
    )


@router.put("/{object_id}", response_model=ObjectRead)
def replace_object(
    _identity: Identity, object_id: int, body: ObjectReplace, repo: Repository
) -> ObjectRead:
    """Full update; all fields are required."""
    return ObjectRead.model_validate(repo.replace(object_id, body))


@router.patch("/{object_id}", response_model=ObjectRead)
def patch_object(
    _identity: Identity, object_id: int, body: ObjectPatch, repo: Repository
) -> ObjectRead:
    """Partial update; omitted fields keep their values."""
    return ObjectRead.model_validate(repo.patch(object_id, body))


@router.delete("/{object_id}", response_model=DeleteAck)
def delete_object(_identity: Identity, object_id: int, repo: Repository) -> DeleteAck:
    repo.delete(object_id)
    return DeleteAck(id=object_id)
