"""Object repository: CRUD over the objects table."""

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.errors import ObjectNotFound, PayloadValidationError
from app.models.base import is_storable_id
from app.models.object import StoredObject
from app.schemas.objects import ObjectCreate, ObjectPatch, ObjectReplace

logger = logging.getLogger(__name__)

# Smallest step used to keep updated_at strictly increasing when the clock has not moved.
_TICK = timedelta(microseconds=1)

M = TypeVar("M", bound=BaseModel)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _coerce(schema: type[M], payload: M | Mapping[str, Any]) -> M:
    if isinstance(payload, schema):
        return payload
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise PayloadValidationError.from_pydantic(e.errors()) from e


class ObjectRepository:
    """
    Data access for objects, bound to one session drawn from the engine's pool.

    There is no in-process locking: concurrent writers to the same row are
    last-write-wins under the database's own isolation.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = _utcnow) -> None:
        self._db = db
        self._clock = clock

    def create(self, payload: ObjectCreate | Mapping[str, Any], owner_id: int) -> StoredObject:
        """Persist a new object owned by owner_id; created_at == updated_at == now."""
        data = _coerce(ObjectCreate, payload)
        now = self._clock()
        obj = StoredObject(
            name=data.name,
            description=data.description,
            email=data.email,
            age=data.age,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        self._db.add(obj)
        self._db.commit()
        self._db.refresh(obj)
        logger.info("Created object id=%s owner_id=%s", obj.id, owner_id)
        return obj

    def get(self, object_id: int) -> StoredObject:
        if not is_storable_id(object_id):
            raise ObjectNotFound(object_id)
        obj = self._db.get(StoredObject, object_id)
        if obj is None:
            raise ObjectNotFound(object_id)
        return obj

    def list(
        self,
        name: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[StoredObject]:
        """Objects in ascending id order, optionally filtered by a case-insensitive name substring."""
        stmt = select(StoredObject).order_by(StoredObject.id)
        if name:
            stmt = stmt.where(StoredObject.name.icontains(name, autoescape=True))
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self._db.scalars(stmt).all())

    def replace(self, object_id: int, payload: ObjectReplace | Mapping[str, Any]) -> StoredObject:
        """Full update: every mutable field is overwritten."""
        data = _coerce(ObjectReplace, payload)
        obj = self.get(object_id)
        obj.name = data.name
        obj.description = data.description
        obj.email = data.email
        obj.age = data.age
        return self._touch_and_commit(obj)

    def patch(self, object_id: int, payload: ObjectPatch | Mapping[str, Any]) -> StoredObject:
        """Partial update: only fields present in the payload change."""
        data = _coerce(ObjectPatch, payload)
        obj = self.get(object_id)
        for field_name in data.model_fields_set:
            setattr(obj, field_name, getattr(data, field_name))
        return self._touch_and_commit(obj)

    def delete(self, object_id: int) -> None:
        obj = self.get(object_id)
        self._db.delete(obj)
        self._db.commit()
        logger.info("Deleted object id=%s", object_id)

    def stats(self) -> tuple[int, int, float]:
        """Return (total objects, objects with an age, average age over those)."""
        total = self._db.scalar(select(func.count()).select_from(StoredObject)) or 0
        with_age, avg_age = self._db.execute(
            select(func.count(StoredObject.age), func.avg(StoredObject.age))
        ).one()
        return total, with_age or 0, float(avg_age) if avg_age is not None else 0.0

    def _touch_and_commit(self, obj: StoredObject) -> StoredObject:
        previous = _as_utc(obj.updated_at)
        obj.updated_at = max(self._clock(), previous + _TICK)
        self._db.commit()
        self._db.refresh(obj)
        logger.info("Updated object id=%s", obj.id)
        return obj
