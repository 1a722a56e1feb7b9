"""Aggregate statistics (admin only)."""

import time
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.auth import get_credential_store, require_admin
from app.api.objects import Repository
from app.core.security import AuthenticatedIdentity
from app.schemas.objects import ObjectStats
from app.services.credentials import CredentialStore

router = APIRouter()


@router.get("", response_model=ObjectStats)
def get_stats(
    _admin: Annotated[AuthenticatedIdentity, Depends(require_admin)],
    request: Request,
    repo: Repository,
    credentials: Annotated[CredentialStore, Depends(get_credential_store)],
) -> ObjectStats:
    """Object counts, average age, user count and process uptime."""
    total, with_age, average_age = repo.stats()
    return ObjectStats(
        total_objects=total,
        objects_with_age=with_age,
        average_age=average_age,
        total_users=credentials.count_users(),
        server_uptime_seconds=round(time.monotonic() - request.app.state.started_at, 3),
    )
