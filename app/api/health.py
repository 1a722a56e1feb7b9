"""Health check endpoint with optional database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(request: Request, db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Public: used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=request.app.state.settings.APP_ENV,
        database=db_status,
    )
