"""Typed failures raised by the token service, credential store and repository.

Route code never builds error bodies for these by hand: the handlers registered
by ``register_exception_handlers`` translate them at the HTTP boundary.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Base class for token and credential failures."""

    reason = "unauthorized"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCredentials(AuthError):
    """Unknown username or password hash mismatch."""

    reason = "invalid_credentials"

    def __init__(self, message: str = "Invalid username or password.") -> None:
        super().__init__(message)


class MalformedToken(AuthError):
    """Token is not a structurally valid token for this service."""

    reason = "malformed_token"

    def __init__(self, message: str = "Malformed token") -> None:
        super().__init__(message)


class InvalidSignature(AuthError):
    """Token signature does not match header and payload."""

    reason = "invalid_signature"

    def __init__(self, message: str = "Invalid token signature") -> None:
        super().__init__(message)


class TokenExpired(AuthError):
    reason = "token_expired"

    def __init__(self, message: str = "Token expired") -> None:
        super().__init__(message)


class ObjectNotFound(Exception):
    def __init__(self, object_id: int) -> None:
        self.object_id = object_id
        self.message = f"Object {object_id} not found"
        super().__init__(self.message)


class UserNotFound(Exception):
    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        self.message = f"User {user_id} not found"
        super().__init__(self.message)


class PayloadValidationError(Exception):
    """Payload shape or constraint violation, with one entry per offending field."""

    def __init__(self, errors: list[dict[str, str]]) -> None:
        self.errors = errors
        self.message = "Validation failed"
        super().__init__(f"{self.message}: {errors}")

    @classmethod
    def from_pydantic(cls, raw_errors: list[dict[str, Any]]) -> "PayloadValidationError":
        return cls(_field_errors(raw_errors))


def _field_errors(raw_errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into [{field, message}]."""
    out: list[dict[str, str]] = []
    for err in raw_errors:
        # Drop the "body"/"query"/"path" location prefix FastAPI adds.
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        out.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    return out


def _validation_response(errors: list[dict[str, str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map data-layer and validation failures to HTTP responses."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _validation_response(_field_errors(list(exc.errors())))

    @app.exception_handler(PayloadValidationError)
    async def payload_validation_handler(
        request: Request, exc: PayloadValidationError
    ) -> JSONResponse:
        return _validation_response(exc.errors)

    @app.exception_handler(ObjectNotFound)
    async def object_not_found_handler(request: Request, exc: ObjectNotFound) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(UserNotFound)
    async def user_not_found_handler(request: Request, exc: UserNotFound) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        logger.info("Authentication failed: reason=%s path=%s", exc.reason, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": exc.message},
            headers={"WWW-Authenticate": "Bearer"},
        )
