"""Translate domain exceptions into HTTP responses.

Protean's FastAPI integration supplies the baseline mapping. The handlers
registered after it override the cases where the storefront differs:
state conflicts are 400 rather than 409, authorization failures have their
own status codes, and every error body has the shape
``{"error": {field: [message, ...]}}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import (
    ExpectedVersionError,
    InvalidOperationError,
    InvalidStateError,
    ObjectNotFoundError,
)
from protean.integrations.fastapi import register_exception_handlers

from storefront.shared.exceptions import ForbiddenError, NotAuthenticatedError

logger = structlog.get_logger(__name__)


def error_messages(exc: Exception) -> dict:
    """The ``{field: [messages]}`` dict an exception was raised with.

    Protean's message-carrying exceptions keep it on ``messages``; the others
    keep whatever they were raised with in ``args[0]``.
    """
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        messages = exc.args[0]
    if isinstance(messages, dict):
        return {field: msgs if isinstance(msgs, list) else [str(msgs)] for field, msgs in messages.items()}
    return {"_entity": [str(messages or exc)]}


def _respond(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error_messages(exc)})


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return _respond(404, exc)

    @app.exception_handler(InvalidStateError)
    async def invalid_state_handler(request: Request, exc: InvalidStateError) -> JSONResponse:
        return _respond(400, exc)

    @app.exception_handler(InvalidOperationError)
    async def invalid_operation_handler(request: Request, exc: InvalidOperationError) -> JSONResponse:
        return _respond(400, exc)

    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
        return _respond(403, exc)

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError) -> JSONResponse:
        return _respond(401, exc)

    @app.exception_handler(ExpectedVersionError)
    async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
        logger.warning("Concurrent modification rejected", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=409,
            content={"error": {"_entity": ["The resource was modified by another request. Please retry."]}},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path")) or "body"
            errors.setdefault(field, []).append(error["msg"])
        return JSONResponse(status_code=400, content={"error": errors})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", path=request.url.path, method=request.method)
        return JSONResponse(status_code=500, content={"error": {"_entity": ["Internal Server Error"]}})
