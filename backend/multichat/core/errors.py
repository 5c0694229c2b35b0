"""Application error taxonomy and the FastAPI handlers that render it.

Every error raised on purpose by the service layer derives from ``AppError`` and
carries the HTTP status and machine-readable code it maps to. Handlers render
all of them as ``{"error": ..., "code": ...}``; anything unexpected becomes a
bare 500 with the traceback kept in the logs only.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    code = "E_INTERNAL"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Malformed request, rejected before any side effect."""

    status_code = 400
    code = "E_INVALID_REQUEST"


class NotFoundError(AppError):
    status_code = 404
    code = "E_NOT_FOUND"


class ConversationNotFoundError(NotFoundError):
    code = "E_CONVERSATION_NOT_FOUND"

    def __init__(self, conversation_id: int):
        self.conversation_id = conversation_id
        super().__init__("Conversation not found")


class ModelNotFoundError(NotFoundError):
    code = "E_MODEL_NOT_FOUND"

    def __init__(self, model_id: str):
        self.model_id = model_id
        super().__init__("Model not found")


class DuplicateModelError(AppError):
    status_code = 409
    code = "E_DUPLICATE_MODEL"

    def __init__(self, model_id: str):
        self.model_id = model_id
        super().__init__(f"Model '{model_id}' already exists")


class ProviderError(AppError):
    """A vendor call failed (network, auth, quota, unsupported provider).

    Isolated per model by the chat orchestrator; only the message reaches the
    response envelope.
    """

    status_code = 502
    code = "E_PROVIDER_ERROR"

    def __init__(self, message: str, provider: str | None = None, model_id: str | None = None):
        self.provider = provider
        self.model_id = model_id
        super().__init__(message)


class SearchError(AppError):
    """Search backend failure. Always recovered by the search enricher."""

    status_code = 502
    code = "E_SEARCH_ERROR"


async def _app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code},
    )


async def _request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request data", "code": ValidationError.code, "details": details},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
