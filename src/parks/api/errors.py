"""Translate parks domain errors into JSON responses.

Every error body has the shape ``{"kind": ..., "message": ...}``. Register
these after Protean's handlers so they take precedence for the framework's
own ``ValidationError`` and ``ObjectNotFoundError``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from parks.shared.errors import ParkDirectoryError

logger = structlog.get_logger(__name__)


def _field_errors(messages) -> dict:
    if not isinstance(messages, dict):
        return {"_entity": [str(messages)]}
    return {
        str(field): [str(error) for error in (errors if isinstance(errors, (list, tuple)) else [errors])]
        for field, errors in messages.items()
    }


def _rejected(request: Request, kind: str, status_code: int) -> None:
    logger.warning(
        "Request rejected",
        path=request.url.path,
        method=request.method,
        kind=kind,
        status_code=status_code,
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ParkDirectoryError)
    async def park_directory_error_handler(request: Request, exc: ParkDirectoryError) -> JSONResponse:
        _rejected(request, exc.kind, exc.status_code)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        _rejected(request, "validation_error", 400)
        errors = _field_errors(exc.messages)
        message = "; ".join(f"{field}: {', '.join(problems)}" for field, problems in errors.items())
        return JSONResponse(
            status_code=400,
            content={"kind": "validation_error", "message": message or "Invalid request", "errors": errors},
        )

    @app.exception_handler(ObjectNotFoundError)
    async def object_not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        _rejected(request, "not_found", 404)
        return JSONResponse(status_code=404, content={"kind": "not_found", "message": "Resource not found"})
