"""
Error kinds surfaced at the request boundary.

Every handler failure ends up as ``{"success": false, "error": "..."}`` with
the status code carried by the exception class (see ``install_error_handlers``).
"""
from __future__ import annotations
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

log = structlog.get_logger()


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(AppError):
    status_code = 401
    default_message = "Authentication required"


class InvalidInput(AppError):
    status_code = 400
    default_message = "Invalid input"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class PersistenceFailure(AppError):
    status_code = 500
    default_message = "Database error"


class UpstreamFailure(AppError):
    status_code = 500
    default_message = "Upstream service error"


def error_body(message: str) -> dict:
    return {"success": False, "error": message}


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()) if x not in ("body", "query", "path"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError):
        log.warning("request_failed", path=request.url.path, kind=type(exc).__name__, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        msg = _describe_validation(exc)
        log.info("request_invalid", path=request.url.path, error=msg)
        return JSONResponse(status_code=400, content=error_body(msg))

    @app.exception_handler(HTTPException)
    async def _http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)), headers=exc.headers)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        log.exception("unhandled_error", path=request.url.path)
        return JSONResponse(status_code=500, content=error_body("Internal server error"))
