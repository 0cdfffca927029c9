import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "internal_error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "invalid_request"


class AuthError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "invalid_token"


class ForbiddenError(CatalogError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "forbidden"


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "not found"


class ConflictError(CatalogError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "conflict"


class PayloadTooLargeError(CatalogError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_detail = "file_too_large"


class StoreError(CatalogError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "store_error"


def summarize_errors(errors) -> str:
    missing = [".".join(str(p) for p in e["loc"][1:]) for e in errors if e.get("type") == "missing"]
    if missing:
        return f"missing required fields: {', '.join(missing)}"
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ())[1:])
    return f"{where}: {first.get('msg', 'invalid value')}" if where else first.get("msg", "invalid_request")


async def _catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    detail = exc.detail
    if exc.status_code >= 500 and settings.is_production:
        detail = "internal_error"
    return JSONResponse(status_code=exc.status_code, content={"detail": detail}, headers=headers)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": summarize_errors(errors),
            "errors": [{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in errors],
        },
    )


async def _store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    return await _catalog_error_handler(request, StoreError(str(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, _catalog_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)
