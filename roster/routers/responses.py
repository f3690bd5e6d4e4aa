"""Response helpers shared by the JSON routers."""
from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from roster.domain.results import ErrorKind, Result
from roster.services.storage_service import StorageService

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_REFERENCE: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DECODE: 500,
    ErrorKind.STORE_UNAVAILABLE: 503,
}


def get_storage(request: Request) -> StorageService:
    svc = getattr(getattr(request.app, "state", None), "storage", None)
    if not svc:
        raise RuntimeError("StorageService not configured")
    return svc


def error_response(kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        {"ok": False, "error": kind.value, "message": message},
        status_code=STATUS_BY_KIND.get(kind, 500),
    )


def failure_response(result: Result) -> JSONResponse:
    return error_response(result.error or ErrorKind.STORE_UNAVAILABLE, result.message)


def not_found(message: str) -> JSONResponse:
    return error_response(ErrorKind.NOT_FOUND, message)
