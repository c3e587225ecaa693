"""
Error taxonomy and the JSON response envelope.

Every response body is `{code, message, data?}` where `code` mirrors the HTTP
status. Services raise `ApiError` subclasses; the handlers registered by
`install_exception_handlers` turn them into envelopes and log them. Internal
detail (SQL, driver errors, tracebacks) goes to the log only.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "服务器错误，请稍后再试。"

_MISSING = object()


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = GENERIC_SERVER_ERROR

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "请求参数无效。"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "未找到。"


class StorageError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = GENERIC_SERVER_ERROR


def envelope(code: int, message: str, data: Any = _MISSING, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"code": code, "message": message}
    if data is not _MISSING:
        body["data"] = data
    body.update(extra)
    return body


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope(status_code, message))


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request_failed method=%s path=%s status=%s message=%s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
            exc_info=exc,
        )
    else:
        logger.warning(
            "request_rejected method=%s path=%s status=%s message=%s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
    return error_response(exc.status_code, exc.message)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "请求参数无效。"

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = loc[-1] if loc else ""
    if first.get("type") == "missing" and field:
        return f"缺少必填字段：{field}。"
    if field:
        return f"字段 {field} 的值无效。"
    return "请求体无效。"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    logger.warning(
        "request_rejected method=%s path=%s status=400 errors=%s",
        request.method,
        request.url.path,
        exc.errors(),
    )
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(
        "http_error method=%s path=%s status=%s",
        request.method,
        request.url.path,
        exc.status_code,
    )
    message = exc.detail if isinstance(exc.detail, str) else "请求失败。"
    response = error_response(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception method=%s path=%s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
