from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def ok(data: Any = None, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "success", "data": jsonable_encoder(data)},
    )


def error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def bad_request(message: str) -> ApiError:
    return ApiError(400, message)


def not_found(message: str) -> ApiError:
    return ApiError(404, message)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Ошибки под /api отдаём в общем формате, остальное как обычно."""
    if request.url.path.startswith("/api/"):
        return error(exc.status_code, str(exc.detail))
    return await http_exception_handler(request, exc)
