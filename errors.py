# errors.py
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from utils.logger import get_logger

logger = get_logger("errors")


def _phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _error_body(status_code: int, error: str, message: str, **extra) -> dict:
    return {"statusCode": status_code, "error": error, "message": message, **extra}


def server_error_response(settings, message: str) -> JSONResponse:
    shown = message if settings.is_development else "Something went wrong"
    return JSONResponse(
        status_code=500,
        content=_error_body(500, "Internal Server Error", shown),
    )


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Turn exceptions escaping the routes into the JSON 500 body.

    Registered innermost, so the response still passes through the CORS and
    security-header middlewares (Starlette's own fallback sits outside them).
    """

    def __init__(self, app, settings):
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            return server_error_response(self.settings, str(exc))


def register_exception_handlers(app: FastAPI, settings) -> None:
    def server_error(message: str) -> JSONResponse:
        return server_error_response(settings, message)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation failed: {request.method} {request.url.path}")
        return JSONResponse(
            status_code=400,
            content=_error_body(400, "Bad Request", "Validation failed",
                                details=jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content=_error_body(404, "Not Found",
                                    f"Route {request.method}:{request.url.path} not found"),
            )
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
            return server_error(str(exc.detail))
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.status_code, _phrase(exc.status_code), str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    # middleware 단계에서 난 에러용
    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return server_error(str(exc))
