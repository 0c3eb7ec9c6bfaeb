from contextlib import asynccontextmanager
from typing import Optional

from databases import Database
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Settings
from database.connection import build_database, create_tables
from errors import UnhandledErrorMiddleware, register_exception_handlers
from repositories.board_repository import BoardRepository
from routers import health
from routers.board import build_board_router
from routers.health import app_version, uptime_seconds
from security.middleware import BodySizeLimitMiddleware, RateLimitMiddleware, SecurityHeadersMiddleware
from security.passwords import PasswordHasher
from services.board_service import BoardService
from utils.logger import RequestLogger, get_logger, log_with_context, setup_logging
from utils.time import format_uptime

logger = get_logger("main")


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings)

    # 생성자 주입: database -> repository -> service -> router
    database = database or build_database(settings)
    hasher = PasswordHasher.from_settings(settings)
    repository = BoardRepository(database, hasher)
    service = BoardService(repository, hasher)
    interceptor = RequestLogger(enabled=settings.enable_request_logging)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.connect()
        await create_tables(database)
        log_with_context(logger, "info", "Server started",
                         environment=settings.node_env,
                         logLevel=settings.log_level,
                         requestLogging=settings.enable_request_logging)
        if settings.swagger_enabled:
            logger.info(f"Swagger docs available at http://{settings.host}:{settings.port}/docs")
        yield
        log_with_context(logger, "info", "Closing server gracefully",
                         uptime=format_uptime(uptime_seconds()))
        await database.disconnect()

    # swagger 는 개발환경에서만
    docs = settings.swagger_enabled
    app = FastAPI(
        title="Board API Server",
        description="Bulletin-board CRUD API with per-post password protection",
        version=app_version(),
        lifespan=lifespan,
        docs_url="/docs" if docs else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs else None,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.board_service = service

    # 미들웨어: 나중에 추가한 것이 바깥쪽
    app.add_middleware(UnhandledErrorMiddleware, settings=settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.body_limit_bytes)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.rate_limit_max,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        expose_headers=["Content-Range", "X-Content-Range"],
        allow_credentials=True,
        max_age=86400,
    )

    register_exception_handlers(app, settings)

    # ✅ 라우터 등록
    app.include_router(health.router)
    app.include_router(build_board_router(service, interceptor), prefix=settings.api_prefix)
    return app


app = create_app()
