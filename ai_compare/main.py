from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from ai_compare.api.discord import router as discord_router
from ai_compare.api.query import router as query_router
from ai_compare.config import settings
from ai_compare.discord.client import discord_client
from ai_compare.errors import AppError
from ai_compare.middleware.error_handler import (
    app_error_handler,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from ai_compare.middleware.logging import LoggingMiddleware

logger = structlog.get_logger()

static_dir = Path(__file__).parent.parent / "static"


def configure_logging():
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.dev.ConsoleRenderer()
                if settings.APP_ENV == "development"
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _log_configuration():
    missing = settings.missing_provider_keys
    if missing:
        logger.warning("config.missing_provider_keys", keys=missing)
    if settings.discord_configured:
        logger.info("config.discord_enabled", channel_id=settings.DISCORD_CHANNEL_ID)
    else:
        logger.info("config.discord_disabled")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("app.startup", env=settings.APP_ENV, port=settings.PORT)
    _log_configuration()

    app.state.http = httpx.AsyncClient(timeout=settings.PROVIDER_TIMEOUT)
    if settings.discord_configured:
        await discord_client.initialize(settings.DISCORD_CHANNEL_ID, settings.DISCORD_GREETING)

    yield

    # Shutdown
    if settings.discord_configured:
        await discord_client.shutdown()
    await app.state.http.aclose()
    logger.info("app.shutdown")


app = FastAPI(title="AI Compare", lifespan=lifespan)

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)

# Exception handlers
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Routes
app.include_router(query_router)
app.include_router(discord_router)

if static_dir.is_dir():
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")


@app.get("/", include_in_schema=False)
async def index():
    index_file = static_dir / "index.html"
    if not index_file.is_file():
        raise StarletteHTTPException(status_code=404)
    return FileResponse(index_file)


@app.get("/health")
async def health():
    return {"status": "ok"}
