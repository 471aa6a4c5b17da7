import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ai_compare.errors import AppError

logger = structlog.get_logger()


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning("app_error", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, **exc.extra},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("invalid_request", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "Solicitud inválida"})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # a known path with the wrong method is still an unknown endpoint
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Endpoint no encontrado"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content={"error": "Error interno del servidor"},
    )
