from __future__ import annotations

from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.api.v1.router import router as api_router
from catalog.core.errors import CatalogError, ValidationFailed
from catalog.core.logging import get_logger, setup_logging
from catalog.models.common import ErrorItem, ErrorResponse, ValidationErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    logger.info("Catalog Service starting")

    yield

    # Shutdown
    from catalog.db.session import engine
    await engine.dispose()


app = FastAPI(title="Catalog Service", lifespan=lifespan)

app.include_router(api_router, prefix="/api/v1")


def _error_response(request: Request, status_code: int, error_type: str, message: str) -> JSONResponse:
    body = ErrorResponse(
        errors=[ErrorItem(type=error_type, message=message, path=request.url.path)]
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(ValidationFailed)
async def handle_validation_failed(request: Request, exc: ValidationFailed):
    logger.warning(f"Input validation failed for {request.method} {request.url.path}")
    body = ValidationErrorResponse(message=exc.message, errors=exc.errors)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(CatalogError)
async def handle_catalog_error(request: Request, exc: CatalogError):
    if exc.status_code >= 500:
        logger.error(f"{exc.type}: {exc.message}")
    return _error_response(request, exc.status_code, exc.type, exc.message)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    return _error_response(request, exc.status_code, "HTTPException", str(exc.detail))


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    # stack trace goes to the log only
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(request, 500, type(exc).__name__, str(exc) or "Internal Server Error")
