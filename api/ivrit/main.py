from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging
import os
import traceback
from ivrit.core.config import settings
from ivrit.core.database import init_db
from ivrit.core.exceptions import (
    IvritException,
    ValidationError,
    NotFoundError,
    ConflictError,
    ExternalServiceError
)

# Registers the tables before init_db runs
from ivrit.models import models  # noqa: F401
from ivrit.api.v1 import api_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

IS_DEVELOPMENT = os.getenv("ENVIRONMENT", "production").lower() in ("development", "dev", "local")

# Most specific first; anything else is a 500
ERROR_STATUS_CODES = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY),
]

app = FastAPI(
    title="Ivrit API",
    description="Hebrew vocabulary study with SM-2 spaced repetition",
    version="1.0.0"
)


def status_code_for(exc: IvritException) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log malformed requests (with their body) before answering 422."""
    raw = await request.body()
    body = raw.decode("utf-8") if raw else None
    logger.error(f"Invalid request to {request.method} {request.url.path}: {exc.errors()} (body: {body or 'empty'})")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors(), "body": body},
    )


@app.exception_handler(IvritException)
async def ivrit_exception_handler(request: Request, exc: IvritException):
    status_code = status_code_for(exc)
    logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "type": type(exc).__name__},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Turn any other error into a JSON 500; details only outside production."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)

    content = {
        "detail": "An internal server error occurred. Please try again later.",
        "type": "InternalServerError"
    }
    if IS_DEVELOPMENT:
        content = {
            "detail": str(exc),
            "type": type(exc).__name__,
            "traceback": traceback.format_exc()
        }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Create any missing tables."""
    init_db()
    logger.info(f"Ivrit API ready, routes under {settings.api_v1_prefix}")


@app.get("/")
async def root():
    return {
        "message": "Ivrit API",
        "status": "running",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        }
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}


app.include_router(api_router, prefix=settings.api_v1_prefix)
