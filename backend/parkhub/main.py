# backend/parkhub/main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from typing import List
import time
import uuid

from parkhub.core.config import settings
from parkhub.core.exceptions import InternalError, ParkHubError
from parkhub.core.logging import logger
from parkhub.db.database import init_db, close_db
from parkhub.api.v1.router import api_router
from parkhub.schemas.common import ErrorResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting ParkHub API", extra={"environment": settings.ENVIRONMENT})
    await init_db()

    yield

    # Shutdown
    logger.info("Shutting down ParkHub API")
    await close_db()


app = FastAPI(
    title="ParkHub API",
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=("/api/docs" if settings.ENVIRONMENT == "development" else None),
    redoc_url=("/api/redoc" if settings.ENVIRONMENT == "development" else None),
    lifespan=lifespan
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_body(message: str, errors: List[str]) -> dict:
    return ErrorResponse(message=message, errors=errors).model_dump()


# Request id, timing and access log
@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(
        f"{request.method} {request.url.path} {response.status_code}",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(process_time * 1000, 2),
        },
    )
    return response


# Include routers
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.exception_handler(ParkHubError)
async def parkhub_exception_handler(request: Request, exc: ParkHubError):
    if exc.status_code >= 500:
        logger.error(exc.message, extra={"request_id": getattr(request.state, "request_id", None)})
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.errors),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return JSONResponse(status_code=400, content=error_body("Validation Error", errors))


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning(
        "Integrity violation",
        extra={"request_id": getattr(request.state, "request_id", None), "error": str(exc.orig)},
    )
    return JSONResponse(
        status_code=409,
        content=error_body("Resource already exists", ["Duplicate or conflicting record"]),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.exception(
        "Unhandled exception while handling request",
        exc_info=exc,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    error = InternalError()
    return JSONResponse(
        status_code=error.status_code,
        content=error_body(error.message, error.errors),
    )
