"""
You360 Wellness - Main FastAPI Application
"""

import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from .config import settings
from .api import auth_router, wellness_router, food_router, chat_router, routines_router
from .api.deps import init_session_store
from .core.logging_config import setup_logging
from .middleware import RequestLoggingMiddleware
from .storage import LocalStorage, init_user_storage

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)

# Routes work before startup too (e.g. TestClient without a context manager)
init_user_storage(LocalStorage(settings.local_storage_path))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    setup_logging(settings)

    init_user_storage(LocalStorage(settings.local_storage_path))
    store = init_session_store()
    logger.info("User storage and session store initialized")

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Storage path: {settings.local_storage_path}")
    logger.info(f"AI provider: {settings.llm_provider} (configured={store.gateway.configured})")
    if not store.gateway.configured:
        logger.warning("GEMINI_API_KEY is not set; AI features will report a configuration error")
    yield
    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Personal wellness dashboard backend: scores, routines and AI advice",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.log_api_requests:
    app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Errors carry ``message`` (read by the login page) alongside FastAPI's ``detail``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail, "detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """422 with the field errors only; the rejected input may not be JSON-encodable (NaN, Infinity)."""
    errors = [
        {key: value for key, value in error.items() if key not in ("input", "ctx")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid request", "detail": jsonable_encoder(errors)},
    )


app.include_router(auth_router)
app.include_router(wellness_router)
app.include_router(food_router)
app.include_router(chat_router)
app.include_router(routines_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "message": "Welcome to You360 - your wellness journey starts here",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "storage": settings.storage_type,
        "version": settings.app_version
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "you360.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
