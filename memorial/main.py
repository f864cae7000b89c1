from contextlib import asynccontextmanager
from typing import Optional
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from memorial import messages
from memorial.config import Settings, settings as default_settings
from memorial.database import Database
from memorial.memorial_logger import logger
from memorial.routers import frontend, media, memories


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    The database is opened here unless one is passed in; either way the app
    initializes its schema on startup and releases it on shutdown.
    """
    settings = settings or default_settings
    database = database or Database(settings.DATABASE_URL, production=settings.is_production)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.init_schema()
        settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
        logger.info("Application startup complete")
        try:
            yield
        finally:
            database.dispose()
            logger.info("Application shutdown")

    app = FastAPI(
        title="Memorial",
        description="Shared memories and comments for a memorial site",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        docs_url="/api/docs" if settings.DEBUG else None,  # Only show docs in debug mode
        redoc_url="/api/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    logger.info(f"Server starting... Version: {settings.APP_VERSION}, Debug: {settings.DEBUG}, Env: {settings.APP_ENV}")

    # CORS configuration - supports development and production modes
    allowed_origins = [
        "http://localhost:3000",          # React dev server
        "http://localhost:3001",          # API server
    ]
    allowed_origins.extend(settings.CORS_ORIGINS)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        log_dict = {
            "request": {
                "url": str(request.url),
                "method": request.method,
            }
        }
        start_time = time.time()
        response = await call_next(request)
        log_dict["status"] = response.status_code
        log_dict["process Time"] = time.time() - start_time
        logger.info(log_dict)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": messages.MISSING_FIELDS})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": messages.SERVER_ERROR})

    # Health check endpoint
    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "message": "Memorial API is running"
        }

    app.include_router(memories.router)
    app.include_router(media.router)
    # Registered last: catches every GET the routes above do not handle
    app.include_router(frontend.router)

    return app


app = create_app()
