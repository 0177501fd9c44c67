"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cli.config_models import SupportConfig
from errors import ValidationError
from observability import log_run_summary, metrics
from web.deps import get_config, get_feedback_store
from web.feedback_store import FeedbackStore
from web.models import HealthResponse
from web.routes import comments, feedback

logger = structlog.get_logger()


def _startup_store(app: FastAPI) -> FeedbackStore:
    overrides = app.dependency_overrides
    if get_feedback_store in overrides:
        return overrides[get_feedback_store]()
    return get_feedback_store(overrides.get(get_config, get_config)())


@asynccontextmanager
async def lifespan(app: FastAPI):
    purged = _startup_store(app).purge_expired_votes()
    logger.info("web.startup", purged_votes=purged)
    yield
    log_run_summary()
    logger.info("web.shutdown")


def create_app(config: Optional[SupportConfig] = None) -> FastAPI:
    """Build the API. A given ``config`` replaces the loaded one for every route."""
    app = FastAPI(title="Support Centre Feedback", version="0.1.0", lifespan=lifespan)
    if config is None:
        config = get_config()
    else:
        app.dependency_overrides[get_config] = lambda: config

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        metrics.counter("api.rejected")
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        metrics.counter("api.rejected")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)

    # Sits inside CORSMiddleware; 500 responses carry CORS headers
    @app.middleware("http")
    async def request_middleware(request: Request, call_next):
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(method=request.method, path=request.url.path)
        metrics.counter("api.requests")
        with metrics.timer("api.request"):
            try:
                return await call_next(request)
            except Exception as exc:
                metrics.counter("api.errors")
                logger.exception("web.unhandled_error")
                return JSONResponse(
                    status_code=500,
                    content={"error": "Internal server error", "message": str(exc)},
                )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.server.allowed_origin],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Visitor-Id"],
    )

    app.include_router(feedback.router)
    app.include_router(comments.router)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(status="ok", metrics=metrics.summary())

    return app


app = create_app()
