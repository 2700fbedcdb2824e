import time
import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request

from .config import Settings, settings as default_settings
from .domain.errors import MusicProgressError
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .infrastructure.rate_limit import build_limiter
from .infrastructure.registry import Registry, build_registry
from .interfaces.http.errors import domain_error_handler
from .interfaces.http.routers import instructors, lessons, progress, students

logger = structlog.get_logger()


def configure_logging(level_name: str) -> None:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # без кэша: уже использованные логгеры подхватывают новый LOG_LEVEL
        cache_logger_on_first_use=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg: Settings = app.state.settings
    logger.info(
        "service_starting",
        version=app.version,
        environment=cfg.ENVIRONMENT,
        storage_backend=cfg.STORAGE_BACKEND,
    )
    if cfg.uses_fallback_secret:
        logger.warning("jwt_secret_fallback_in_use", environment=cfg.ENVIRONMENT)
    yield


def create_app(settings: Settings | None = None, registry: Registry | None = None) -> FastAPI:
    """Build the application with its own set of stores.

    Every call produces independent stores and its own rate limiter, so tests
    get a clean state per app. Logging is process-wide: the latest LOG_LEVEL wins.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Music Progress Service", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.registry = registry or build_registry(settings)

    app.state.limiter = build_limiter(settings)
    app.add_exception_handler(MusicProgressError, domain_error_handler)

    # Метрики и логирование запросов
    @app.middleware("http")
    async def observe_requests(request: Request, call_next):
        start_time = time.time()
        method = request.method
        path = request.url.path

        response = await call_next(request)

        if response.headers.get("content-type", "").startswith("application/json"):
            response.headers["content-type"] = "application/json; charset=utf-8"

        duration = time.time() - start_time
        status_code = response.status_code
        http_requests_total.labels(method=method, endpoint=path, status=status_code).inc()
        http_request_duration_seconds.labels(method=method, endpoint=path).observe(duration)

        logger.info(
            "http_request",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=round(duration * 1000, 2)
        )
        return response

    @app.get("/")
    def root():
        return {"service": "Music Students Progress API"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/metrics")
    def metrics():
        """Prometheus metrics endpoint"""
        return metrics_endpoint()

    app.include_router(instructors.router)
    app.include_router(students.router)
    app.include_router(lessons.router)
    app.include_router(progress.router)
    return app


app = create_app()
