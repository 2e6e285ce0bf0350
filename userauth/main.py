import time
import logging
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from .config import settings
from .domain.errors import AccountNotFound, ValidationFailure
from .infrastructure.db import engine
from .infrastructure.models import Base
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .interfaces.http.routers import accounts as accounts_router
from .interfaces.http.schemas import ViolationOut, ViolationsResp


def configure_logging(level_name: str) -> None:
    """JSON-логи через structlog; пароли и тела запросов не логируются."""
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level_name.upper(), logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging(settings.LOG_LEVEL)
logger = structlog.get_logger()

app = FastAPI(title="Accounts Service", version="0.1.0")


@app.exception_handler(ValidationFailure)
def validation_failure_handler(request: Request, exc: ValidationFailure):
    body = ViolationsResp(
        violations=[ViolationOut(code=v.value, field=v.field, message=v.message) for v in exc.violations]
    )
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(AccountNotFound)
def account_not_found_handler(request: Request, exc: AccountNotFound):
    return JSONResponse(status_code=404, content={"detail": "Account not found"})


@app.middleware("http")
async def observe_request(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    duration = time.perf_counter() - started

    # шаблон маршрута, а не путь: id аккаунтов не должны плодить серии метрик
    route = request.scope.get("route")
    endpoint = getattr(route, "path", request.url.path)
    http_requests_total.labels(method=request.method, endpoint=endpoint, status=response.status_code).inc()
    http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(duration)

    logger.info(
        "http_request",
        method=request.method,
        endpoint=endpoint,
        status_code=response.status_code,
        duration_ms=round(duration * 1000, 2)
    )
    return response


@app.on_event("startup")
def on_startup():
    logger.info("Starting accounts service", version="0.1.0", password_scheme=settings.PASSWORD_SCHEME)
    Base.metadata.create_all(bind=engine)
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Accounts table ready")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


app.include_router(accounts_router.router)
