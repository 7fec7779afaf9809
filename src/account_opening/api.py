"""FastAPI app factory: one app per service, or all four routers in one app."""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import asynccontextmanager
from http import HTTPStatus
from logging import getLogger
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from account_opening import API_VERSION, SERVICE_NAMES
from account_opening.accounts_api import accounts_router
from account_opening.config import get_config, get_config_hash
from account_opening.customers_api import customers_router
from account_opening.db import get_engine, init_db
from account_opening.documents_api import documents_router
from account_opening.errors import (
    DuplicateKeyError,
    FieldViolation,
    NotFoundError,
    ServiceError,
    ValidationFailure,
)
from account_opening.logging_config import setup_logging
from account_opening.notifications_api import notifications_router
from account_opening.request_context import new_correlation_id, set_correlation_id
from account_opening.schemas import ErrorResponse, FieldViolationResponse, HealthResponse

logger = getLogger(__name__)

ROUTERS: dict[str, APIRouter] = {
    "account": accounts_router,
    "customer": customers_router,
    "document": documents_router,
    "notification": notifications_router,
}


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Set correlation_id per request; echo X-Correlation-ID in response."""

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        correlation_id = request.headers.get("X-Correlation-ID") or new_correlation_id()
        set_correlation_id(correlation_id)
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    violations: Sequence[FieldViolation] = (),
) -> JSONResponse:
    body = ErrorResponse(
        status=status_code,
        error=HTTPStatus(status_code).phrase,
        message=message,
        path=request.url.path,
        violations=[FieldViolationResponse(field=v.field, message=v.message) for v in violations],
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def service_error_status(exc: ServiceError, strict_status_codes: bool) -> int:
    """HTTP status for a business-rule failure.

    The historical contract reports every service failure as 500; strict mode
    maps not-found to 404 and duplicate keys to 409.
    """
    if strict_status_codes:
        if isinstance(exc, NotFoundError):
            return 404
        if isinstance(exc, DuplicateKeyError):
            return 409
    return 500


def _request_violations(exc: RequestValidationError) -> list[FieldViolation]:
    violations = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        violations.append(FieldViolation(".".join(loc) or "body", err.get("msg", "invalid value")))
    return violations


def register_exception_handlers(app: FastAPI, strict_status_codes: bool = False) -> None:
    @app.exception_handler(RequestValidationError)
    async def _on_request_validation(request: Request, exc: RequestValidationError):
        return _error_response(request, 400, "Validation failed", _request_violations(exc))

    @app.exception_handler(ValidationFailure)
    async def _on_validation_failure(request: Request, exc: ValidationFailure):
        return _error_response(request, 400, "Validation failed", exc.violations)

    @app.exception_handler(ServiceError)
    async def _on_service_error(request: Request, exc: ServiceError):
        status_code = service_error_status(exc, strict_status_codes)
        logger.warning(
            "%s %s failed: %s (%s)",
            request.method,
            request.url.path,
            exc.message,
            type(exc).__name__,
        )
        return _error_response(request, status_code, exc.message)

    @app.exception_handler(Exception)
    async def _on_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "%s %s failed unexpectedly", request.method, request.url.path, exc_info=exc
        )
        return _error_response(request, 500, "Internal server error")


def create_app(services: Sequence[str] | None = None, config_path: str | None = None) -> FastAPI:
    """Build an app serving the given services (all four when None)."""
    names = list(services) if services else list(SERVICE_NAMES)
    unknown = [n for n in names if n not in ROUTERS]
    if unknown:
        raise ValueError(f"Unknown service(s) {unknown}. Known services: {list(SERVICE_NAMES)}")
    config = get_config(config_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = get_config(config_path)
        setup_logging(cfg.get("app", {}).get("log_level", "INFO"))
        db_cfg = cfg.get("database", {})
        init_db(
            db_cfg.get("url", "sqlite:///./data/account_opening.db"),
            echo=db_cfg.get("echo", False),
        )
        logger.info("Serving services %s", names)
        yield

    title = "Account Opening API" if len(names) > 1 else f"{names[0].capitalize()} Service"
    app = FastAPI(title=title, version=API_VERSION, lifespan=lifespan)
    app.add_middleware(CorrelationIdMiddleware)

    cors = config.get("cors") or {}
    if any(n in (cors.get("services") or []) for n in names):
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors.get("allowed_origins") or [],
            allow_methods=cors.get("allowed_methods") or ["GET", "POST", "PUT", "DELETE"],
            allow_headers=["*"],
        )

    register_exception_handlers(
        app, strict_status_codes=bool(config.get("api", {}).get("strict_status_codes", False))
    )
    for name in names:
        app.include_router(ROUTERS[name])

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        """Liveness and version; db_status indicates DB connectivity."""
        from sqlalchemy import text

        db_status = "unknown"
        try:
            with get_engine().connect() as conn:
                conn.execute(text("SELECT 1"))
            db_status = "ok"
        except Exception:
            db_status = "error"
        return HealthResponse(
            status="ok",
            version=API_VERSION,
            services=names,
            config_hash=get_config_hash(config),
            db_status=db_status,
        )

    return app


app = create_app()
