"""eSocial Relay - HTTP Service.

Relays SOAP requests to the eSocial web services over mutual TLS using
the certificate supplied by the caller.
"""
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from .config import settings
from .exceptions import InvalidRequestBody, RelayInternalError
from .log import get_logger
from .models import RelayResult
from .relay import RelayService
from .schemas import ErrorResponse, HealthResponse, RelayRequestBody, RelayResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("esocial_relay_starting", version=settings.VERSION, port=settings.PORT)
    if not hasattr(app.state, "relay_service"):
        app.state.relay_service = RelayService()

    yield

    logger.info("esocial_relay_stopped")


app = FastAPI(
    title="eSocial Relay",
    description="mTLS SOAP relay for the eSocial web services",
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# Mount Prometheus metrics
app.mount("/metrics", make_asgi_app())


@app.middleware("http")
async def stamp_request_start(request: Request, call_next):
    """Record when the request was accepted, for elapsed time on error paths."""
    request.state.started = time.monotonic()
    return await call_next(request)


def get_relay_service(request: Request) -> RelayService:
    service = getattr(request.app.state, "relay_service", None)
    if service is None:
        service = request.app.state.relay_service = RelayService()
    return service


def _result_response(result: RelayResult) -> JSONResponse:
    return JSONResponse(status_code=result.http_status, content=result.to_dict())


def _elapsed_ms(request: Request) -> int:
    started = getattr(request.state, "started", None)
    if started is None:
        return 0
    return int((time.monotonic() - started) * 1000)


def _error_response(request: Request, status_code: int, error: str, error_code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "errorCode": error_code,
            "elapsedMillis": _elapsed_ms(request),
        },
    )


# =============================================================================
# Health Endpoints
# =============================================================================

@app.get("/healthcheck", response_model=HealthResponse)
@app.get("/health", response_model=HealthResponse, include_in_schema=False)
async def health_check():
    """Liveness probe; checks no dependencies."""
    return HealthResponse(
        status="ok",
        service=settings.SERVICE_NAME,
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


# =============================================================================
# Relay Endpoints
# =============================================================================

@app.post(
    "/relay",
    response_model=RelayResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@app.post("/api/esocial", include_in_schema=False)
async def relay(
    payload: Any = Body(default=None),
    service: RelayService = Depends(get_relay_service),
):
    """
    Forward a Query or Download call to eSocial over mTLS.

    Returns 200 with the raw SOAP response, 400 when the request is
    rejected before any network activity, 500 on transport or remote
    failures.
    """
    # Non-object bodies carry no fields and fail the credential check
    body = RelayRequestBody.model_validate(payload if isinstance(payload, dict) else {})
    result = await service.relay(body.model_dump())
    return _result_response(result)


# Error handlers
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON bodies get the relay error shape instead of a 422."""
    logger.warning("invalid_request_body", path=request.url.path, errors=len(exc.errors()))
    return _error_response(
        request,
        status_code=InvalidRequestBody.http_status,
        error="Corpo da requisição inválido: JSON esperado",
        error_code=InvalidRequestBody.error_code,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return _error_response(
        request,
        status_code=RelayInternalError.http_status,
        error="An unexpected error occurred",
        error_code=RelayInternalError.error_code,
    )


def run():
    import uvicorn

    uvicorn.run(
        "esocial_relay.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
