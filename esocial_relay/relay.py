"""
Relay service: validate, resolve, build, send, and normalize the outcome.
"""
from __future__ import annotations

import time
from typing import Any, Mapping, Optional

from .endpoints import resolve_endpoint
from .envelope import build_envelope, soap_action
from .exceptions import RelayError, RelayInternalError
from .log import get_logger
from .metrics import RELAY_DURATION, RELAY_REQUESTS
from .models import RelayRequest, RelayResult
from .mtls import MTLSTransport, describe_certificate
from .validator import validate_request

logger = get_logger(__name__)


class RelayService:
    """
    Forwards one SOAP call to eSocial per invocation.

    Holds no per-call state; a single instance can serve concurrent calls.
    """

    def __init__(self, transport: Optional[MTLSTransport] = None):
        self.transport = transport or MTLSTransport()

    async def relay(self, payload: Mapping[str, Any]) -> RelayResult:
        """
        Run a relay call end to end.

        Never raises; every failure becomes a RelayResult with
        success=False. Elapsed time is measured from acceptance on every path.
        """
        started = time.monotonic()
        request: Optional[RelayRequest] = None

        try:
            request = validate_request(payload)
            result = await self._forward(request, started)
        except RelayError as e:
            result = RelayResult(
                success=False,
                elapsed_ms=_elapsed_ms(started),
                error=e.message,
                error_code=e.error_code,
                http_status=e.http_status,
            )
            log = logger.warning if e.http_status < 500 else logger.error
            log(
                "relay_failed",
                error_code=e.error_code,
                error=e.message,
                elapsed_ms=result.elapsed_ms,
            )
        except Exception as e:
            result = RelayResult(
                success=False,
                elapsed_ms=_elapsed_ms(started),
                error=f"Erro interno no relay: {e.__class__.__name__}",
                error_code=RelayInternalError.error_code,
                http_status=RelayInternalError.http_status,
            )
            logger.exception("relay_internal_error", elapsed_ms=result.elapsed_ms)

        action = request.action.value if request else "invalid"
        RELAY_REQUESTS.labels(
            action=action,
            environment=request.environment.value if request else "invalid",
            outcome="success" if result.success else result.error_code,
        ).inc()
        RELAY_DURATION.labels(action=action).observe(result.elapsed_ms / 1000)
        return result

    async def _forward(self, request: RelayRequest, started: float) -> RelayResult:
        hostname, path = resolve_endpoint(request.environment, request.action)
        body = build_envelope(request)

        logger.info(
            "relay_request_received",
            action=request.action.value,
            environment=request.environment.value,
            nr_insc=request.registration_number,
            period=request.reporting_period,
            **describe_certificate(request.client_certificate_pem),
        )
        logger.info("relay_connecting", hostname=hostname, path=path)

        response = await self.transport.post(
            hostname=hostname,
            path=path,
            body=body,
            soap_action=soap_action(request.action),
            cert_pem=request.client_certificate_pem,
            key_pem=request.client_private_key_pem,
        )

        result = RelayResult(
            success=True,
            elapsed_ms=_elapsed_ms(started),
            body=response.body,
            status_code=response.status_code,
            environment=request.environment.value,
            period=request.reporting_period,
        )
        logger.info(
            "relay_succeeded",
            elapsed_ms=result.elapsed_ms,
            status_code=response.status_code,
            response_length=len(response.body),
        )
        return result


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
