"""
Inbound request validation.

Checks run in a fixed order and the first failure short-circuits the rest.
Nothing here touches the network.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from .config import settings
from .exceptions import InvalidEnvironment, MissingCredentials, MissingTaxpayerIdentifiers
from .models import Action, Environment, RelayRequest

MISSING_CREDENTIALS_MESSAGE = "Certificado digital (privateKeyPem e certificatePem) é obrigatório"
INVALID_ENVIRONMENT_MESSAGE = "Ambiente inválido. Use: producao ou producao-restrita"
MISSING_IDENTIFIERS_MESSAGE = "tpInsc e nrInsc são obrigatórios"


def current_period(now: Optional[datetime] = None) -> str:
    """Current reporting period as YYYY-MM, on the UTC calendar."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m")


def _as_bytes(value: Any) -> bytes:
    # PEM material is text; any other JSON type counts as absent
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    return b""


def validate_request(payload: Mapping[str, Any]) -> RelayRequest:
    """
    Validate a raw relay payload and apply defaults.

    Args:
        payload: Mapping keyed by wire field names (action, ambiente,
            certificatePem, privateKeyPem, tpInsc, nrInsc, perApur, tpEvento)

    Returns:
        RelayRequest ready for envelope construction

    Raises:
        MissingCredentials, InvalidEnvironment, MissingTaxpayerIdentifiers
    """
    cert_pem = _as_bytes(payload.get("certificatePem"))
    key_pem = _as_bytes(payload.get("privateKeyPem"))
    if not cert_pem.strip() or not key_pem.strip():
        raise MissingCredentials(MISSING_CREDENTIALS_MESSAGE)

    ambiente = payload.get("ambiente")
    if not isinstance(ambiente, str) or ambiente not in {e.value for e in Environment}:
        raise InvalidEnvironment(INVALID_ENVIRONMENT_MESSAGE)

    tp_insc = payload.get("tpInsc")
    nr_insc = payload.get("nrInsc")
    if not tp_insc or not nr_insc:
        raise MissingTaxpayerIdentifiers(MISSING_IDENTIFIERS_MESSAGE)

    # Anything other than an explicit query falls through to download
    action = Action.QUERY if payload.get("action") == Action.QUERY.value else Action.DOWNLOAD

    return RelayRequest(
        action=action,
        environment=Environment(ambiente),
        client_certificate_pem=cert_pem,
        client_private_key_pem=key_pem,
        registration_type=str(tp_insc),
        registration_number=str(nr_insc),
        reporting_period=str(payload.get("perApur") or current_period()),
        event_type=str(payload.get("tpEvento") or settings.DEFAULT_EVENT_TYPE),
    )
