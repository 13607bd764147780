"""
eSocial Relay - Data Models
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Action(str, Enum):
    QUERY = "consultar"
    DOWNLOAD = "download"


class Environment(str, Enum):
    PRODUCTION = "producao"
    PRODUCTION_RESTRICTED = "producao-restrita"


@dataclass(frozen=True)
class EndpointConfig:
    """Remote host and service paths for one eSocial environment."""
    hostname: str
    query_path: str
    download_path: str


@dataclass
class RelayRequest:
    """Validated relay request with defaults applied. Lives for one call only."""
    action: Action
    environment: Environment
    client_certificate_pem: bytes = field(repr=False)
    client_private_key_pem: bytes = field(repr=False)
    registration_type: str
    registration_number: str
    reporting_period: str
    event_type: str


@dataclass
class TransportResponse:
    """Fully buffered 2xx response from eSocial."""
    status_code: int
    body: str


@dataclass
class RelayResult:
    """Normalized outcome of a relay call."""
    success: bool
    elapsed_ms: int
    body: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    environment: Optional[str] = None
    period: Optional[str] = None
    http_status: int = field(default=200, repr=False)

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            data: dict[str, Any] = {
                "success": True,
                "body": self.body,
                "statusCode": self.status_code,
                "elapsedMillis": self.elapsed_ms,
            }
        else:
            data = {
                "success": False,
                "error": self.error,
                "errorCode": self.error_code,
                "elapsedMillis": self.elapsed_ms,
            }
        if self.environment is not None:
            data["environment"] = self.environment
        if self.period is not None:
            data["period"] = self.period
        return data
