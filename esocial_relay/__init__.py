# eSocial Relay
"""
mTLS SOAP relay for the eSocial payroll-reporting web services.

This package provides:
- Request validation and defaulting
- SOAP envelope construction for the Query and Download operations
- Mutual TLS transport to the two fixed eSocial environments
- A FastAPI surface exposing the relay over HTTP
"""

__version__ = "2.1.0"

from .models import Action, Environment, RelayRequest, RelayResult
from .relay import RelayService

__all__ = [
    "Action",
    "Environment",
    "RelayRequest",
    "RelayResult",
    "RelayService",
]
