# eSocial Relay - mTLS Transport Module
"""
mTLS transport for communication between the relay and eSocial.

This module provides:
- Per-call SSL context construction from PEM material
- Certificate description for logs (no secrets)
- Single-attempt SOAP POST with a hard timeout ceiling
"""

from .client import MTLSTransport, build_ssl_context, describe_certificate

__all__ = [
    "MTLSTransport",
    "build_ssl_context",
    "describe_certificate",
]
