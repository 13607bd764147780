"""
eSocial Relay - Prometheus Metrics
"""
from __future__ import annotations

from prometheus_client import Counter, Histogram, Info

from .config import settings

RELAY_REQUESTS = Counter(
    "esocial_relay_requests_total",
    "Total relay calls by outcome",
    ["action", "environment", "outcome"],
)

RELAY_DURATION = Histogram(
    "esocial_relay_request_duration_seconds",
    "Relay call duration in seconds, validation included",
    ["action"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0),
)

RELAY_INFO = Info(
    "esocial_relay",
    "eSocial relay build information",
)
RELAY_INFO.info({
    "version": settings.VERSION,
    "service": settings.SERVICE_NAME,
})
