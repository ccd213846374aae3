"""Observability infrastructure: logging and health checks."""

from weasel.infrastructure.observability.health import (
    HealthCheck,
    HealthStatus,
    check_detector_health,
    has_internet_connection,
)
from weasel.infrastructure.observability.logging import (
    configure_logging,
    configure_logging_from_settings,
    is_logging_enabled,
    set_logging_enabled,
)

__all__ = [
    "HealthCheck",
    "HealthStatus",
    "check_detector_health",
    "configure_logging",
    "configure_logging_from_settings",
    "has_internet_connection",
    "is_logging_enabled",
    "set_logging_enabled",
]
