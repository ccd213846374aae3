"""Health check functionality: internet connectivity and detector state."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from weasel.domain.ports.image_detector import DetectorState, IImageDetector

logger = logging.getLogger(__name__)

CONNECTIVITY_CHECK_URL = "https://www.google.com/"


class HealthStatus(str, Enum):
    """Health check status."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheck:
    """Result of a health check."""

    name: str
    status: HealthStatus
    message: str | None = None
    details: dict[str, Any] | None = None


_STATE_HEALTH: dict[DetectorState, HealthStatus] = {
    DetectorState.GOOD: HealthStatus.HEALTHY,
    DetectorState.RATE_LIMITED: HealthStatus.DEGRADED,
    DetectorState.BAD_NETWORK: HealthStatus.UNHEALTHY,
    DetectorState.BROKEN: HealthStatus.UNHEALTHY,
}


async def has_internet_connection(
    client: httpx.AsyncClient,
    url: str = CONNECTIVITY_CHECK_URL,
    timeout: float = 5.0,
) -> bool:
    """Whether the host has a working internet connection.

    Hey future me - there's no nice cross platform way to ask the OS, so we just fetch a
    well-known page. Only the headers are read. This is potentially SLOW, don't put it in
    a hot path.

    Args:
        client: HTTP client to use for the check
        url: Page that should always answer 200
        timeout: Request timeout in seconds

    Returns:
        True if the page answered 200 OK
    """
    try:
        async with client.stream("GET", url, timeout=timeout) as response:
            return response.status_code == httpx.codes.OK
    except httpx.HTTPError as e:
        logger.warning("Connectivity check failed", extra={"error": str(e), "url": url})
        return False


async def check_detector_health(detector: IImageDetector) -> HealthCheck:
    """Check a detector's state and report it as a HealthCheck.

    Runs check_state(), so the detector's backoff applies - a detector inside its backoff
    window reports its cached state.
    """
    state = await detector.check_state()
    status = _STATE_HEALTH[state]

    if status is HealthStatus.HEALTHY:
        message = f"{detector.service_name} detector is operational"
    else:
        message = f"{detector.service_name} detector is {state.value}"

    return HealthCheck(
        name=detector.service_name.lower(),
        status=status,
        message=message,
        details={"service": detector.service_name, "state": state.value},
    )


__all__ = [
    "CONNECTIVITY_CHECK_URL",
    "HealthCheck",
    "HealthStatus",
    "check_detector_health",
    "has_internet_connection",
]
