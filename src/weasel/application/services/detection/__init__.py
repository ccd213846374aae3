"""Detection services: resilience wrapper, backoff and registry."""

from weasel.application.services.detection.backoff import BackoffSchedule
from weasel.application.services.detection.registry import ImageDetectorRegistry
from weasel.application.services.detection.resilient_detector import (
    ResilientImageDetector,
)

__all__ = [
    "BackoffSchedule",
    "ImageDetectorRegistry",
    "ResilientImageDetector",
]
