"""Domain ports (interfaces)."""

from weasel.domain.ports.image_detector import (
    DetectionOutcome,
    DetectorState,
    IDetectionStrategy,
    IImageDetector,
)

__all__ = [
    "DetectionOutcome",
    "DetectorState",
    "IDetectionStrategy",
    "IImageDetector",
]
