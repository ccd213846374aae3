"""Protocol-specific detection strategies."""

from weasel.infrastructure.detectors.imgur import (
    ImgurDetectionStrategy,
    create_imgur_detector,
)

__all__ = ["ImgurDetectionStrategy", "create_imgur_detector"]
