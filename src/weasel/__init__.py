"""weasel - find directly embeddable image URLs behind image-hosting page links."""

from weasel.application.services.detection import (
    ImageDetectorRegistry,
    ResilientImageDetector,
)
from weasel.domain.exceptions import (
    ConfigurationError,
    ImageDetectionError,
    InvalidStateException,
    ResponseParseError,
    UnsupportedFormatError,
    UnsupportedUrlError,
    WeaselException,
)
from weasel.domain.ports.image_detector import (
    DetectionOutcome,
    DetectorState,
    IDetectionStrategy,
    IImageDetector,
)
from weasel.domain.value_objects.image_record import ImageFormat, ImageRecord
from weasel.infrastructure.detectors.imgur import (
    ImgurDetectionStrategy,
    create_imgur_detector,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DetectionOutcome",
    "DetectorState",
    "IDetectionStrategy",
    "IImageDetector",
    "ImageDetectionError",
    "ImageDetectorRegistry",
    "ImageFormat",
    "ImageRecord",
    "ImgurDetectionStrategy",
    "InvalidStateException",
    "ResilientImageDetector",
    "ResponseParseError",
    "UnsupportedFormatError",
    "UnsupportedUrlError",
    "WeaselException",
    "create_imgur_detector",
]
