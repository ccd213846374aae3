"""Image Detector Registry - pick the right detector for an arbitrary link.

Hey future me - this is what callers resolving user-submitted links talk to!

FLOW:
    registry.detect_images(url)
        │
        ├─► detectors in priority order (lower number first)
        │       └─► can_process(url)? no → skip (no I/O)
        │       └─► check_state() (respects each detector's backoff)
        │               └─► GOOD → use this one
        │
        ├─► nobody accepted the URL      → UnsupportedUrlError
        └─► everybody who accepted is degraded → InvalidStateException

USAGE:
    registry = ImageDetectorRegistry()
    registry.register(await create_imgur_detector(client_id, client), priority=1)

    images = await registry.detect_images("https://imgur.com/a/abcd")
"""

import logging
from dataclasses import dataclass

from weasel.domain.exceptions import InvalidStateException, UnsupportedUrlError
from weasel.domain.ports.image_detector import DetectorState, IImageDetector
from weasel.domain.value_objects.image_record import ImageRecord

logger = logging.getLogger(__name__)


@dataclass
class _DetectorEntry:
    """Internal entry for registered detector with priority."""

    detector: IImageDetector
    priority: int


class ImageDetectorRegistry:
    """Registry for managing image detectors with fallback logic."""

    def __init__(self) -> None:
        self._detectors: dict[str, _DetectorEntry] = {}

    def register(self, detector: IImageDetector, priority: int = 10) -> None:
        """Register a detector with given priority.

        Registering a second detector with the same service name replaces the first.

        Args:
            detector: The detector implementation
            priority: Ordering priority (lower = tried first, default 10)
        """
        self._detectors[detector.service_name] = _DetectorEntry(
            detector=detector,
            priority=priority,
        )
        logger.info(
            "Registered image detector: %s (priority=%d, state=%s)",
            detector.service_name,
            priority,
            detector.state.value,
        )

    def unregister(self, service_name: str) -> bool:
        """Remove a detector from the registry.

        Returns:
            True if removed, False if not found
        """
        if service_name in self._detectors:
            del self._detectors[service_name]
            logger.info("Unregistered image detector: %s", service_name)
            return True
        return False

    @property
    def detectors(self) -> list[IImageDetector]:
        """Registered detectors sorted by priority (lowest first)."""
        sorted_entries = sorted(self._detectors.values(), key=lambda e: e.priority)
        return [entry.detector for entry in sorted_entries]

    def can_process(self, url: str) -> bool:
        """Whether any registered detector accepts the URL."""
        return any(detector.can_process(url) for detector in self.detectors)

    async def find_detector(self, url: str) -> IImageDetector | None:
        """Get the first GOOD detector that accepts the URL.

        Returns:
            The detector, or None if no accepting detector is currently GOOD
        """
        for detector in self.detectors:
            if not detector.can_process(url):
                continue

            state = await detector.check_state()
            if state is DetectorState.GOOD:
                return detector

            logger.debug(
                "Detector %s accepts %s but is %s, trying next",
                detector.service_name,
                url,
                state.value,
            )
        return None

    async def detect_images(self, url: str) -> list[ImageRecord]:
        """Detect images with the best available detector.

        Raises:
            UnsupportedUrlError: No registered detector accepts the URL
            InvalidStateException: Every accepting detector is degraded
            ImageDetectionError: The chosen detector failed during detection
        """
        if not self.can_process(url):
            raise UnsupportedUrlError(url)

        detector = await self.find_detector(url)
        if detector is None:
            raise InvalidStateException(f"No detector for {url!r} is currently available")

        return await detector.detect_images(url)

    async def check_all(self) -> dict[str, DetectorState]:
        """Run check_state() on every registered detector."""
        return {
            detector.service_name: await detector.check_state()
            for detector in self.detectors
        }


__all__ = ["ImageDetectorRegistry"]
