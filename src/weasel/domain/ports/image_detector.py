"""Image Detector Interface - abstraction for image-hosting services.

Hey future me - this is the PORT for everything that turns a page URL into image URLs!

FLOW:
    Caller / ImageDetectorRegistry
        │
        ├─► IImageDetector.can_process(url)      (pure, no I/O)
        │
        └─► IImageDetector.detect_images(url)
                │
                └─► ResilientImageDetector        (state + backoff, application layer)
                        │
                        └─► IDetectionStrategy    (protocol adapter, infrastructure)
                                └─► ImgurDetectionStrategy

The resilience wrapper is COMPOSED with a strategy, not subclassed by it. Strategies
never touch the wrapper's state directly - they hand it back inside DetectionOutcome.

Implementations:
- application/services/detection/resilient_detector.py  (IImageDetector)
- infrastructure/detectors/imgur.py                      (IDetectionStrategy)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from weasel.domain.value_objects.image_record import ImageRecord


class DetectorState(str, Enum):
    """Operating health of a detector as of the last check."""

    GOOD = "good"
    RATE_LIMITED = "rate_limited"
    BAD_NETWORK = "bad_network"
    BROKEN = "broken"

    @property
    def is_degraded(self) -> bool:
        """Any state other than GOOD."""
        return self is not DetectorState.GOOD


@dataclass
class DetectionOutcome:
    """What a strategy found plus the state it observed while finding it.

    Future me note:
    images may be non-empty even when state is degraded (e.g. a rate limited but
    otherwise successful response). The wrapper decides what to do with that.
    """

    state: DetectorState
    images: list[ImageRecord] = field(default_factory=list)


# === Detector Contract ===


class IImageDetector(ABC):
    """Detects images given a URL for a service hosting them.

    Future me note:
    detect_images() checks can_process() and state BEFORE any network activity:
    - URL not supported → UnsupportedUrlError
    - state not GOOD → InvalidStateException

    Methods are async because they make HTTP calls. One instance is NOT meant to be
    driven by several tasks at once without the instance's own serialization.
    """

    @property
    @abstractmethod
    def state(self) -> DetectorState:
        """The current state of the detector as of the last check."""
        ...

    @property
    @abstractmethod
    def service_name(self) -> str:
        """A friendly name for the service the detector uses (e.g. "Imgur")."""
        ...

    @abstractmethod
    async def check_state(self) -> DetectorState:
        """Check the state of the detector, respecting exponential backoff.

        Calls made inside the backoff window return the cached state without I/O.

        Returns:
            The (possibly cached) state after the check
        """
        ...

    @abstractmethod
    def can_process(self, url: str) -> bool:
        """Whether the detector can try to detect images from the given URL.

        Pure predicate - no I/O, no state mutation.
        """
        ...

    @abstractmethod
    async def detect_images(self, url: str) -> list[ImageRecord]:
        """Detect images on a page.

        Args:
            url: The URL of the page to detect images on

        Returns:
            Image records in the order the service reports them (may be empty
            when the page doesn't exist)

        Raises:
            UnsupportedUrlError: If the URL can't be processed by this detector
            InvalidStateException: If the detector is not GOOD
            ImageDetectionError: If the attempt left the detector degraded
        """
        ...


# === Adapter Extension Point ===


class IDetectionStrategy(ABC):
    """Protocol-specific half of a detector.

    Future me note:
    Implement this to add a new image host. The wrapper takes care of backoff,
    preconditions and error surfacing - a strategy only talks to its service.
    """

    @property
    @abstractmethod
    def service_name(self) -> str:
        """Friendly name of the service."""
        ...

    @abstractmethod
    def can_process(self, url: str) -> bool:
        """Stateless URL acceptance predicate."""
        ...

    @abstractmethod
    async def probe_state(self) -> DetectorState:
        """Check the service health right now (no backoff)."""
        ...

    @abstractmethod
    async def detect(self, url: str) -> DetectionOutcome:
        """Detect images for a supported URL without checking state beforehand.

        Raises:
            UnsupportedFormatError: If the service reports data we can't classify
        """
        ...


__all__ = [
    "DetectorState",
    "DetectionOutcome",
    "IImageDetector",
    "IDetectionStrategy",
]
