"""Resilient image detector - state tracking and backoff around any detection strategy.

Hey future me - this is the ONE place that owns detector state!

FLOW for detect_images(url):
    1. can_process(url)?           no → UnsupportedUrlError      (no I/O)
    2. state == GOOD?              no → InvalidStateException    (no I/O)
    3. strategy.detect(url)        → DetectionOutcome(state, images)
    4. state BAD_NETWORK/BROKEN?   yes → ImageDetectionError(state), images are dropped
                                   no  → return images (also when RATE_LIMITED!)

FLOW for check_state():
    inside backoff window → cached state, no I/O
    otherwise             → strategy.probe_state(), any exception → BROKEN,
                            backoff advances exactly once

Every public coroutine runs under a per-instance asyncio.Lock, so health checks and
detections on one detector never interleave. Different detectors run fully in parallel.
"""

import asyncio
import logging
from collections.abc import Callable

from weasel.application.services.detection.backoff import BackoffSchedule
from weasel.config.settings import DetectionSettings
from weasel.domain.exceptions import (
    ImageDetectionError,
    InvalidStateException,
    UnsupportedFormatError,
    UnsupportedUrlError,
)
from weasel.domain.ports.image_detector import (
    DetectorState,
    IDetectionStrategy,
    IImageDetector,
)
from weasel.domain.value_objects.image_record import ImageRecord

logger = logging.getLogger(__name__)

_FAILED_STATES = frozenset({DetectorState.BAD_NETWORK, DetectorState.BROKEN})


class ResilientImageDetector(IImageDetector):
    """IImageDetector that wraps a protocol-specific IDetectionStrategy.

    Hey future me - a freshly constructed detector is BAD_NETWORK until its first
    health check ran. Use create() which performs that check for you.
    """

    def __init__(
        self,
        strategy: IDetectionStrategy,
        settings: DetectionSettings | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize without checking state.

        Args:
            strategy: Protocol adapter doing the actual network work
            settings: Backoff configuration (defaults from environment)
            clock: Monotonic time source, only override in tests
        """
        self._strategy = strategy
        self._settings = settings or DetectionSettings()
        backoff_kwargs = {} if clock is None else {"clock": clock}
        self._backoff = BackoffSchedule(
            initial_delay=self._settings.initial_backoff_seconds,
            max_delay=self._settings.max_backoff_seconds,
            **backoff_kwargs,
        )
        self._state = DetectorState.BAD_NETWORK
        self._lock = asyncio.Lock()

    @classmethod
    async def create(
        cls,
        strategy: IDetectionStrategy,
        settings: DetectionSettings | None = None,
        clock: Callable[[], float] | None = None,
    ) -> "ResilientImageDetector":
        """Build the detector and run the initial health check."""
        detector = cls(strategy, settings=settings, clock=clock)
        await detector.check_state()
        return detector

    # === Properties ===

    @property
    def state(self) -> DetectorState:
        return self._state

    @property
    def service_name(self) -> str:
        return self._strategy.service_name

    @property
    def strategy(self) -> IDetectionStrategy:
        return self._strategy

    @property
    def backoff(self) -> BackoffSchedule:
        """Read-only view for monitoring. Don't mutate it from outside."""
        return self._backoff

    # === Contract ===

    def can_process(self, url: str) -> bool:
        return self._strategy.can_process(url)

    async def check_state(self) -> DetectorState:
        async with self._lock:
            return await self._check_state_locked()

    async def detect_images(self, url: str) -> list[ImageRecord]:
        if not self.can_process(url):
            raise UnsupportedUrlError(url, self.service_name)

        async with self._lock:
            if self._state is not DetectorState.GOOD:
                raise InvalidStateException(
                    f"{self.service_name} detector is in an invalid state "
                    f"({self._state.value})"
                )

            images = await self._run_strategy(url)

            if self._state in _FAILED_STATES:
                raise ImageDetectionError(self._state)
            return images

    # === Internals ===

    async def _check_state_locked(self) -> DetectorState:
        if self._settings.broken_is_permanent and self._state is DetectorState.BROKEN:
            return self._state

        if self._backoff.in_window():
            logger.debug(
                "Skipping state check for %s, inside backoff window (%.3fs)",
                self.service_name,
                self._backoff.delay,
            )
            return self._state

        logger.debug("Checking state for %s", self.service_name)
        self._backoff.mark_checked()

        try:
            new_state = await self._strategy.probe_state()
        except Exception:
            # Probe faults never propagate past this point.
            logger.exception("Exception occurred while checking state of %s", self.service_name)
            new_state = DetectorState.BROKEN

        self._set_state(new_state)
        delay = self._backoff.advance(new_state)

        if new_state is DetectorState.GOOD:
            logger.debug("State of %s is good", self.service_name)
        else:
            logger.warning(
                "Bad state for %s: %s (next check in %.3fs)",
                self.service_name,
                new_state.value,
                delay,
            )
        return new_state

    async def _run_strategy(self, url: str) -> list[ImageRecord]:
        lenient = self._settings.broken_is_permanent
        try:
            outcome = await self._strategy.detect(url)
        except UnsupportedFormatError as e:
            logger.error("%s returned data we can't classify: %s", self.service_name, e.message)
            self._set_state(DetectorState.BROKEN)
            if not lenient:
                raise
            return []
        except Exception:
            if not lenient:
                raise
            logger.exception("Exception occurred while detecting images for %s", url)
            return []

        self._set_state(outcome.state)
        return outcome.images

    def _set_state(self, new_state: DetectorState) -> None:
        if new_state is not self._state:
            logger.info(
                "%s detector state changed: %s -> %s",
                self.service_name,
                self._state.value,
                new_state.value,
                extra={"service": self.service_name, "state": new_state.value},
            )
        self._state = new_state


__all__ = ["ResilientImageDetector"]
