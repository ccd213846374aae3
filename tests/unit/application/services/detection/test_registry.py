"""Tests for ImageDetectorRegistry."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from weasel.application.services.detection.registry import ImageDetectorRegistry
from weasel.domain.exceptions import InvalidStateException, UnsupportedUrlError
from weasel.domain.ports.image_detector import DetectorState, IImageDetector
from weasel.domain.value_objects.image_record import ImageFormat, ImageRecord

URL = "https://imgur.com/abcd"


def make_detector(name: str, state: DetectorState, accepts: bool = True) -> MagicMock:
    detector = MagicMock(spec=IImageDetector)
    detector.service_name = name
    detector.state = state
    detector.can_process.return_value = accepts
    detector.check_state = AsyncMock(return_value=state)
    detector.detect_images = AsyncMock(
        return_value=[ImageRecord(f"https://{name}.example/x.png", ImageFormat.PNG)]
    )
    return detector


class TestRegistration:
    """Test register/unregister bookkeeping."""

    def test_detectors_sorted_by_priority(self):
        registry = ImageDetectorRegistry()
        low = make_detector("Low", DetectorState.GOOD)
        high = make_detector("High", DetectorState.GOOD)

        registry.register(low, priority=20)
        registry.register(high, priority=1)

        assert registry.detectors == [high, low]

    def test_same_name_replaces(self):
        registry = ImageDetectorRegistry()
        first = make_detector("Imgur", DetectorState.GOOD)
        second = make_detector("Imgur", DetectorState.GOOD)

        registry.register(first)
        registry.register(second)

        assert registry.detectors == [second]

    def test_unregister(self):
        registry = ImageDetectorRegistry()
        registry.register(make_detector("Imgur", DetectorState.GOOD))

        assert registry.unregister("Imgur") is True
        assert registry.unregister("Imgur") is False
        assert registry.detectors == []

    def test_can_process(self):
        registry = ImageDetectorRegistry()
        registry.register(make_detector("A", DetectorState.GOOD, accepts=False))
        assert registry.can_process(URL) is False

        registry.register(make_detector("B", DetectorState.GOOD, accepts=True))
        assert registry.can_process(URL) is True


class TestDetection:
    """Test detector selection and fallback."""

    async def test_uses_first_good_detector(self):
        registry = ImageDetectorRegistry()
        limited = make_detector("Limited", DetectorState.RATE_LIMITED)
        good = make_detector("Good", DetectorState.GOOD)
        registry.register(limited, priority=1)
        registry.register(good, priority=2)

        images = await registry.detect_images(URL)

        assert images[0].url == "https://Good.example/x.png"
        limited.detect_images.assert_not_called()
        good.detect_images.assert_awaited_once_with(URL)

    async def test_skips_detectors_that_do_not_accept(self):
        registry = ImageDetectorRegistry()
        other = make_detector("Other", DetectorState.GOOD, accepts=False)
        registry.register(other, priority=1)
        registry.register(make_detector("Imgur", DetectorState.GOOD), priority=2)

        detector = await registry.find_detector(URL)

        assert detector.service_name == "Imgur"
        other.check_state.assert_not_called()

    async def test_no_accepting_detector(self):
        registry = ImageDetectorRegistry()
        registry.register(make_detector("Other", DetectorState.GOOD, accepts=False))

        with pytest.raises(UnsupportedUrlError):
            await registry.detect_images(URL)

    async def test_all_accepting_detectors_degraded(self):
        registry = ImageDetectorRegistry()
        registry.register(make_detector("A", DetectorState.BAD_NETWORK))
        registry.register(make_detector("B", DetectorState.BROKEN))

        assert await registry.find_detector(URL) is None
        with pytest.raises(InvalidStateException):
            await registry.detect_images(URL)

    async def test_check_all(self):
        registry = ImageDetectorRegistry()
        registry.register(make_detector("A", DetectorState.GOOD))
        registry.register(make_detector("B", DetectorState.RATE_LIMITED))

        assert await registry.check_all() == {
            "A": DetectorState.GOOD,
            "B": DetectorState.RATE_LIMITED,
        }
