"""Shared fixtures."""

import pytest

from weasel.config.settings import DetectionSettings, ImgurSettings
from weasel.infrastructure.observability.logging import set_logging_enabled


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def detection_settings() -> DetectionSettings:
    return DetectionSettings(
        initial_backoff_seconds=0.002,
        max_backoff_seconds=600.0,
        request_timeout_seconds=5.0,
        broken_is_permanent=False,
    )


@pytest.fixture
def imgur_settings() -> ImgurSettings:
    return ImgurSettings(client_id="abc")


@pytest.fixture(autouse=True)
def _logging_enabled():
    """Make sure no test leaks a disabled logging switch into the next one."""
    yield
    set_logging_enabled(True)
