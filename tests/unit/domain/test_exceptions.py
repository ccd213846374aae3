"""Tests for domain exceptions."""

import pytest

from weasel.domain.exceptions import (
    ImageDetectionError,
    InvalidStateException,
    ResponseParseError,
    UnsupportedFormatError,
    UnsupportedUrlError,
    WeaselException,
)
from weasel.domain.ports.image_detector import DetectorState


class TestExceptions:
    """Test exception hierarchy and messages."""

    def test_unsupported_url_is_value_error(self):
        error = UnsupportedUrlError("https://example.com/x", "Imgur")
        assert isinstance(error, ValueError)
        assert isinstance(error, WeaselException)
        assert error.url == "https://example.com/x"
        assert "Imgur" in error.message

    def test_unsupported_url_without_service(self):
        error = UnsupportedUrlError("https://example.com/x")
        assert error.service_name is None
        assert error.message.startswith("No detector")

    @pytest.mark.parametrize("state", [DetectorState.BAD_NETWORK, DetectorState.BROKEN])
    def test_image_detection_error_carries_state(self, state):
        error = ImageDetectionError(state)
        assert error.state is state
        assert state.value in str(error)

    def test_response_parse_error_is_unsupported_format(self):
        error = ResponseParseError("/credits", "1 validation error(s)")
        assert isinstance(error, UnsupportedFormatError)
        assert error.endpoint == "/credits"
        assert "/credits" in error.message

    def test_invalid_state_keeps_message(self):
        error = InvalidStateException("Imgur detector is in an invalid state")
        assert error.message == "Imgur detector is in an invalid state"


class TestDetectorState:
    """Test DetectorState helpers."""

    def test_only_good_is_not_degraded(self):
        assert DetectorState.GOOD.is_degraded is False
        assert all(
            state.is_degraded for state in DetectorState if state is not DetectorState.GOOD
        )
