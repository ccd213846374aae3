"""Domain exceptions."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from weasel.domain.ports.image_detector import DetectorState


class WeaselException(Exception):
    """Base exception for all weasel exceptions."""

    # Hey future me, message is stored as an attribute so callers can inspect it without
    # parsing str(exception). Never raise this directly - use a specific subclass so callers
    # can catch precisely.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class UnsupportedUrlError(WeaselException, ValueError):
    """The detector cannot process the given URL.

    Raised before any network activity; has no effect on detector state.
    Also a ValueError, so generic argument handling still catches it.
    """

    def __init__(self, url: str, service_name: str | None = None) -> None:
        if service_name:
            message = f"{service_name} cannot process URL {url!r}"
        else:
            message = f"No detector can process URL {url!r}"
        super().__init__(message)
        self.url = url
        self.service_name = service_name


class InvalidStateException(WeaselException):
    """The detector is not in a state that allows the requested operation.

    Example: calling detect_images() while the detector is rate limited.
    Raised locally, no network call is made.
    """

    pass


class ImageDetectionError(WeaselException):
    """A detection attempt left the detector in a degraded state.

    Hey future me - this is the ONLY error that crosses the detection boundary for
    network-caused failures. It is raised even when the adapter already produced
    partial results, because those results can't be trusted.
    """

    def __init__(self, state: "DetectorState") -> None:
        super().__init__(f"Detector in bad state ({state.value})")
        self.state = state


class UnsupportedFormatError(WeaselException):
    """A declared MIME type (or response body) can't be classified.

    Raising this forces the detector into Broken so we fail fast instead of
    repeating the same bad interpretation.
    """

    def __init__(self, message: str, mime_type: str | None = None) -> None:
        super().__init__(message)
        self.mime_type = mime_type


class ResponseParseError(UnsupportedFormatError):
    """A response body did not match the expected schema."""

    def __init__(self, endpoint: str, reason: str) -> None:
        super().__init__(f"Unexpected response body from {endpoint}: {reason}")
        self.endpoint = endpoint
        self.reason = reason


class ConfigurationError(WeaselException):
    """Required configuration is missing or invalid.

    Example:
        raise ConfigurationError("Imgur client id not configured")
    """

    pass


__all__ = [
    "WeaselException",
    "UnsupportedUrlError",
    "InvalidStateException",
    "ImageDetectionError",
    "UnsupportedFormatError",
    "ResponseParseError",
    "ConfigurationError",
]
