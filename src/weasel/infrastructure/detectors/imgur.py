"""Imgur Detection Strategy - IDetectionStrategy implementation for Imgur.

Hey future me - this is the protocol half of the Imgur detector! State, backoff and error
surfacing live in ResilientImageDetector; this module only talks to Imgur.

SUPPORTED URLS (host must be imgur.com, www., i. or m.):
    /abcd          → single image
    /abcd.png      → single image (extension is stripped)
    /a/abcd        → album
Gallery (/gallery/...) and meme endpoints are NOT supported, they're rare and their APIs
are awful. Trailing slashes and nested paths are rejected.

FLOW:
    probe_state()  → GET {api}/credits       (authenticated)
    album          → GET {api}/album/{id}    (authenticated, costs quota)
    single image   → GET http://i.imgur.com/{id}.jpg  (unauthenticated, headers only!)

Single images deliberately skip the API: the direct-image host answers with the real
Content-Type no matter which extension we guess, so we read the headers, drop the body and
fix the extension up afterwards. Saves quota and bandwidth.
"""

import logging
from collections.abc import Callable
from typing import NamedTuple
from urllib.parse import urlsplit

import httpx

from weasel.application.services.detection.resilient_detector import (
    ResilientImageDetector,
)
from weasel.config.settings import DetectionSettings, ImgurSettings, get_settings
from weasel.domain.exceptions import ConfigurationError
from weasel.domain.ports.image_detector import (
    DetectionOutcome,
    DetectorState,
    IDetectionStrategy,
)
from weasel.domain.value_objects.image_record import (
    ImageFormat,
    ImageRecord,
    format_from_mime_type,
)
from weasel.infrastructure.detectors.imgur_schemas import (
    AlbumResponse,
    CreditsResponse,
    decode_response,
)
from weasel.infrastructure.integrations.http_pool import HttpClientPool

logger = logging.getLogger(__name__)

RATE_LIMIT_HEADER = "X-RateLimit-ClientRemaining"
ALBUM_SEGMENT = "a"
GUESSED_EXTENSION = ImageFormat.JPG.extension


class ResponseClassification(NamedTuple):
    """State implied by a response and whether its body is worth parsing."""

    state: DetectorState
    proceed: bool


def classify_response(response: httpx.Response) -> ResponseClassification:
    """Map any Imgur response onto a detector state.

    | response                        | state        | parse body? |
    |---------------------------------|--------------|-------------|
    | 404                             | GOOD         | no (empty)  |
    | other non-2xx                   | BAD_NETWORK  | no          |
    | 2xx, no rate limit header       | GOOD         | yes         |
    | 2xx, rate limit header == "0"   | RATE_LIMITED | yes         |
    | 2xx, rate limit header nonzero  | GOOD         | yes         |
    """
    if response.status_code == httpx.codes.NOT_FOUND:
        return ResponseClassification(DetectorState.GOOD, proceed=False)
    if not response.is_success:
        return ResponseClassification(DetectorState.BAD_NETWORK, proceed=False)

    remaining = response.headers.get(RATE_LIMIT_HEADER)
    if remaining is not None and remaining.strip() == "0":
        # This response is still honored, only later calls are blocked.
        return ResponseClassification(DetectorState.RATE_LIMITED, proceed=True)
    return ResponseClassification(DetectorState.GOOD, proceed=True)


def _path_segments(url: str) -> list[str] | None:
    try:
        return urlsplit(url).path.split("/")
    except ValueError:
        return None


class ImgurDetectionStrategy(IDetectionStrategy):
    """Imgur implementation of IDetectionStrategy.

    Hey future me - the client id is a static Client-ID credential, no OAuth here.
    Every outbound call gets an explicit timeout so a hung Imgur can't stall callers.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: ImgurSettings,
        request_timeout: float = 10.0,
    ) -> None:
        """Initialize with a transport and Imgur settings.

        Args:
            http_client: Async HTTP client (shared pool or a test double)
            settings: Imgur settings, client_id must be set
            request_timeout: Deadline per outbound request in seconds
        """
        if not settings.is_configured:
            raise ConfigurationError("Imgur client id not configured")
        self._client = http_client
        self._settings = settings
        self._timeout = httpx.Timeout(request_timeout)

    @property
    def service_name(self) -> str:
        return "Imgur"

    # === Acceptance ===

    def can_process(self, url: str) -> bool:
        try:
            host = urlsplit(url).hostname
        except ValueError:
            return False
        if host not in self._settings.hosts:
            return False

        segments = _path_segments(url)
        if not segments or segments[-1] == "":
            return False

        return len(segments) == 2 or (len(segments) == 3 and segments[1] == ALBUM_SEGMENT)

    # === Health ===

    async def probe_state(self) -> DetectorState:
        response = await self._api_get("/credits")
        if not response.is_success:
            logger.debug("Imgur credits check returned %d", response.status_code)
            return DetectorState.BAD_NETWORK

        credits = decode_response(CreditsResponse, response, "/credits")
        if credits.data.client_remaining > 0:
            return DetectorState.GOOD
        return DetectorState.RATE_LIMITED

    # === Detection ===

    async def detect(self, url: str) -> DetectionOutcome:
        segments = _path_segments(url) or [""]
        image_id = segments[-1].split(".")[0]

        if len(segments) > 1 and segments[1] == ALBUM_SEGMENT:
            return await self._detect_album(image_id)
        return await self._detect_single_image(image_id)

    async def _detect_album(self, album_id: str) -> DetectionOutcome:
        endpoint = f"/album/{album_id}"
        response = await self._api_get(endpoint)

        state, proceed = classify_response(response)
        if not proceed:
            logger.debug("Imgur album %s not usable (status %d)", album_id, response.status_code)
            return DetectionOutcome(state=state)

        album = decode_response(AlbumResponse, response, endpoint)
        images = [
            ImageRecord(url=image.link, format=format_from_mime_type(image.mime_type))
            for image in album.data.images
        ]
        logger.debug("Found %d images in Imgur album %s", len(images), album_id)
        return DetectionOutcome(state=state, images=images)

    async def _detect_single_image(self, image_id: str) -> DetectionOutcome:
        url = f"{self._settings.image_base_url}/{image_id}{GUESSED_EXTENSION}"

        # Leaving the stream block closes the connection before the body is read.
        async with self._client.stream(
            "GET", url, timeout=self._timeout, follow_redirects=True
        ) as response:
            state, proceed = classify_response(response)
            content_type = response.headers.get("content-type", "")

        if not proceed:
            logger.debug("Imgur image %s not usable (status %d)", image_id, response.status_code)
            return DetectionOutcome(state=state)

        image_format = format_from_mime_type(content_type)
        if image_format is not ImageFormat.JPG:
            url = url.removesuffix(GUESSED_EXTENSION) + image_format.extension

        return DetectionOutcome(state=state, images=[ImageRecord(url=url, format=image_format)])

    async def _api_get(self, path: str) -> httpx.Response:
        return await self._client.get(
            f"{self._settings.api_base_url}{path}",
            headers={"Authorization": f"Client-ID {self._settings.client_id}"},
            timeout=self._timeout,
        )


async def create_imgur_detector(
    client_id: str | None = None,
    http_client: httpx.AsyncClient | None = None,
    *,
    imgur_settings: ImgurSettings | None = None,
    detection_settings: DetectionSettings | None = None,
    clock: Callable[[], float] | None = None,
) -> ResilientImageDetector:
    """Build an Imgur detector and run its initial health check.

    Args:
        client_id: Imgur API Client ID (overrides imgur_settings.client_id)
        http_client: Transport to use, defaults to the shared HttpClientPool client
        imgur_settings: Imgur settings (defaults to get_settings().imgur)
        detection_settings: Backoff/timeout settings (defaults to get_settings().detection)
        clock: Monotonic time source, only override in tests

    Raises:
        ConfigurationError: If no client id is available

    Example:
        detector = await create_imgur_detector("abc123")
        if detector.can_process(url):
            images = await detector.detect_images(url)
    """
    imgur_settings = imgur_settings or get_settings().imgur
    if client_id is not None:
        imgur_settings = imgur_settings.model_copy(update={"client_id": client_id})
    detection_settings = detection_settings or get_settings().detection

    if http_client is None:
        http_client = await HttpClientPool.get_client()

    strategy = ImgurDetectionStrategy(
        http_client,
        imgur_settings,
        request_timeout=detection_settings.request_timeout_seconds,
    )
    return await ResilientImageDetector.create(
        strategy, settings=detection_settings, clock=clock
    )


__all__ = [
    "ImgurDetectionStrategy",
    "RATE_LIMIT_HEADER",
    "ResponseClassification",
    "classify_response",
    "create_imgur_detector",
]
