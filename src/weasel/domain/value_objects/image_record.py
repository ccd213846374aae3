"""Image record value object and MIME type classification."""

from dataclasses import dataclass
from enum import Enum

from weasel.domain.exceptions import UnsupportedFormatError


class ImageFormat(str, Enum):
    """Pixel format of a detected image."""

    GIF = "gif"
    JPG = "jpg"
    PNG = "png"

    @property
    def extension(self) -> str:
        """File extension including the dot (e.g. ".png")."""
        return f".{self.value}"


# Hey future me - both "image/jpeg" and "image/jpg" show up in the wild. The API reports
# "image/jpeg" in headers but some album payloads still say "image/jpg".
MIME_FORMAT_MAPPING: dict[str, ImageFormat] = {
    "image/gif": ImageFormat.GIF,
    "image/jpeg": ImageFormat.JPG,
    "image/jpg": ImageFormat.JPG,
    "image/png": ImageFormat.PNG,
}


def format_from_mime_type(mime_type: str) -> ImageFormat:
    """Classify a declared MIME type.

    Parameters like "; charset=..." are ignored and matching is case-insensitive.

    Raises:
        UnsupportedFormatError: If the type is not one of the known image formats
    """
    media_type = mime_type.split(";", 1)[0].strip().lower()
    image_format = MIME_FORMAT_MAPPING.get(media_type)
    if image_format is None:
        raise UnsupportedFormatError(
            f'Unknown MIME type "{mime_type}"', mime_type=mime_type
        )
    return image_format


@dataclass(frozen=True)
class ImageRecord:
    """Direct URL of an image plus its format.

    Immutable (frozen) - a snapshot of what the detector discovered.
    """

    url: str
    format: ImageFormat

    @classmethod
    def from_mime_type(cls, url: str, mime_type: str) -> "ImageRecord":
        """Build a record, classifying the format from a MIME type."""
        return cls(url=url, format=format_from_mime_type(mime_type))

    def __str__(self) -> str:
        return f"{self.url} ({self.format.name.capitalize()})"


__all__ = [
    "ImageFormat",
    "ImageRecord",
    "MIME_FORMAT_MAPPING",
    "format_from_mime_type",
]
