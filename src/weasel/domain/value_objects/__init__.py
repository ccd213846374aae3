"""Domain value objects."""

from weasel.domain.value_objects.image_record import (
    MIME_FORMAT_MAPPING,
    ImageFormat,
    ImageRecord,
    format_from_mime_type,
)

__all__ = [
    "ImageFormat",
    "ImageRecord",
    "MIME_FORMAT_MAPPING",
    "format_from_mime_type",
]
