"""Response schemas for the Imgur API v3.

Only the fields we actually read are declared; everything else Imgur sends is ignored.
"""

from typing import TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from weasel.domain.exceptions import ResponseParseError


class _ImgurModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class CreditsData(_ImgurModel):
    client_remaining: int = Field(alias="ClientRemaining")
    client_limit: int | None = Field(default=None, alias="ClientLimit")


class CreditsResponse(_ImgurModel):
    """Body of GET /3/credits."""

    data: CreditsData
    success: bool = True
    status: int = 200


class AlbumImage(_ImgurModel):
    link: str
    mime_type: str = Field(alias="type")


class AlbumData(_ImgurModel):
    images: list[AlbumImage]


class AlbumResponse(_ImgurModel):
    """Body of GET /3/album/{id}."""

    data: AlbumData


ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_response(model: type[ModelT], response: httpx.Response, endpoint: str) -> ModelT:
    """Decode a JSON response body into a schema.

    Raises:
        ResponseParseError: Body is not JSON or doesn't match the schema
    """
    try:
        return model.model_validate_json(response.content)
    except ValidationError as e:
        raise ResponseParseError(endpoint, f"{e.error_count()} validation error(s)") from e


__all__ = [
    "AlbumData",
    "AlbumImage",
    "AlbumResponse",
    "CreditsData",
    "CreditsResponse",
    "decode_response",
]
