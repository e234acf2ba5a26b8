"""
Token metadata upload to pump.fun's IPFS endpoint.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import aiohttp

from pumpfun_sdk.core.exceptions import MetadataUploadError
from pumpfun_sdk.utils.logger import get_logger

logger = get_logger(__name__)

IPFS_UPLOAD_URL = "https://pump.fun/api/ipfs"


@dataclass
class CreateTokenMetadata:
    """Metadata supplied when creating a token. Not persisted."""

    name: str
    symbol: str
    description: str
    file: str
    twitter: str | None = None
    telegram: str | None = None
    website: str | None = None


@dataclass
class TokenMetadata:
    """Metadata as stored on IPFS."""

    name: str
    symbol: str
    description: str
    image: str
    show_name: bool
    created_on: str
    twitter: str | None = None
    telegram: str | None = None
    website: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenMetadata":
        return cls(
            name=data["name"],
            symbol=data["symbol"],
            description=data.get("description", ""),
            image=data["image"],
            show_name=bool(data.get("showName", True)),
            created_on=data.get("createdOn", ""),
            twitter=data.get("twitter"),
            telegram=data.get("telegram"),
            website=data.get("website"),
        )


@dataclass
class TokenMetadataResponse:
    """Response of the metadata upload."""

    metadata: TokenMetadata
    metadata_uri: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenMetadataResponse":
        """Create a response from the endpoint's JSON body.

        Raises:
            MetadataUploadError: If required fields are missing
        """
        try:
            return cls(
                metadata=TokenMetadata.from_dict(data["metadata"]),
                metadata_uri=data["metadataUri"],
            )
        except (KeyError, TypeError) as e:
            raise MetadataUploadError(f"Unexpected metadata response: {e!s}") from e


def build_form(metadata: CreateTokenMetadata, image: bytes) -> aiohttp.FormData:
    form = aiohttp.FormData()
    form.add_field("file", image, filename=Path(metadata.file).name)
    form.add_field("name", metadata.name)
    form.add_field("symbol", metadata.symbol)
    form.add_field("description", metadata.description)
    for field in ("twitter", "telegram", "website"):
        value = getattr(metadata, field)
        if value:
            form.add_field(field, value)
    form.add_field("showName", "true")
    return form


async def create_token_metadata(
    metadata: CreateTokenMetadata, url: str = IPFS_UPLOAD_URL
) -> TokenMetadataResponse:
    """Upload token metadata and image to IPFS.

    Args:
        metadata: Metadata to upload
        url: Upload endpoint

    Returns:
        TokenMetadataResponse with the metadata URI

    Raises:
        MetadataUploadError: If the image cannot be read or the upload fails
    """
    try:
        image = Path(metadata.file).read_bytes()
    except OSError as e:
        raise MetadataUploadError(f"Cannot read image {metadata.file}: {e!s}") from e

    try:
        async with aiohttp.ClientSession() as session:
            async with session.post(
                url,
                data=build_form(metadata, image),
                timeout=aiohttp.ClientTimeout(30),
            ) as response:
                response.raise_for_status()
                body = await response.json(content_type=None)
    except (aiohttp.ClientError, TimeoutError) as e:
        logger.error(f"Metadata upload failed: {e!s}")
        raise MetadataUploadError(f"Metadata upload failed: {e!s}") from e
    except json.JSONDecodeError as e:
        logger.error(f"Failed to decode metadata response: {e!s}")
        raise MetadataUploadError(f"Failed to decode metadata response: {e!s}") from e

    result = TokenMetadataResponse.from_dict(body)
    logger.info(f"Uploaded metadata for {metadata.symbol}: {result.metadata_uri}")
    return result
