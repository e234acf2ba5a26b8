"""Tests for token metadata upload helpers."""

import aiohttp
import pytest

from pumpfun_sdk.core.exceptions import MetadataUploadError, TransportError
from pumpfun_sdk.utils.metadata import (
    CreateTokenMetadata,
    TokenMetadataResponse,
    create_token_metadata,
)

RESPONSE = {
    "metadata": {
        "name": "Test",
        "symbol": "TST",
        "description": "test token",
        "image": "https://ipfs.io/ipfs/image",
        "showName": True,
        "createdOn": "https://pump.fun",
        "twitter": "https://x.com/test",
    },
    "metadataUri": "https://ipfs.io/ipfs/metadata",
}


class TestTokenMetadataResponse:
    def test_from_dict(self) -> None:
        response = TokenMetadataResponse.from_dict(RESPONSE)
        assert response.metadata_uri == "https://ipfs.io/ipfs/metadata"
        assert response.metadata.symbol == "TST"
        assert response.metadata.show_name is True
        assert response.metadata.twitter == "https://x.com/test"
        assert response.metadata.website is None

    def test_missing_uri(self) -> None:
        with pytest.raises(MetadataUploadError):
            TokenMetadataResponse.from_dict({"metadata": RESPONSE["metadata"]})


class TestCreateTokenMetadata:
    @pytest.mark.asyncio
    async def test_unreadable_image(self, tmp_path) -> None:
        metadata = CreateTokenMetadata(
            name="Test",
            symbol="TST",
            description="test token",
            file=str(tmp_path / "missing.png"),
        )
        with pytest.raises(MetadataUploadError) as excinfo:
            await create_token_metadata(metadata)
        assert isinstance(excinfo.value, TransportError)

    @pytest.mark.asyncio
    async def test_timeout_is_wrapped(self, tmp_path, monkeypatch) -> None:
        image = tmp_path / "logo.png"
        image.write_bytes(b"\x89PNG")

        class StalledResponse:
            async def __aenter__(self):
                raise TimeoutError()

            async def __aexit__(self, *exc_info):
                return False

        class StalledSession:
            async def __aenter__(self):
                return self

            async def __aexit__(self, *exc_info):
                return False

            def post(self, *args, **kwargs):
                return StalledResponse()

        monkeypatch.setattr(aiohttp, "ClientSession", StalledSession)
        metadata = CreateTokenMetadata(
            name="Test", symbol="TST", description="test token", file=str(image)
        )
        with pytest.raises(MetadataUploadError, match="upload failed"):
            await create_token_metadata(metadata)
