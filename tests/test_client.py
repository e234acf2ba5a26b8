"""Tests for the Solana RPC client wrapper with a mocked AsyncClient."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from solana.rpc.core import RPCException
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer

from pumpfun_sdk.core.client import SolanaClient
from pumpfun_sdk.core.exceptions import AccountNotFound, TransportError


def mocked_client(max_retries: int = 1) -> tuple[SolanaClient, AsyncMock]:
    client = SolanaClient("https://rpc.example.com", max_retries=max_retries)
    rpc = AsyncMock()
    rpc.get_latest_blockhash.return_value = SimpleNamespace(
        value=SimpleNamespace(blockhash=Hash.default())
    )
    client._client = rpc
    return client, rpc


def transfer_ix(payer: Keypair):
    return transfer(
        TransferParams(from_pubkey=payer.pubkey(), to_pubkey=Pubkey.new_unique(), lamports=1)
    )


class TestFetchAccountBytes:
    @pytest.mark.asyncio
    async def test_returns_data(self) -> None:
        client, rpc = mocked_client()
        rpc.get_account_info.return_value = SimpleNamespace(value=SimpleNamespace(data=b"\x01\x02"))
        assert await client.fetch_account_bytes(Pubkey.new_unique()) == b"\x01\x02"

    @pytest.mark.asyncio
    async def test_missing_account(self) -> None:
        client, rpc = mocked_client()
        rpc.get_account_info.return_value = SimpleNamespace(value=None)
        with pytest.raises(AccountNotFound):
            await client.fetch_account_bytes(Pubkey.new_unique())

    @pytest.mark.asyncio
    async def test_rpc_failure(self) -> None:
        client, rpc = mocked_client()
        rpc.get_account_info.side_effect = RPCException("node down")
        with pytest.raises(TransportError, match="node down"):
            await client.fetch_account_bytes(Pubkey.new_unique())


class TestBuildAndSendTransaction:
    @pytest.mark.asyncio
    async def test_signature_returned(self) -> None:
        client, rpc = mocked_client()
        payer = Keypair()
        rpc.send_transaction.return_value = SimpleNamespace(value=Signature.default())

        signature = await client.build_and_send_transaction([transfer_ix(payer)], [payer])

        assert signature == str(Signature.default())
        transaction = rpc.send_transaction.call_args.args[0]
        assert len(transaction.message.instructions) == 1

    @pytest.mark.asyncio
    async def test_priority_fee_prepends_budget(self) -> None:
        client, rpc = mocked_client()
        payer = Keypair()
        rpc.send_transaction.return_value = SimpleNamespace(value=Signature.default())

        await client.build_and_send_transaction([transfer_ix(payer)], [payer], priority_fee=1_000)

        transaction = rpc.send_transaction.call_args.args[0]
        assert len(transaction.message.instructions) == 3

    @pytest.mark.asyncio
    async def test_gives_up_with_transport_error(self) -> None:
        client, rpc = mocked_client(max_retries=1)
        payer = Keypair()
        rpc.send_transaction.side_effect = RPCException("blockhash not found")

        with pytest.raises(TransportError, match="blockhash not found"):
            await client.build_and_send_transaction([transfer_ix(payer)], [payer])
        assert rpc.send_transaction.await_count == 1

    @pytest.mark.asyncio
    async def test_no_attempts(self) -> None:
        client, _ = mocked_client(max_retries=0)
        payer = Keypair()
        with pytest.raises(TransportError):
            await client.build_and_send_transaction([transfer_ix(payer)], [payer])


class TestClose:
    @pytest.mark.asyncio
    async def test_close_releases_client(self) -> None:
        client, rpc = mocked_client()
        await client.close()
        rpc.close.assert_awaited_once()
        assert client._client is None
