"""
Solana client abstraction for blockchain operations.
"""

import asyncio

from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed, Processed
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from pumpfun_sdk.core.exceptions import AccountNotFound, TransportError
from pumpfun_sdk.interfaces.core import ChainClient
from pumpfun_sdk.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_COMPUTE_UNIT_LIMIT = 250_000


class SolanaClient(ChainClient):
    """Abstraction for Solana RPC client operations."""

    def __init__(
        self,
        rpc_endpoint: str,
        commitment: Commitment = Confirmed,
        max_retries: int = 3,
        compute_unit_limit: int = DEFAULT_COMPUTE_UNIT_LIMIT,
    ):
        """Initialize Solana client with RPC endpoint.

        Args:
            rpc_endpoint: URL of the Solana RPC endpoint
            commitment: Commitment used for reads and confirmations
            max_retries: Send attempts before giving up
            compute_unit_limit: Compute unit limit set alongside a priority fee
        """
        self.rpc_endpoint = rpc_endpoint
        self.commitment = commitment
        self.max_retries = max_retries
        self.compute_unit_limit = compute_unit_limit
        self._client: AsyncClient | None = None

    async def __aenter__(self) -> "SolanaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def get_client(self) -> AsyncClient:
        """Get or create the AsyncClient instance.

        Returns:
            AsyncClient instance
        """
        if self._client is None:
            self._client = AsyncClient(self.rpc_endpoint, commitment=self.commitment)
        return self._client

    async def close(self):
        """Close the client connection."""
        if self._client:
            await self._client.close()
            self._client = None

    async def fetch_account_bytes(self, address: Pubkey) -> bytes:
        """Get raw account data from the blockchain.

        Args:
            address: Public key of the account

        Returns:
            Account data bytes

        Raises:
            AccountNotFound: If the account doesn't exist or has no data
            TransportError: If the RPC request fails
        """
        client = await self.get_client()
        try:
            response = await client.get_account_info(address, encoding="base64")
        except (SolanaRpcException, RPCException) as e:
            logger.error(f"Failed to fetch account {address}: {e!s}")
            raise TransportError(f"Failed to fetch account {address}: {e!s}") from e

        if not response.value or not response.value.data:
            raise AccountNotFound(f"Account {address} not found")
        return bytes(response.value.data)

    async def get_token_account_balance(self, token_account: Pubkey) -> int:
        """Get token balance for an account.

        Args:
            token_account: Token account address

        Returns:
            Token balance in base units
        """
        client = await self.get_client()
        try:
            response = await client.get_token_account_balance(token_account)
        except (SolanaRpcException, RPCException) as e:
            raise TransportError(f"Failed to fetch balance of {token_account}: {e!s}") from e
        if response.value:
            return int(response.value.amount)
        return 0

    async def get_latest_blockhash(self) -> Hash:
        """Get the latest blockhash.

        Returns:
            Recent blockhash
        """
        client = await self.get_client()
        try:
            response = await client.get_latest_blockhash(commitment=Processed)
        except (SolanaRpcException, RPCException) as e:
            raise TransportError(f"Failed to fetch latest blockhash: {e!s}") from e
        return response.value.blockhash

    async def build_and_send_transaction(
        self,
        instructions: list[Instruction],
        signers: list[Keypair],
        skip_preflight: bool = True,
        priority_fee: int | None = None,
    ) -> str:
        """
        Sign and send a transaction with optional priority fee.

        Args:
            instructions: List of instructions to include in the transaction.
            signers: Keypairs that sign; the first one pays fees.
            skip_preflight: Whether to skip preflight checks.
            priority_fee: Optional priority fee in microlamports.

        Returns:
            Transaction signature.

        Raises:
            TransportError: If every send attempt fails.
        """
        client = await self.get_client()
        payer = signers[0]

        logger.info(
            f"Priority fee in microlamports: {priority_fee if priority_fee else 0}"
        )

        if priority_fee is not None:
            fee_instructions = [
                set_compute_unit_limit(self.compute_unit_limit),
                set_compute_unit_price(priority_fee),
            ]
            instructions = fee_instructions + instructions

        for attempt in range(self.max_retries):
            try:
                recent_blockhash = await self.get_latest_blockhash()
                message = Message(instructions, payer.pubkey())
                transaction = Transaction(signers, message, recent_blockhash)
                tx_opts = TxOpts(
                    skip_preflight=skip_preflight, preflight_commitment=Processed
                )
                response = await client.send_transaction(transaction, tx_opts)
                return str(response.value)

            except Exception as e:
                if attempt == self.max_retries - 1:
                    logger.error(
                        f"Failed to send transaction after {self.max_retries} attempts"
                    )
                    raise TransportError(f"Failed to send transaction: {e!s}") from e

                wait_time = 2**attempt
                logger.warning(
                    f"Transaction attempt {attempt + 1} failed: {e!s}, retrying in {wait_time}s"
                )
                await asyncio.sleep(wait_time)

        raise TransportError("Transaction was not sent: max_retries is 0")

    async def confirm_transaction(
        self, signature: str, commitment: Commitment | None = None
    ) -> bool:
        """Wait for transaction confirmation.

        Args:
            signature: Transaction signature
            commitment: Confirmation commitment level

        Returns:
            Whether transaction was confirmed
        """
        client = await self.get_client()
        try:
            await client.confirm_transaction(
                Signature.from_string(signature),
                commitment=commitment or self.commitment,
                sleep_seconds=1,
            )
            return True
        except Exception as e:
            logger.error(f"Failed to confirm transaction {signature}: {e!s}")
            return False

