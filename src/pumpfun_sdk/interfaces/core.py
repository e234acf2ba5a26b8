"""
Core interfaces between the SDK and its collaborators.

The pricing and derivation core never talks to the network. Everything that
does goes through ChainClient, which the facade receives by injection so it
can be swapped for an in-memory implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey


@dataclass(frozen=True)
class TokenAccounts:
    """Derived accounts for a pump.fun token."""

    mint: Pubkey
    bonding_curve: Pubkey
    associated_bonding_curve: Pubkey


class ChainClient(ABC):
    """Abstract interface for blockchain reads and transaction submission."""

    @abstractmethod
    async def fetch_account_bytes(self, address: Pubkey) -> bytes:
        """Fetch raw account data.

        Args:
            address: Account address

        Returns:
            Account data bytes

        Raises:
            AccountNotFound: If the account does not exist
            TransportError: If the request fails
        """
        pass

    @abstractmethod
    async def build_and_send_transaction(
        self,
        instructions: list[Instruction],
        signers: list[Keypair],
        skip_preflight: bool = True,
        priority_fee: int | None = None,
    ) -> str:
        """Sign, serialize and submit a transaction.

        Args:
            instructions: Instructions in execution order
            signers: Signing keypairs, fee payer first
            skip_preflight: Whether to skip preflight simulation
            priority_fee: Optional priority fee in microlamports

        Returns:
            Transaction signature

        Raises:
            TransportError: If submission fails
        """
        pass

    @abstractmethod
    async def confirm_transaction(self, signature: str) -> bool:
        """Wait for a transaction to confirm.

        Returns:
            Whether the transaction was confirmed
        """
        pass
