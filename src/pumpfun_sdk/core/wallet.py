"""
Wallet management for Solana transactions.
"""

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from pumpfun_sdk.core.pda import derive_associated_token_address


class Wallet:
    """Holds the fee-paying keypair used to sign pump.fun transactions."""

    def __init__(self, private_key: str):
        """Initialize wallet from private key.

        Args:
            private_key: Base58 encoded 64-byte secret key
        """
        self._keypair = self._load_keypair(private_key)

    @classmethod
    def from_keypair(cls, keypair: Keypair) -> "Wallet":
        return cls(base58.b58encode(bytes(keypair)).decode())

    @property
    def pubkey(self) -> Pubkey:
        """Get the public key of the wallet."""
        return self._keypair.pubkey()

    @property
    def keypair(self) -> Keypair:
        """Get the keypair for signing transactions."""
        return self._keypair

    def get_associated_token_address(self, mint: Pubkey) -> Pubkey:
        """Get the associated token account address for a mint.

        Args:
            mint: Token mint address

        Returns:
            Associated token account address
        """
        return derive_associated_token_address(self.pubkey, mint)

    @staticmethod
    def _load_keypair(private_key: str) -> Keypair:
        """Load keypair from private key.

        Args:
            private_key: Base58 encoded private key

        Returns:
            Solana keypair

        Raises:
            ValueError: If the key does not decode to a 64-byte keypair
        """
        private_key_bytes = base58.b58decode(private_key)
        return Keypair.from_bytes(private_key_bytes)
