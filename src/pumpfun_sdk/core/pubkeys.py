"""
Addresses, seeds and constants for the pump.fun program.
System-level programs are shared with every Solana client; the pump.fun
addresses and PDA seeds are fixed by the on-chain program.
"""

import struct
from typing import Final

from solders.pubkey import Pubkey

# Constants
LAMPORTS_PER_SOL: Final[int] = 1_000_000_000
TOKEN_DECIMALS: Final[int] = 6
BPS_DENOMINATOR: Final[int] = 10_000
DEFAULT_FEE_BASIS_POINTS: Final[int] = 100
DEFAULT_SLIPPAGE_BASIS_POINTS: Final[int] = 500

U64_MAX: Final[int] = 2**64 - 1
U128_MAX: Final[int] = 2**128 - 1

# PDA limits
MAX_SEEDS: Final[int] = 16
MAX_SEED_LEN: Final[int] = 32

# Seeds
GLOBAL_SEED: Final[bytes] = b"global"
MINT_AUTHORITY_SEED: Final[bytes] = b"mint-authority"
BONDING_CURVE_SEED: Final[bytes] = b"bonding-curve"
METADATA_SEED: Final[bytes] = b"metadata"
EVENT_AUTHORITY_SEED: Final[bytes] = b"__event_authority"

# Instruction discriminators (first 8 bytes of sha256("global:<name>"))
CREATE_DISCRIMINATOR: Final[bytes] = struct.pack("<Q", 8576854823835016728)
BUY_DISCRIMINATOR: Final[bytes] = struct.pack("<Q", 16927863322537952870)
SELL_DISCRIMINATOR: Final[bytes] = struct.pack("<Q", 12502976635542562355)

# Core system programs
SYSTEM_PROGRAM: Final[Pubkey] = Pubkey.from_string("11111111111111111111111111111111")
TOKEN_PROGRAM: Final[Pubkey] = Pubkey.from_string(
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
)
ASSOCIATED_TOKEN_PROGRAM: Final[Pubkey] = Pubkey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)
MPL_TOKEN_METADATA: Final[Pubkey] = Pubkey.from_string(
    "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"
)

# System accounts
RENT: Final[Pubkey] = Pubkey.from_string(
    "SysvarRent111111111111111111111111111111111"
)


class SystemAddresses:
    """System-level Solana addresses used by pump.fun instructions."""

    SYSTEM_PROGRAM = SYSTEM_PROGRAM
    TOKEN_PROGRAM = TOKEN_PROGRAM
    ASSOCIATED_TOKEN_PROGRAM = ASSOCIATED_TOKEN_PROGRAM
    MPL_TOKEN_METADATA = MPL_TOKEN_METADATA
    RENT = RENT

    @classmethod
    def get_all_system_addresses(cls) -> dict[str, Pubkey]:
        """Get all system addresses as a dictionary.

        Returns:
            Dictionary mapping address names to Pubkey objects
        """
        return {
            "system_program": cls.SYSTEM_PROGRAM,
            "token_program": cls.TOKEN_PROGRAM,
            "associated_token_program": cls.ASSOCIATED_TOKEN_PROGRAM,
            "mpl_token_metadata": cls.MPL_TOKEN_METADATA,
            "rent": cls.RENT,
        }


class PumpFunAddresses:
    """Pump.fun program addresses."""

    PROGRAM: Final[Pubkey] = Pubkey.from_string(
        "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P"
    )
    GLOBAL: Final[Pubkey] = Pubkey.from_string(
        "4wTV1YmiEkRvAtNtsSGPtUrqRYQMe5SKy2uB4Jjaxnjf"
    )
    EVENT_AUTHORITY: Final[Pubkey] = Pubkey.from_string(
        "Ce6TQqeHC9p8KetsN6JsjHK7UTZk7nasjjnr7XxXp9F1"
    )