"""
Pump.Fun instruction builder.

Encodes create, buy and sell instructions. Amounts arrive already priced and
bounded; this module only lays out accounts and bytes in the order the
program's IDL declares them.
"""

import struct

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from spl.token.instructions import create_idempotent_associated_token_account

from pumpfun_sdk.core.curve_math import to_u64
from pumpfun_sdk.core.pubkeys import (
    BUY_DISCRIMINATOR,
    CREATE_DISCRIMINATOR,
    SELL_DISCRIMINATOR,
    SystemAddresses,
)
from pumpfun_sdk.platforms.pumpfun.address_provider import PumpFunAddressProvider
from pumpfun_sdk.utils.logger import get_logger

logger = get_logger(__name__)


def encode_string(value: str) -> bytes:
    """Borsh string: u32 little-endian byte length followed by UTF-8 bytes."""
    encoded = value.encode("utf-8")
    return struct.pack("<I", len(encoded)) + encoded


class PumpFunInstructionBuilder:
    """Builds pump.fun program instructions."""

    def __init__(self, address_provider: PumpFunAddressProvider | None = None):
        """Initialize the builder.

        Args:
            address_provider: Provider for derived accounts
        """
        self.address_provider = address_provider or PumpFunAddressProvider()

    def build_create_instruction(
        self,
        mint: Pubkey,
        user: Pubkey,
        name: str,
        symbol: str,
        uri: str,
    ) -> Instruction:
        """Build the instruction that creates a token and its bonding curve.

        Args:
            mint: New mint address (must sign)
            user: Creator and fee payer (must sign)
            name: Token name
            symbol: Token symbol
            uri: Metadata URI

        Returns:
            Create instruction
        """
        accounts_info = self.address_provider.get_create_instruction_accounts(mint, user)

        accounts = [
            AccountMeta(pubkey=accounts_info["mint"], is_signer=True, is_writable=True),
            AccountMeta(pubkey=accounts_info["mint_authority"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["bonding_curve"], is_signer=False, is_writable=True),
            AccountMeta(pubkey=accounts_info["associated_bonding_curve"], is_signer=False, is_writable=True),
            AccountMeta(pubkey=accounts_info["global"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["mpl_token_metadata"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["metadata"], is_signer=False, is_writable=True),
            AccountMeta(pubkey=accounts_info["user"], is_signer=True, is_writable=True),
            AccountMeta(pubkey=accounts_info["system_program"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["token_program"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["associated_token_program"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["rent"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["event_authority"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["program"], is_signer=False, is_writable=False),
        ]

        data = (
            CREATE_DISCRIMINATOR
            + encode_string(name)
            + encode_string(symbol)
            + encode_string(uri)
        )

        logger.info(f"Built create instruction for {symbol} (mint {mint})")
        return Instruction(accounts_info["program"], data, accounts)

    def build_buy_instructions(
        self,
        mint: Pubkey,
        user: Pubkey,
        fee_recipient: Pubkey,
        token_amount: int,
        max_sol_cost: int,
    ) -> list[Instruction]:
        """Build the instructions for a buy.

        The user's token account is created idempotently first, so the buy
        works whether or not the account already exists.

        Args:
            mint: Token mint address
            user: Buyer's wallet address
            fee_recipient: Fee recipient from the global account
            token_amount: Tokens to buy (raw units)
            max_sol_cost: Most lamports the program may charge

        Returns:
            Instructions in execution order
        """
        accounts_info = self.address_provider.get_buy_instruction_accounts(
            mint, user, fee_recipient
        )

        idempotent_ata_ix = create_idempotent_associated_token_account(
            user,
            user,
            mint,
            SystemAddresses.TOKEN_PROGRAM,
        )

        accounts = [
            AccountMeta(pubkey=accounts_info["global"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["fee_recipient"], is_signer=False, is_writable=True),
            AccountMeta(pubkey=accounts_info["mint"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["bonding_curve"], is_signer=False, is_writable=True),
            AccountMeta(pubkey=accounts_info["associated_bonding_curve"], is_signer=False, is_writable=True),
            AccountMeta(pubkey=accounts_info["associated_user"], is_signer=False, is_writable=True),
            AccountMeta(pubkey=accounts_info["user"], is_signer=True, is_writable=True),
            AccountMeta(pubkey=accounts_info["system_program"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["token_program"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["rent"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["event_authority"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["program"], is_signer=False, is_writable=False),
        ]

        data = (
            BUY_DISCRIMINATOR
            + struct.pack("<Q", to_u64(token_amount, "token_amount"))
            + struct.pack("<Q", to_u64(max_sol_cost, "max_sol_cost"))
        )

        buy_ix = Instruction(accounts_info["program"], data, accounts)
        return [idempotent_ata_ix, buy_ix]

    def build_sell_instruction(
        self,
        mint: Pubkey,
        user: Pubkey,
        fee_recipient: Pubkey,
        token_amount: int,
        min_sol_output: int,
    ) -> Instruction:
        """Build the sell instruction.

        Args:
            mint: Token mint address
            user: Seller's wallet address
            fee_recipient: Fee recipient from the global account
            token_amount: Tokens to sell (raw units)
            min_sol_output: Fewest lamports the seller accepts

        Returns:
            Sell instruction
        """
        accounts_info = self.address_provider.get_sell_instruction_accounts(
            mint, user, fee_recipient
        )

        accounts = [
            AccountMeta(pubkey=accounts_info["global"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["fee_recipient"], is_signer=False, is_writable=True),
            AccountMeta(pubkey=accounts_info["mint"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["bonding_curve"], is_signer=False, is_writable=True),
            AccountMeta(pubkey=accounts_info["associated_bonding_curve"], is_signer=False, is_writable=True),
            AccountMeta(pubkey=accounts_info["associated_user"], is_signer=False, is_writable=True),
            AccountMeta(pubkey=accounts_info["user"], is_signer=True, is_writable=True),
            AccountMeta(pubkey=accounts_info["system_program"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["associated_token_program"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["token_program"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["event_authority"], is_signer=False, is_writable=False),
            AccountMeta(pubkey=accounts_info["program"], is_signer=False, is_writable=False),
        ]

        data = (
            SELL_DISCRIMINATOR
            + struct.pack("<Q", to_u64(token_amount, "token_amount"))
            + struct.pack("<Q", to_u64(min_sol_output, "min_sol_output"))
        )

        return Instruction(accounts_info["program"], data, accounts)

