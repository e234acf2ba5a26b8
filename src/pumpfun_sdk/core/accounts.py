"""
Typed views over pump.fun account data.

Both accounts are Anchor accounts: an 8-byte discriminator followed by the
borsh-encoded fields. Decoding is exact, so a buffer of the wrong size or with
a foreign discriminator is rejected instead of being zero-filled or truncated.
"""

import hashlib
from dataclasses import dataclass
from fractions import Fraction

from construct import Bytes, ConstructError, Int8ul, Int64ul, Struct
from solders.pubkey import Pubkey

from pumpfun_sdk.core.curve_math import (
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    fee_amount,
    to_u64,
    tokens_out_for_sol,
)
from pumpfun_sdk.core.exceptions import InvalidAccountData
from pumpfun_sdk.core.pubkeys import LAMPORTS_PER_SOL, TOKEN_DECIMALS


def account_discriminator(account_name: str) -> bytes:
    """First 8 bytes of sha256("account:<name>")."""
    return hashlib.sha256(f"account:{account_name}".encode()).digest()[:8]


GLOBAL_DISCRIMINATOR = account_discriminator("Global")
CURVE_DISCRIMINATOR = account_discriminator("BondingCurve")

GLOBAL_LAYOUT = Struct(
    "discriminator" / Bytes(8),
    "initialized" / Int8ul,
    "authority" / Bytes(32),
    "fee_recipient" / Bytes(32),
    "initial_virtual_token_reserves" / Int64ul,
    "initial_virtual_sol_reserves" / Int64ul,
    "initial_real_token_reserves" / Int64ul,
    "token_total_supply" / Int64ul,
    "fee_basis_points" / Int64ul,
)

BONDING_CURVE_LAYOUT = Struct(
    "discriminator" / Bytes(8),
    "virtual_token_reserves" / Int64ul,
    "virtual_sol_reserves" / Int64ul,
    "real_token_reserves" / Int64ul,
    "real_sol_reserves" / Int64ul,
    "token_total_supply" / Int64ul,
    "complete" / Int8ul,
)

GLOBAL_ACCOUNT_SIZE = GLOBAL_LAYOUT.sizeof()
BONDING_CURVE_ACCOUNT_SIZE = BONDING_CURVE_LAYOUT.sizeof()


@dataclass(frozen=True)
class BondingCurve:
    """Snapshot of a pump.fun bonding curve."""

    virtual_token_reserves: int
    virtual_sol_reserves: int
    real_token_reserves: int
    real_sol_reserves: int
    token_total_supply: int
    complete: bool

    def price_per_token(self) -> Fraction:
        """Exact spot price in lamports per token base unit."""
        if self.virtual_token_reserves == 0:
            return Fraction(0)
        return Fraction(self.virtual_sol_reserves, self.virtual_token_reserves)

    def calculate_price(self) -> float:
        """Spot price in SOL per whole token, for display only."""
        return float(self.price_per_token() * 10**TOKEN_DECIMALS / LAMPORTS_PER_SOL)

    def market_cap_sol(self) -> int:
        """Market cap in lamports at the current spot price."""
        if self.virtual_token_reserves == 0:
            return 0
        return checked_div(
            checked_mul(self.token_total_supply, self.virtual_sol_reserves),
            self.virtual_token_reserves,
        )

    def buy_out_price(self, amount: int, fee_basis_points: int) -> int:
        """Lamports, fee included, needed to buy `amount` tokens or the rest of the curve.

        The amount is raised to the real token reserves so the result always
        covers buying the curve out.
        """
        tokens = max(to_u64(amount, "amount"), self.real_token_reserves)
        remaining = checked_sub(self.virtual_token_reserves, tokens)
        total_sell_value = checked_add(
            checked_div(checked_mul(tokens, self.virtual_sol_reserves), remaining), 1
        )
        return to_u64(
            total_sell_value + fee_amount(total_sell_value, fee_basis_points),
            "buy out price",
        )

    def final_market_cap_sol(self, fee_basis_points: int) -> int:
        """Market cap in lamports once the real token reserves are sold out."""
        total_sell_value = self.buy_out_price(self.real_token_reserves, fee_basis_points)
        total_virtual_value = checked_add(self.virtual_sol_reserves, total_sell_value)
        total_virtual_tokens = checked_sub(
            self.virtual_token_reserves, self.real_token_reserves
        )
        if total_virtual_tokens == 0:
            return 0
        return checked_div(
            checked_mul(self.token_total_supply, total_virtual_value),
            total_virtual_tokens,
        )


@dataclass(frozen=True)
class GlobalConfig:
    """Snapshot of the marketplace-wide global account."""

    initialized: bool
    authority: Pubkey
    fee_recipient: Pubkey
    initial_virtual_token_reserves: int
    initial_virtual_sol_reserves: int
    initial_real_token_reserves: int
    token_total_supply: int
    fee_basis_points: int

    @property
    def paused(self) -> bool:
        return not self.initialized

    def initial_bonding_curve(self) -> BondingCurve:
        """The curve a freshly created token starts from."""
        return BondingCurve(
            virtual_token_reserves=self.initial_virtual_token_reserves,
            virtual_sol_reserves=self.initial_virtual_sol_reserves,
            real_token_reserves=self.initial_real_token_reserves,
            real_sol_reserves=0,
            token_total_supply=self.token_total_supply,
            complete=False,
        )

    def initial_buy_price(self, amount: int) -> int:
        """Tokens the first buyer receives for `amount` lamports, before fees."""
        if to_u64(amount, "amount") == 0:
            return 0
        tokens = tokens_out_for_sol(
            self.initial_virtual_token_reserves,
            self.initial_virtual_sol_reserves,
            amount,
        )
        return min(tokens, self.initial_real_token_reserves)


def _parse(layout: Struct, data: bytes, discriminator: bytes, name: str):
    data = bytes(data)
    expected_size = layout.sizeof()
    if len(data) != expected_size:
        raise InvalidAccountData(
            f"{name} account must be {expected_size} bytes, got {len(data)}"
        )
    if data[:8] != discriminator:
        raise InvalidAccountData(f"Invalid {name} discriminator: {data[:8].hex()}")

    try:
        return layout.parse(data)
    except ConstructError as e:
        raise InvalidAccountData(f"Failed to decode {name} account: {e}") from e


def _decode_bool(value: int, field: str) -> bool:
    if value not in (0, 1):
        raise InvalidAccountData(f"Field {field} holds non-boolean byte {value}")
    return value == 1


def decode_bonding_curve(data: bytes) -> BondingCurve:
    """Decode bonding curve state from raw account data.

    Args:
        data: Raw account data

    Returns:
        Decoded BondingCurve

    Raises:
        InvalidAccountData: If size, discriminator or field values are invalid
    """
    parsed = _parse(BONDING_CURVE_LAYOUT, data, CURVE_DISCRIMINATOR, "BondingCurve")
    return BondingCurve(
        virtual_token_reserves=parsed.virtual_token_reserves,
        virtual_sol_reserves=parsed.virtual_sol_reserves,
        real_token_reserves=parsed.real_token_reserves,
        real_sol_reserves=parsed.real_sol_reserves,
        token_total_supply=parsed.token_total_supply,
        complete=_decode_bool(parsed.complete, "complete"),
    )


def decode_global_config(data: bytes) -> GlobalConfig:
    """Decode the global account from raw account data.

    Raises:
        InvalidAccountData: If size, discriminator or field values are invalid
    """
    parsed = _parse(GLOBAL_LAYOUT, data, GLOBAL_DISCRIMINATOR, "Global")
    return GlobalConfig(
        initialized=_decode_bool(parsed.initialized, "initialized"),
        authority=Pubkey.from_bytes(parsed.authority),
        fee_recipient=Pubkey.from_bytes(parsed.fee_recipient),
        initial_virtual_token_reserves=parsed.initial_virtual_token_reserves,
        initial_virtual_sol_reserves=parsed.initial_virtual_sol_reserves,
        initial_real_token_reserves=parsed.initial_real_token_reserves,
        token_total_supply=parsed.token_total_supply,
        fee_basis_points=parsed.fee_basis_points,
    )


def encode_bonding_curve(curve: BondingCurve) -> bytes:
    """Serialize a snapshot back into account bytes (fixtures and simulation)."""
    return BONDING_CURVE_LAYOUT.build(
        {
            "discriminator": CURVE_DISCRIMINATOR,
            "virtual_token_reserves": curve.virtual_token_reserves,
            "virtual_sol_reserves": curve.virtual_sol_reserves,
            "real_token_reserves": curve.real_token_reserves,
            "real_sol_reserves": curve.real_sol_reserves,
            "token_total_supply": curve.token_total_supply,
            "complete": int(curve.complete),
        }
    )


def encode_global_config(config: GlobalConfig) -> bytes:
    """Serialize a global snapshot back into account bytes."""
    return GLOBAL_LAYOUT.build(
        {
            "discriminator": GLOBAL_DISCRIMINATOR,
            "initialized": int(config.initialized),
            "authority": bytes(config.authority),
            "fee_recipient": bytes(config.fee_recipient),
            "initial_virtual_token_reserves": config.initial_virtual_token_reserves,
            "initial_virtual_sol_reserves": config.initial_virtual_sol_reserves,
            "initial_real_token_reserves": config.initial_real_token_reserves,
            "token_total_supply": config.token_total_supply,
            "fee_basis_points": config.fee_basis_points,
        }
    )
