"""
Bonding curve pricing engine.

Quotes are computed with integer arithmetic only so they reproduce the
program's fixed-point results exactly. Fees are rounded down. Slippage bounds
are rounded in the caller's favour: the maximum cost of a buy rounds up and
the minimum output of a sell rounds down.

Overflow boundary: amounts, reserves and results are u64; intermediate
products are checked against u128. Any value outside those ranges raises
ArithmeticOverflow (or ArithmeticUnderflow when negative).
"""

from dataclasses import dataclass
from decimal import Decimal

from pumpfun_sdk.core.accounts import BondingCurve
from pumpfun_sdk.core.curve_math import (
    checked_div_ceil,
    checked_mul,
    checked_sub,
    fee_amount,
    sol_out_for_tokens,
    to_u64,
    tokens_out_for_sol,
    validate_bps,
)
from pumpfun_sdk.core.exceptions import (
    CurveComplete,
    InvalidAccountData,
    InvalidFee,
    InvalidSlippage,
)
from pumpfun_sdk.core.pubkeys import (
    BPS_DENOMINATOR,
    DEFAULT_FEE_BASIS_POINTS,
    LAMPORTS_PER_SOL,
    TOKEN_DECIMALS,
)


@dataclass(frozen=True)
class BuyQuote:
    """Result of pricing a buy.

    token_amount is what the buy instruction asks for; max_sol_cost is the
    most the caller authorizes the program to charge.
    """

    token_amount: int
    max_sol_cost: int
    sol_amount: int
    fee: int


@dataclass(frozen=True)
class SellQuote:
    """Result of pricing a sell.

    sol_amount is the net proceeds after the marketplace fee; min_sol_output
    is the least the caller will accept.
    """

    sol_amount: int
    min_sol_output: int
    token_amount: int
    fee: int


def _check_tradeable(curve: BondingCurve) -> None:
    if curve.complete:
        raise CurveComplete("Bonding curve is complete; trade on the migrated pool")
    if curve.virtual_token_reserves <= 0 or curve.virtual_sol_reserves <= 0:
        raise InvalidAccountData(
            "Bonding curve virtual reserves must be positive "
            f"(token={curve.virtual_token_reserves}, sol={curve.virtual_sol_reserves})"
        )
    to_u64(curve.virtual_token_reserves, "virtual_token_reserves")
    to_u64(curve.virtual_sol_reserves, "virtual_sol_reserves")


def calculate_with_slippage_buy(amount: int, basis_points: int) -> int:
    """Upper bound on a cost: amount * (10000 + bps) / 10000, rounded up."""
    validate_bps(basis_points, InvalidSlippage, "slippage_bps")
    bound = checked_div_ceil(
        checked_mul(to_u64(amount, "amount"), BPS_DENOMINATOR + basis_points),
        BPS_DENOMINATOR,
    )
    return to_u64(bound, "max_sol_cost")


def calculate_with_slippage_sell(amount: int, basis_points: int) -> int:
    """Lower bound on an output: amount * (10000 - bps) / 10000, rounded down."""
    validate_bps(basis_points, InvalidSlippage, "slippage_bps")
    return checked_mul(to_u64(amount, "amount"), BPS_DENOMINATOR - basis_points) // BPS_DENOMINATOR


def compute_buy_quote(
    curve: BondingCurve,
    sol_amount: int,
    slippage_bps: int,
    fee_basis_points: int = DEFAULT_FEE_BASIS_POINTS,
) -> BuyQuote:
    """Price a buy of `sol_amount` lamports against a curve snapshot.

    Args:
        curve: Bonding curve snapshot
        sol_amount: Lamports to spend, fee included
        slippage_bps: Tolerance on the cost in basis points
        fee_basis_points: Marketplace fee from the global account

    Returns:
        BuyQuote with the token amount and the maximum SOL cost

    Raises:
        CurveComplete: If the curve has migrated
        InvalidSlippage: If slippage_bps is outside [0, 10000]
        InvalidFee: If fee_basis_points is outside [0, 10000]
        ArithmeticOverflow: If an amount or product leaves its integer range
        ArithmeticUnderflow: If an amount is negative
    """
    _check_tradeable(curve)
    validate_bps(slippage_bps, InvalidSlippage, "slippage_bps")
    validate_bps(fee_basis_points, InvalidFee, "fee_basis_points")
    to_u64(sol_amount, "sol_amount")

    if sol_amount == 0:
        return BuyQuote(token_amount=0, max_sol_cost=0, sol_amount=0, fee=0)

    fee = fee_amount(sol_amount, fee_basis_points)
    net_amount = checked_sub(sol_amount, fee)
    tokens_out = tokens_out_for_sol(
        curve.virtual_token_reserves, curve.virtual_sol_reserves, net_amount
    )
    tokens_out = min(tokens_out, curve.real_token_reserves)

    return BuyQuote(
        token_amount=to_u64(tokens_out, "token_amount"),
        max_sol_cost=calculate_with_slippage_buy(sol_amount, slippage_bps),
        sol_amount=sol_amount,
        fee=fee,
    )


def compute_sell_quote(
    curve: BondingCurve,
    token_amount: int,
    slippage_bps: int,
    fee_basis_points: int = DEFAULT_FEE_BASIS_POINTS,
) -> SellQuote:
    """Price a sell of `token_amount` base units against a curve snapshot.

    Raises:
        CurveComplete: If the curve has migrated
        InvalidSlippage: If slippage_bps is outside [0, 10000]
        InvalidFee: If fee_basis_points is outside [0, 10000]
        ArithmeticOverflow: If an amount or product leaves its integer range
        ArithmeticUnderflow: If an amount is negative
    """
    _check_tradeable(curve)
    validate_bps(slippage_bps, InvalidSlippage, "slippage_bps")
    validate_bps(fee_basis_points, InvalidFee, "fee_basis_points")
    to_u64(token_amount, "token_amount")

    if token_amount == 0:
        return SellQuote(sol_amount=0, min_sol_output=0, token_amount=0, fee=0)

    gross = sol_out_for_tokens(
        curve.virtual_token_reserves, curve.virtual_sol_reserves, token_amount
    )
    gross = min(gross, curve.real_sol_reserves)
    fee = fee_amount(gross, fee_basis_points)
    net_amount = checked_sub(gross, fee)

    return SellQuote(
        sol_amount=to_u64(net_amount, "sol_amount"),
        min_sol_output=calculate_with_slippage_sell(net_amount, slippage_bps),
        token_amount=token_amount,
        fee=fee,
    )


def apply_buy(curve: BondingCurve, quote: BuyQuote) -> BondingCurve:
    """Curve snapshot after a buy executes exactly at its quote."""
    net_amount = checked_sub(quote.sol_amount, quote.fee)
    return BondingCurve(
        virtual_token_reserves=checked_sub(curve.virtual_token_reserves, quote.token_amount),
        virtual_sol_reserves=to_u64(curve.virtual_sol_reserves + net_amount, "virtual_sol_reserves"),
        real_token_reserves=checked_sub(curve.real_token_reserves, quote.token_amount),
        real_sol_reserves=to_u64(curve.real_sol_reserves + net_amount, "real_sol_reserves"),
        token_total_supply=curve.token_total_supply,
        complete=curve.complete,
    )


def lamports_to_sol(lamports: int) -> Decimal:
    """Lamports as a SOL amount, for display."""
    return Decimal(lamports) / LAMPORTS_PER_SOL


def tokens_to_decimal(amount: int) -> Decimal:
    """Token base units as whole tokens, for display."""
    return Decimal(amount) / 10**TOKEN_DECIMALS


def sol_to_lamports(sol: Decimal | str | int) -> int:
    """Convert a SOL amount to lamports, truncating sub-lamport dust."""
    return int(Decimal(sol) * LAMPORTS_PER_SOL)
