"""
Checked integer arithmetic for the bonding curve.

Python integers never overflow, so the on-chain widths are enforced here:
amounts and reserves are u64, and every intermediate product must fit in a
u128. The largest product the curve forms is reserve * reserve, which for two
u64 values is at most (2**64 - 1)**2 < 2**128, so valid snapshots never trip
the product check; out-of-range inputs do.
"""

from pumpfun_sdk.core.exceptions import ArithmeticOverflow, ArithmeticUnderflow, InvalidFee
from pumpfun_sdk.core.pubkeys import BPS_DENOMINATOR, U64_MAX, U128_MAX


def to_u64(value: int, name: str = "value") -> int:
    """Ensure a value fits in an unsigned 64-bit integer."""
    if value < 0:
        raise ArithmeticUnderflow(f"{name} is negative: {value}")
    if value > U64_MAX:
        raise ArithmeticOverflow(f"{name} exceeds u64: {value}")
    return value


def checked_mul(a: int, b: int) -> int:
    product = a * b
    if product > U128_MAX:
        raise ArithmeticOverflow(f"Product {a} * {b} exceeds u128")
    return product


def checked_add(a: int, b: int) -> int:
    total = a + b
    if total > U128_MAX:
        raise ArithmeticOverflow(f"Sum {a} + {b} exceeds u128")
    return total


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise ArithmeticUnderflow(f"Subtraction {a} - {b} would go negative")
    return a - b


def checked_div(a: int, b: int) -> int:
    """Floor division that refuses a zero divisor."""
    if b == 0:
        raise ArithmeticOverflow(f"Division of {a} by zero")
    return a // b


def checked_div_ceil(a: int, b: int) -> int:
    if b == 0:
        raise ArithmeticOverflow(f"Division of {a} by zero")
    return -(-a // b)


def validate_bps(bps: int, error: type[Exception] = InvalidFee, name: str = "basis points") -> int:
    if isinstance(bps, bool) or not isinstance(bps, int):
        raise error(f"{name} must be an integer, got {bps!r}")
    if not 0 <= bps <= BPS_DENOMINATOR:
        raise error(f"{name} must be within [0, {BPS_DENOMINATOR}], got {bps}")
    return bps


def fee_amount(amount: int, fee_basis_points: int) -> int:
    """Marketplace fee on an amount, rounded down."""
    return checked_mul(amount, fee_basis_points) // BPS_DENOMINATOR


def tokens_out_for_sol(virtual_token_reserves: int, virtual_sol_reserves: int, sol_in: int) -> int:
    """Constant-product token output: vt - (vt * vs / (vs + sol_in) + 1).

    The remaining token reserve is rounded up, so the buyer never receives a
    fraction of a token more than the curve gives.
    """
    k = checked_mul(virtual_token_reserves, virtual_sol_reserves)
    remaining = checked_div(k, checked_add(virtual_sol_reserves, sol_in)) + 1
    if remaining >= virtual_token_reserves:
        return 0
    return virtual_token_reserves - remaining


def sol_out_for_tokens(virtual_token_reserves: int, virtual_sol_reserves: int, tokens_in: int) -> int:
    """Constant-product SOL output: vs - vt * vs / (vt + tokens_in)."""
    k = checked_mul(virtual_token_reserves, virtual_sol_reserves)
    remaining = checked_div(k, checked_add(virtual_token_reserves, tokens_in))
    return checked_sub(virtual_sol_reserves, remaining)
