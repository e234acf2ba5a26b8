"""
Program-derived address derivation.

Candidates come from solders `Pubkey.create_program_address`, which rejects
any digest that lies on the ed25519 curve. The search walks the bump seed
from 255 down to 0 and returns the first off-curve candidate.
"""

from collections.abc import Sequence

from solders.pubkey import Pubkey

from pumpfun_sdk.core.exceptions import InvalidSeeds, NoValidAddressFound, OnCurveAddress
from pumpfun_sdk.core.pubkeys import (
    ASSOCIATED_TOKEN_PROGRAM,
    BONDING_CURVE_SEED,
    EVENT_AUTHORITY_SEED,
    GLOBAL_SEED,
    MAX_SEED_LEN,
    MAX_SEEDS,
    METADATA_SEED,
    MINT_AUTHORITY_SEED,
    MPL_TOKEN_METADATA,
    TOKEN_PROGRAM,
    PumpFunAddresses,
)


Seed = bytes | Pubkey


def _seed_bytes(seeds: Sequence[Seed]) -> list[bytes]:
    return [bytes(seed) for seed in seeds]


def validate_seeds(seeds: Sequence[Seed], reserve_bump: bool = False) -> list[bytes]:
    """Check seed count and per-seed length against the runtime limits.

    Args:
        seeds: Seed byte strings or public keys
        reserve_bump: Keep one slot free for the bump seed

    Returns:
        Seeds converted to bytes

    Raises:
        InvalidSeeds: If there are too many seeds or one is too long
    """
    raw = _seed_bytes(seeds)
    max_seeds = MAX_SEEDS - 1 if reserve_bump else MAX_SEEDS
    if len(raw) > max_seeds:
        raise InvalidSeeds(f"{len(raw)} seeds given, at most {max_seeds} allowed")
    for index, seed in enumerate(raw):
        if len(seed) > MAX_SEED_LEN:
            raise InvalidSeeds(
                f"Seed {index} is {len(seed)} bytes, at most {MAX_SEED_LEN} allowed"
            )
    return raw


def create_program_address(seeds: Sequence[Seed], program_id: Pubkey) -> Pubkey:
    """Hash seeds and program id into a single candidate address.

    Raises:
        InvalidSeeds: If the seeds break the runtime limits
        OnCurveAddress: If the candidate is a valid ed25519 public key
    """
    raw = validate_seeds(seeds)
    try:
        return Pubkey.create_program_address(raw, program_id)
    except Exception as e:
        # seed limits are checked above, so the curve check is all that remains
        raise OnCurveAddress(f"Seeds under {program_id} derive an on-curve address") from e


def find_program_address(seeds: Sequence[Seed], program_id: Pubkey) -> tuple[Pubkey, int]:
    """Find the canonical PDA and bump for the given seeds.

    Args:
        seeds: Seed byte strings or public keys
        program_id: Owning program

    Returns:
        Tuple of (address, bump)

    Raises:
        InvalidSeeds: If the seeds break the runtime limits
        NoValidAddressFound: If every bump lands on the curve
    """
    raw = validate_seeds(seeds, reserve_bump=True)
    for bump in range(255, -1, -1):
        try:
            address = create_program_address([*raw, bytes([bump])], program_id)
        except OnCurveAddress:
            continue
        return address, bump

    raise NoValidAddressFound(
        f"No off-curve address for {len(raw)} seeds under program {program_id}"
    )


def find_associated_token_address(
    owner: Pubkey, mint: Pubkey, token_program: Pubkey = TOKEN_PROGRAM
) -> tuple[Pubkey, int]:
    """Derive the associated token account of an owner for a mint."""
    return find_program_address(
        [bytes(owner), bytes(token_program), bytes(mint)], ASSOCIATED_TOKEN_PROGRAM
    )


def derive_associated_token_address(owner: Pubkey, mint: Pubkey) -> Pubkey:
    return find_associated_token_address(owner, mint)[0]


def derive_global_address() -> tuple[Pubkey, int]:
    return find_program_address([GLOBAL_SEED], PumpFunAddresses.PROGRAM)


def derive_mint_authority_address() -> tuple[Pubkey, int]:
    return find_program_address([MINT_AUTHORITY_SEED], PumpFunAddresses.PROGRAM)


def derive_event_authority_address() -> tuple[Pubkey, int]:
    return find_program_address([EVENT_AUTHORITY_SEED], PumpFunAddresses.PROGRAM)


def derive_bonding_curve_address(mint: Pubkey) -> tuple[Pubkey, int]:
    """Derive the bonding curve PDA for a token mint.

    Args:
        mint: Token mint address

    Returns:
        Tuple of (bonding curve address, bump)
    """
    return find_program_address([BONDING_CURVE_SEED, bytes(mint)], PumpFunAddresses.PROGRAM)


def derive_metadata_address(mint: Pubkey) -> tuple[Pubkey, int]:
    """Derive the Metaplex metadata PDA for a token mint."""
    return find_program_address(
        [METADATA_SEED, bytes(MPL_TOKEN_METADATA), bytes(mint)], MPL_TOKEN_METADATA
    )
