"""
Error taxonomy for the pump.fun SDK.

Every failure surfaces as a distinct subclass of PumpFunError so callers can
tell core errors (final) from transport errors (retryable by the caller).
"""


class PumpFunError(Exception):
    """Base class for all SDK errors."""


class InvalidAccountData(PumpFunError):
    """Raised when an account buffer does not match the expected layout."""


class CurveComplete(PumpFunError):
    """Raised when trading against a bonding curve that has migrated."""


class MarketplacePaused(PumpFunError):
    """Raised when the global account is not initialized."""


class InvalidSlippage(PumpFunError):
    """Raised when a slippage tolerance is outside [0, 10000] basis points."""


class InvalidFee(PumpFunError):
    """Raised when a fee is outside [0, 10000] basis points."""


class EmptyTrade(PumpFunError):
    """Raised when a trade would move no tokens, so nothing is submitted."""


class PumpFunArithmeticError(PumpFunError):
    """Base class for checked integer arithmetic failures."""


class ArithmeticOverflow(PumpFunArithmeticError):
    """Raised when a value leaves the u64 range or a product the u128 range."""


class ArithmeticUnderflow(PumpFunArithmeticError):
    """Raised when a value or a subtraction would go below zero."""


class InvalidSeeds(PumpFunError):
    """Raised when PDA seeds exceed the count or length limits."""


class NoValidAddressFound(PumpFunError):
    """Raised when no bump yields an off-curve program address."""


class OnCurveAddress(NoValidAddressFound):
    """Raised when a single derivation attempt lands on the ed25519 curve."""


class TransportError(PumpFunError):
    """Raised when the RPC collaborator fails. Opaque to the core."""


class AccountNotFound(TransportError):
    """Raised when an account does not exist or holds no data."""


class MetadataUploadError(TransportError):
    """Raised when uploading token metadata to IPFS fails."""


class ConfigError(PumpFunError):
    """Raised when an SDK configuration file is invalid."""
