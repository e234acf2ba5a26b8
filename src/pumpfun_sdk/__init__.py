"""
Client SDK for the pump.fun bonding-curve marketplace on Solana.
"""

from pumpfun_sdk.core.accounts import (
    BondingCurve,
    GlobalConfig,
    decode_bonding_curve,
    decode_global_config,
)
from pumpfun_sdk.core.client import SolanaClient
from pumpfun_sdk.core.exceptions import (
    AccountNotFound,
    ArithmeticOverflow,
    ArithmeticUnderflow,
    ConfigError,
    CurveComplete,
    EmptyTrade,
    InvalidAccountData,
    InvalidFee,
    InvalidSeeds,
    InvalidSlippage,
    MarketplacePaused,
    MetadataUploadError,
    NoValidAddressFound,
    PumpFunArithmeticError,
    PumpFunError,
    TransportError,
)
from pumpfun_sdk.core.pda import (
    derive_associated_token_address,
    derive_bonding_curve_address,
    find_program_address,
)
from pumpfun_sdk.core.pricing import (
    BuyQuote,
    SellQuote,
    compute_buy_quote,
    compute_sell_quote,
)
from pumpfun_sdk.core.wallet import Wallet
from pumpfun_sdk.sdk import PumpFun
from pumpfun_sdk.utils.metadata import CreateTokenMetadata, TokenMetadataResponse

__version__ = "0.1.0"

__all__ = [
    "AccountNotFound",
    "ArithmeticOverflow",
    "ArithmeticUnderflow",
    "BondingCurve",
    "BuyQuote",
    "ConfigError",
    "CreateTokenMetadata",
    "CurveComplete",
    "EmptyTrade",
    "GlobalConfig",
    "InvalidAccountData",
    "InvalidFee",
    "InvalidSeeds",
    "InvalidSlippage",
    "MarketplacePaused",
    "MetadataUploadError",
    "NoValidAddressFound",
    "PumpFun",
    "PumpFunArithmeticError",
    "PumpFunError",
    "SellQuote",
    "SolanaClient",
    "TokenMetadataResponse",
    "TransportError",
    "Wallet",
    "compute_buy_quote",
    "compute_sell_quote",
    "decode_bonding_curve",
    "decode_global_config",
    "derive_associated_token_address",
    "derive_bonding_curve_address",
    "find_program_address",
]
