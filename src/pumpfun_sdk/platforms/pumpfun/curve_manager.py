"""
Pump.Fun bonding curve manager.

Fetches fresh account snapshots through the chain client and hands them to
the pricing engine. Nothing is cached: every call reads the chain again.
"""

from typing import Any

from solders.pubkey import Pubkey

from pumpfun_sdk.core.accounts import (
    BondingCurve,
    GlobalConfig,
    decode_bonding_curve,
    decode_global_config,
)
from pumpfun_sdk.core.exceptions import InvalidAccountData, MarketplacePaused
from pumpfun_sdk.core.pricing import (
    BuyQuote,
    SellQuote,
    compute_buy_quote,
    compute_sell_quote,
    lamports_to_sol,
)
from pumpfun_sdk.interfaces.core import ChainClient
from pumpfun_sdk.platforms.pumpfun.address_provider import PumpFunAddressProvider
from pumpfun_sdk.utils.logger import get_logger

logger = get_logger(__name__)


class PumpFunCurveManager:
    """Reads pump.fun accounts and prices trades against them."""

    def __init__(
        self,
        client: ChainClient,
        address_provider: PumpFunAddressProvider | None = None,
        fee_basis_points: int | None = None,
    ):
        """Initialize pump.fun curve manager.

        Args:
            client: Chain client used for account reads
            address_provider: Provider for derived addresses
            fee_basis_points: Fee override; the global account's fee otherwise
        """
        self.client = client
        self.address_provider = address_provider or PumpFunAddressProvider()
        self.fee_basis_points = fee_basis_points

    async def get_global_config(self) -> GlobalConfig:
        """Fetch and decode the global account.

        Raises:
            AccountNotFound: If the account does not exist
            InvalidAccountData: If the account data is malformed
        """
        address = self.address_provider.derive_global()
        data = await self.client.fetch_account_bytes(address)
        try:
            return decode_global_config(data)
        except InvalidAccountData as e:
            logger.error(f"Failed to decode global account {address}: {e!s}")
            raise

    async def get_curve_state(self, mint: Pubkey) -> BondingCurve:
        """Get the current state of a token's bonding curve.

        Args:
            mint: Token mint address

        Returns:
            BondingCurve snapshot

        Raises:
            AccountNotFound: If the curve does not exist
            InvalidAccountData: If curve data is malformed
        """
        curve_address = self.address_provider.derive_bonding_curve(mint)
        data = await self.client.fetch_account_bytes(curve_address)
        try:
            return decode_bonding_curve(data)
        except InvalidAccountData as e:
            logger.error(f"Failed to decode bonding curve {curve_address}: {e!s}")
            raise

    def fee_for(self, global_config: GlobalConfig) -> int:
        if self.fee_basis_points is not None:
            return self.fee_basis_points
        return global_config.fee_basis_points

    async def get_trading_snapshot(self, mint: Pubkey) -> tuple[GlobalConfig, BondingCurve]:
        """Fetch the global account and the curve, rejecting a paused marketplace."""
        global_config = await self.get_global_config()
        if global_config.paused:
            raise MarketplacePaused("Global account is not initialized")
        curve = await self.get_curve_state(mint)
        return global_config, curve

    async def quote_buy(self, mint: Pubkey, sol_amount: int, slippage_bps: int) -> BuyQuote:
        """Price a buy against freshly fetched state.

        Args:
            mint: Token mint address
            sol_amount: Lamports to spend
            slippage_bps: Slippage tolerance in basis points

        Returns:
            BuyQuote
        """
        global_config, curve = await self.get_trading_snapshot(mint)
        return compute_buy_quote(curve, sol_amount, slippage_bps, self.fee_for(global_config))

    async def quote_sell(self, mint: Pubkey, token_amount: int, slippage_bps: int) -> SellQuote:
        """Price a sell against freshly fetched state.

        Args:
            mint: Token mint address
            token_amount: Tokens to sell (raw units)
            slippage_bps: Slippage tolerance in basis points

        Returns:
            SellQuote
        """
        global_config, curve = await self.get_trading_snapshot(mint)
        return compute_sell_quote(curve, token_amount, slippage_bps, self.fee_for(global_config))

    async def calculate_price(self, mint: Pubkey) -> float:
        """Current token price in SOL per whole token, for display."""
        curve = await self.get_curve_state(mint)
        return curve.calculate_price()

    async def is_curve_complete(self, mint: Pubkey) -> bool:
        """Check if the bonding curve is complete (migrated)."""
        curve = await self.get_curve_state(mint)
        return curve.complete

    async def get_curve_progress(self, mint: Pubkey) -> dict[str, Any]:
        """Get bonding curve market cap information.

        Args:
            mint: Token mint address

        Returns:
            Dictionary with market cap figures in lamports and SOL
        """
        global_config = await self.get_global_config()
        curve = await self.get_curve_state(mint)
        fee = self.fee_for(global_config)

        market_cap = curve.market_cap_sol()
        final_market_cap = curve.final_market_cap_sol(fee) if not curve.complete else market_cap

        return {
            "complete": curve.complete,
            "market_cap_lamports": market_cap,
            "final_market_cap_lamports": final_market_cap,
            "market_cap_sol": lamports_to_sol(market_cap),
            "sol_raised": lamports_to_sol(curve.real_sol_reserves),
            "tokens_available": curve.real_token_reserves,
        }
