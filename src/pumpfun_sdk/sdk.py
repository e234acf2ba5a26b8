"""
Client facade for the pump.fun program.

Sequences the collaborator calls: derive addresses, fetch fresh snapshots,
price, build instructions, submit. Core errors are raised before anything is
built; transport errors from the chain client propagate unchanged.
"""

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from pumpfun_sdk.core.accounts import BondingCurve, GlobalConfig
from pumpfun_sdk.core.exceptions import EmptyTrade, MarketplacePaused
from pumpfun_sdk.core.pricing import (
    BuyQuote,
    SellQuote,
    compute_buy_quote,
    compute_sell_quote,
)
from pumpfun_sdk.core.pubkeys import DEFAULT_SLIPPAGE_BASIS_POINTS
from pumpfun_sdk.core.wallet import Wallet
from pumpfun_sdk.interfaces.core import ChainClient
from pumpfun_sdk.platforms.pumpfun import (
    PumpFunAddressProvider,
    PumpFunCurveManager,
    PumpFunInstructionBuilder,
)
from pumpfun_sdk.utils.logger import get_logger
from pumpfun_sdk.utils.metadata import (
    CreateTokenMetadata,
    TokenMetadataResponse,
    create_token_metadata,
)

logger = get_logger(__name__)


class PumpFun:
    """Main client for interacting with the pump.fun program."""

    def __init__(
        self,
        client: ChainClient,
        wallet: Wallet,
        fee_basis_points: int | None = None,
        metadata_uploader=create_token_metadata,
    ):
        """Initialize the client.

        Args:
            client: Chain client for reads and submission
            wallet: Wallet that signs and pays
            fee_basis_points: Fee override; the global account's fee otherwise
            metadata_uploader: Coroutine uploading CreateTokenMetadata
        """
        self.client = client
        self.wallet = wallet
        self.address_provider = PumpFunAddressProvider()
        self.curve_manager = PumpFunCurveManager(
            client, self.address_provider, fee_basis_points
        )
        self.instruction_builder = PumpFunInstructionBuilder(self.address_provider)
        self.metadata_uploader = metadata_uploader

    async def get_global_config(self) -> GlobalConfig:
        return await self.curve_manager.get_global_config()

    async def get_bonding_curve(self, mint: Pubkey) -> BondingCurve:
        return await self.curve_manager.get_curve_state(mint)

    async def quote_buy(
        self, mint: Pubkey, sol_amount: int, slippage_bps: int = DEFAULT_SLIPPAGE_BASIS_POINTS
    ) -> BuyQuote:
        return await self.curve_manager.quote_buy(mint, sol_amount, slippage_bps)

    async def quote_sell(
        self, mint: Pubkey, token_amount: int, slippage_bps: int = DEFAULT_SLIPPAGE_BASIS_POINTS
    ) -> SellQuote:
        return await self.curve_manager.quote_sell(mint, token_amount, slippage_bps)

    async def buy(
        self,
        mint: Pubkey,
        sol_amount: int,
        slippage_bps: int = DEFAULT_SLIPPAGE_BASIS_POINTS,
        priority_fee: int | None = None,
    ) -> str:
        """Buy tokens with SOL.

        Args:
            mint: Token mint address
            sol_amount: Lamports to spend
            slippage_bps: Slippage tolerance in basis points
            priority_fee: Optional priority fee in microlamports

        Returns:
            Transaction signature

        Raises:
            EmptyTrade: If the amount buys no tokens
        """
        global_config, curve = await self.curve_manager.get_trading_snapshot(mint)
        quote = compute_buy_quote(
            curve, sol_amount, slippage_bps, self.curve_manager.fee_for(global_config)
        )
        if quote.token_amount == 0:
            raise EmptyTrade(f"{sol_amount} lamports buys no tokens of {mint}")

        instructions = self.instruction_builder.build_buy_instructions(
            mint,
            self.wallet.pubkey,
            global_config.fee_recipient,
            quote.token_amount,
            quote.max_sol_cost,
        )

        logger.info(
            f"Buying {quote.token_amount} base units of {mint} for {sol_amount} lamports "
            f"(max cost {quote.max_sol_cost})"
        )
        return await self._submit(instructions, [self.wallet.keypair], priority_fee)

    async def sell(
        self,
        mint: Pubkey,
        token_amount: int,
        slippage_bps: int = DEFAULT_SLIPPAGE_BASIS_POINTS,
        priority_fee: int | None = None,
    ) -> str:
        """Sell tokens for SOL.

        Args:
            mint: Token mint address
            token_amount: Tokens to sell (raw units)
            slippage_bps: Slippage tolerance in basis points
            priority_fee: Optional priority fee in microlamports

        Returns:
            Transaction signature

        Raises:
            EmptyTrade: If token_amount is zero
        """
        global_config, curve = await self.curve_manager.get_trading_snapshot(mint)
        quote = compute_sell_quote(
            curve, token_amount, slippage_bps, self.curve_manager.fee_for(global_config)
        )
        if quote.token_amount == 0:
            raise EmptyTrade(f"Nothing to sell for {mint}")

        instruction = self.instruction_builder.build_sell_instruction(
            mint,
            self.wallet.pubkey,
            global_config.fee_recipient,
            token_amount,
            quote.min_sol_output,
        )

        logger.info(
            f"Selling {token_amount} base units of {mint} for {quote.sol_amount} lamports "
            f"(min output {quote.min_sol_output})"
        )
        return await self._submit([instruction], [self.wallet.keypair], priority_fee)

    async def upload_metadata(self, metadata: CreateTokenMetadata) -> TokenMetadataResponse:
        return await self.metadata_uploader(metadata)

    async def create(
        self,
        mint: Keypair,
        metadata: CreateTokenMetadata,
        priority_fee: int | None = None,
    ) -> str:
        """Create a new token with metadata.

        Args:
            mint: Keypair for the new token mint
            metadata: Token metadata including name, symbol and image
            priority_fee: Optional priority fee in microlamports

        Returns:
            Transaction signature
        """
        create_ix = await self._build_create(mint, metadata)
        return await self._submit([create_ix], [self.wallet.keypair, mint], priority_fee)

    async def create_and_buy(
        self,
        mint: Keypair,
        metadata: CreateTokenMetadata,
        sol_amount: int,
        slippage_bps: int = DEFAULT_SLIPPAGE_BASIS_POINTS,
        priority_fee: int | None = None,
    ) -> str:
        """Create a token and buy from its fresh curve in one transaction.

        The buy is priced from the global account's initial reserves, since
        the curve does not exist until the create instruction runs.

        Returns:
            Transaction signature
        """
        global_config = await self.get_global_config()
        if global_config.paused:
            raise MarketplacePaused("Global account is not initialized")

        quote = compute_buy_quote(
            global_config.initial_bonding_curve(),
            sol_amount,
            slippage_bps,
            self.curve_manager.fee_for(global_config),
        )
        if quote.token_amount == 0:
            raise EmptyTrade(f"{sol_amount} lamports buys no tokens of a new curve")

        create_ix = await self._build_create(mint, metadata)
        buy_ixs = self.instruction_builder.build_buy_instructions(
            mint.pubkey(),
            self.wallet.pubkey,
            global_config.fee_recipient,
            quote.token_amount,
            quote.max_sol_cost,
        )
        return await self._submit(
            [create_ix, *buy_ixs], [self.wallet.keypair, mint], priority_fee
        )

    async def _build_create(self, mint: Keypair, metadata: CreateTokenMetadata) -> Instruction:
        uploaded = await self.upload_metadata(metadata)
        return self.instruction_builder.build_create_instruction(
            mint.pubkey(),
            self.wallet.pubkey,
            uploaded.metadata.name,
            uploaded.metadata.symbol,
            uploaded.metadata_uri,
        )

    async def _submit(
        self,
        instructions: list[Instruction],
        signers: list[Keypair],
        priority_fee: int | None,
    ) -> str:
        signature = await self.client.build_and_send_transaction(
            instructions, signers, priority_fee=priority_fee
        )
        logger.info(f"Transaction sent: {signature}")
        return signature
