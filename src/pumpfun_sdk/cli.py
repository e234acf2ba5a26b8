"""
Command-line interface for the pump.fun SDK.
"""

import argparse
import asyncio
import sys
from decimal import InvalidOperation

from solana.rpc.commitment import Confirmed, Finalized, Processed
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from pumpfun_sdk.config_loader import load_sdk_config
from pumpfun_sdk.core.client import SolanaClient
from pumpfun_sdk.core.exceptions import PumpFunError
from pumpfun_sdk.core.pricing import lamports_to_sol, sol_to_lamports, tokens_to_decimal
from pumpfun_sdk.core.wallet import Wallet
from pumpfun_sdk.sdk import PumpFun
from pumpfun_sdk.utils.logger import get_logger, set_log_level, setup_file_logging
from pumpfun_sdk.utils.metadata import CreateTokenMetadata

logger = get_logger(__name__)

COMMITMENTS = {
    "processed": Processed,
    "confirmed": Confirmed,
    "finalized": Finalized,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="Quote and trade tokens on pump.fun.")
    parser.add_argument(
        "--config", type=str, default="configs/example.yaml", help="Path to the YAML config"
    )
    parser.add_argument(
        "--log-file", type=str, default=None, help="Also write logs to this file"
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO", help="Logging level (default: INFO)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    quote_buy = subparsers.add_parser("quote-buy", help="Quote a buy without sending")
    quote_buy.add_argument("mint", type=str, help="Token mint address")
    quote_buy.add_argument("sol", type=str, help="Amount of SOL to spend")
    quote_buy.add_argument("--slippage-bps", type=int, help="Slippage in basis points")

    quote_sell = subparsers.add_parser("quote-sell", help="Quote a sell without sending")
    quote_sell.add_argument("mint", type=str, help="Token mint address")
    quote_sell.add_argument("amount", type=int, help="Tokens to sell, in base units")
    quote_sell.add_argument("--slippage-bps", type=int, help="Slippage in basis points")

    buy = subparsers.add_parser("buy", help="Buy tokens with SOL")
    buy.add_argument("mint", type=str, help="Token mint address")
    buy.add_argument("sol", type=str, help="Amount of SOL to spend")
    buy.add_argument("--slippage-bps", type=int, help="Slippage in basis points")

    sell = subparsers.add_parser("sell", help="Sell tokens for SOL")
    sell.add_argument("mint", type=str, help="Token mint address")
    sell.add_argument(
        "amount", type=int, nargs="?", help="Tokens to sell, in base units (default: whole balance)"
    )
    sell.add_argument("--slippage-bps", type=int, help="Slippage in basis points")

    create = subparsers.add_parser("create", help="Create a token, optionally buying")
    create.add_argument("--name", required=True)
    create.add_argument("--symbol", required=True)
    create.add_argument("--description", default="")
    create.add_argument("--image", required=True, help="Path to the token image")
    create.add_argument("--twitter")
    create.add_argument("--telegram")
    create.add_argument("--website")
    create.add_argument("--buy-sol", type=str, help="SOL to spend in the same transaction")
    create.add_argument("--slippage-bps", type=int, help="Slippage in basis points")

    status = subparsers.add_parser("status", help="Show price and progress of a curve")
    status.add_argument("mint", type=str, help="Token mint address")
    status.set_defaults(slippage_bps=None)

    return parser.parse_args(argv)


async def run(args: argparse.Namespace, config: dict) -> None:
    """Execute one subcommand against the configured endpoint."""
    trade = config["trade"]
    priority_fee = config["priority_fees"]["fixed_amount"] or None

    client = SolanaClient(
        config["rpc_endpoint"],
        commitment=COMMITMENTS[config["commitment"]],
        max_retries=config["retries"]["max_attempts"],
    )
    wallet = Wallet(config["private_key"])
    pump = PumpFun(client, wallet, fee_basis_points=trade.get("fee_basis_points"))

    buy_slippage = args.slippage_bps if args.slippage_bps is not None else trade["buy_slippage_bps"]
    sell_slippage = args.slippage_bps if args.slippage_bps is not None else trade["sell_slippage_bps"]

    try:
        if args.command == "quote-buy":
            quote = await pump.quote_buy(
                Pubkey.from_string(args.mint), sol_to_lamports(args.sol), buy_slippage
            )
            print(f"Tokens out: {tokens_to_decimal(quote.token_amount)}")
            print(f"Fee: {lamports_to_sol(quote.fee)} SOL")
            print(f"Max SOL cost: {lamports_to_sol(quote.max_sol_cost)} SOL")

        elif args.command == "quote-sell":
            quote = await pump.quote_sell(
                Pubkey.from_string(args.mint), args.amount, sell_slippage
            )
            print(f"SOL out: {lamports_to_sol(quote.sol_amount)} SOL")
            print(f"Fee: {lamports_to_sol(quote.fee)} SOL")
            print(f"Min SOL output: {lamports_to_sol(quote.min_sol_output)} SOL")

        elif args.command == "buy":
            signature = await pump.buy(
                Pubkey.from_string(args.mint),
                sol_to_lamports(args.sol),
                buy_slippage,
                priority_fee=priority_fee,
            )
            await report(client, signature)

        elif args.command == "sell":
            mint = Pubkey.from_string(args.mint)
            amount = args.amount
            if amount is None:
                amount = await client.get_token_account_balance(
                    wallet.get_associated_token_address(mint)
                )
                logger.info(f"Selling whole balance: {amount} base units")
            signature = await pump.sell(
                mint,
                amount,
                sell_slippage,
                priority_fee=priority_fee,
            )
            await report(client, signature)

        elif args.command == "create":
            mint = Keypair()
            metadata = CreateTokenMetadata(
                name=args.name,
                symbol=args.symbol,
                description=args.description,
                file=args.image,
                twitter=args.twitter,
                telegram=args.telegram,
                website=args.website,
            )
            print(f"Mint: {mint.pubkey()}")
            if args.buy_sol:
                signature = await pump.create_and_buy(
                    mint,
                    metadata,
                    sol_to_lamports(args.buy_sol),
                    buy_slippage,
                    priority_fee=priority_fee,
                )
            else:
                signature = await pump.create(mint, metadata, priority_fee=priority_fee)
            await report(client, signature)

        elif args.command == "status":
            mint = Pubkey.from_string(args.mint)
            progress = await pump.curve_manager.get_curve_progress(mint)
            price = await pump.curve_manager.calculate_price(mint)
            print(f"Price: {price:.10f} SOL per token")
            print(f"Market cap: {progress['market_cap_sol']} SOL")
            print(f"SOL raised: {progress['sol_raised']} SOL")
            print(f"Tokens left: {tokens_to_decimal(progress['tokens_available'])}")
            print(f"Complete: {progress['complete']}")
    finally:
        await client.close()


async def report(client: SolanaClient, signature: str) -> None:
    print(f"Signature: {signature}")
    if await client.confirm_transaction(signature):
        logger.info(f"Transaction confirmed: {signature}")
    else:
        logger.warning(f"Transaction not confirmed: {signature}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    if args.log_file:
        setup_file_logging(args.log_file)

    try:
        set_log_level(args.log_level)
        config = load_sdk_config(args.config)
        asyncio.run(run(args, config))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except PumpFunError as e:
        logger.error(f"{type(e).__name__}: {e!s}")
        sys.exit(1)
    except (ValueError, InvalidOperation) as e:
        logger.error(f"Invalid argument: {e!s}")
        sys.exit(2)


if __name__ == "__main__":
    main()
