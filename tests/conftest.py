"""Shared test fixtures."""

import pytest
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from pumpfun_sdk.core.accounts import (
    BondingCurve,
    GlobalConfig,
    encode_bonding_curve,
    encode_global_config,
)
from pumpfun_sdk.core.exceptions import AccountNotFound, TransportError
from pumpfun_sdk.core.pda import derive_bonding_curve_address, derive_global_address
from pumpfun_sdk.core.wallet import Wallet
from pumpfun_sdk.interfaces.core import ChainClient

VIRTUAL_SOL = 30_000_000_000
VIRTUAL_TOKENS = 1_073_000_000_000_000
REAL_TOKENS = 793_100_000_000_000
TOTAL_SUPPLY = 1_000_000_000_000_000


class FakeChainClient(ChainClient):
    """In-memory chain: accounts by address, records every submission."""

    def __init__(self) -> None:
        self.accounts: dict[Pubkey, bytes] = {}
        self.sent: list[tuple[list[Instruction], list[Keypair], int | None]] = []
        self.send_error: Exception | None = None

    async def fetch_account_bytes(self, address: Pubkey) -> bytes:
        if address not in self.accounts:
            raise AccountNotFound(f"Account {address} not found")
        return self.accounts[address]

    async def build_and_send_transaction(
        self,
        instructions: list[Instruction],
        signers: list[Keypair],
        skip_preflight: bool = True,
        priority_fee: int | None = None,
    ) -> str:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((instructions, signers, priority_fee))
        return f"sig{len(self.sent)}"

    async def confirm_transaction(self, signature: str) -> bool:
        return True


@pytest.fixture
def curve() -> BondingCurve:
    return BondingCurve(
        virtual_token_reserves=VIRTUAL_TOKENS,
        virtual_sol_reserves=VIRTUAL_SOL,
        real_token_reserves=REAL_TOKENS,
        real_sol_reserves=0,
        token_total_supply=TOTAL_SUPPLY,
        complete=False,
    )


@pytest.fixture
def fee_recipient() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def global_config(fee_recipient: Pubkey) -> GlobalConfig:
    return GlobalConfig(
        initialized=True,
        authority=Pubkey.new_unique(),
        fee_recipient=fee_recipient,
        initial_virtual_token_reserves=VIRTUAL_TOKENS,
        initial_virtual_sol_reserves=VIRTUAL_SOL,
        initial_real_token_reserves=REAL_TOKENS,
        token_total_supply=TOTAL_SUPPLY,
        fee_basis_points=100,
    )


@pytest.fixture
def mint() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def wallet() -> Wallet:
    return Wallet.from_keypair(Keypair())


@pytest.fixture
def chain(global_config: GlobalConfig, curve: BondingCurve, mint: Pubkey) -> FakeChainClient:
    fake = FakeChainClient()
    fake.accounts[derive_global_address()[0]] = encode_global_config(global_config)
    fake.accounts[derive_bonding_curve_address(mint)[0]] = encode_bonding_curve(curve)
    return fake


@pytest.fixture
def failing_chain(chain: FakeChainClient) -> FakeChainClient:
    chain.send_error = TransportError("node unavailable")
    return chain
