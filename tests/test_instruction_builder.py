"""Tests for pump.fun instruction encoding."""

import hashlib
import struct

import pytest
from solders.pubkey import Pubkey

from pumpfun_sdk.core.exceptions import ArithmeticOverflow
from pumpfun_sdk.core.pda import derive_associated_token_address, derive_bonding_curve_address
from pumpfun_sdk.core.pubkeys import (
    BUY_DISCRIMINATOR,
    CREATE_DISCRIMINATOR,
    SELL_DISCRIMINATOR,
    U64_MAX,
    PumpFunAddresses,
    SystemAddresses,
)
from pumpfun_sdk.platforms.pumpfun import PumpFunInstructionBuilder
from pumpfun_sdk.platforms.pumpfun.instruction_builder import encode_string


@pytest.fixture
def builder() -> PumpFunInstructionBuilder:
    return PumpFunInstructionBuilder()


@pytest.fixture
def user() -> Pubkey:
    return Pubkey.new_unique()


class TestDiscriminators:
    @pytest.mark.parametrize(
        ("name", "discriminator"),
        [("create", CREATE_DISCRIMINATOR), ("buy", BUY_DISCRIMINATOR), ("sell", SELL_DISCRIMINATOR)],
    )
    def test_anchor_sighash(self, name: str, discriminator: bytes) -> None:
        assert discriminator == hashlib.sha256(f"global:{name}".encode()).digest()[:8]


class TestEncodeString:
    def test_length_prefix(self) -> None:
        assert encode_string("abc") == b"\x03\x00\x00\x00abc"

    def test_utf8_length(self) -> None:
        assert encode_string("é")[:4] == struct.pack("<I", 2)


class TestBuyInstructions:
    def test_layout(self, builder, mint: Pubkey, user: Pubkey, fee_recipient: Pubkey) -> None:
        ata_ix, buy_ix = builder.build_buy_instructions(mint, user, fee_recipient, 1_234, 5_678)

        assert ata_ix.program_id == SystemAddresses.ASSOCIATED_TOKEN_PROGRAM
        assert buy_ix.program_id == PumpFunAddresses.PROGRAM
        assert bytes(buy_ix.data) == BUY_DISCRIMINATOR + struct.pack("<QQ", 1_234, 5_678)

        keys = [meta.pubkey for meta in buy_ix.accounts]
        bonding_curve = derive_bonding_curve_address(mint)[0]
        assert keys[0] == PumpFunAddresses.GLOBAL
        assert keys[1] == fee_recipient
        assert keys[2] == mint
        assert keys[3] == bonding_curve
        assert keys[4] == derive_associated_token_address(bonding_curve, mint)
        assert keys[5] == derive_associated_token_address(user, mint)
        assert keys[6] == user
        assert keys[-2] == PumpFunAddresses.EVENT_AUTHORITY
        assert keys[-1] == PumpFunAddresses.PROGRAM
        assert len(keys) == 12

    def test_only_user_signs(self, builder, mint: Pubkey, user: Pubkey, fee_recipient: Pubkey) -> None:
        _, buy_ix = builder.build_buy_instructions(mint, user, fee_recipient, 1, 1)
        signers = [meta.pubkey for meta in buy_ix.accounts if meta.is_signer]
        assert signers == [user]

    def test_writable_accounts(self, builder, mint: Pubkey, user: Pubkey, fee_recipient: Pubkey) -> None:
        _, buy_ix = builder.build_buy_instructions(mint, user, fee_recipient, 1, 1)
        writable = [index for index, meta in enumerate(buy_ix.accounts) if meta.is_writable]
        assert writable == [1, 3, 4, 5, 6]

    def test_amount_above_u64(self, builder, mint: Pubkey, user: Pubkey, fee_recipient: Pubkey) -> None:
        with pytest.raises(ArithmeticOverflow):
            builder.build_buy_instructions(mint, user, fee_recipient, U64_MAX + 1, 1)


class TestSellInstruction:
    def test_layout(self, builder, mint: Pubkey, user: Pubkey, fee_recipient: Pubkey) -> None:
        ix = builder.build_sell_instruction(mint, user, fee_recipient, 1_000, 990)

        assert bytes(ix.data) == SELL_DISCRIMINATOR + struct.pack("<QQ", 1_000, 990)
        keys = [meta.pubkey for meta in ix.accounts]
        assert keys[1] == fee_recipient
        assert keys[8] == SystemAddresses.ASSOCIATED_TOKEN_PROGRAM
        assert keys[9] == SystemAddresses.TOKEN_PROGRAM
        assert [meta.pubkey for meta in ix.accounts if meta.is_signer] == [user]


class TestCreateInstruction:
    def test_layout(self, builder, mint: Pubkey, user: Pubkey) -> None:
        ix = builder.build_create_instruction(mint, user, "Name", "SYM", "https://ipfs.io/ipfs/x")

        expected = (
            CREATE_DISCRIMINATOR
            + encode_string("Name")
            + encode_string("SYM")
            + encode_string("https://ipfs.io/ipfs/x")
        )
        assert bytes(ix.data) == expected
        assert len(ix.accounts) == 14

    def test_mint_and_user_sign(self, builder, mint: Pubkey, user: Pubkey) -> None:
        ix = builder.build_create_instruction(mint, user, "Name", "SYM", "uri")
        signers = [meta.pubkey for meta in ix.accounts if meta.is_signer]
        assert signers == [mint, user]
