"""
Pump.Fun address provider.

This module provides all pump.fun-specific addresses and PDA derivations
and assembles the account maps the instruction builder lays out.
"""

from solders.pubkey import Pubkey

from pumpfun_sdk.core import pda
from pumpfun_sdk.core.pubkeys import PumpFunAddresses, SystemAddresses
from pumpfun_sdk.interfaces.core import TokenAccounts


class PumpFunAddressProvider:
    """Derives every address a pump.fun instruction touches."""

    @property
    def program_id(self) -> Pubkey:
        """Get the main program ID."""
        return PumpFunAddresses.PROGRAM

    def derive_global(self) -> Pubkey:
        return pda.derive_global_address()[0]

    def derive_mint_authority(self) -> Pubkey:
        return pda.derive_mint_authority_address()[0]

    def derive_event_authority(self) -> Pubkey:
        return pda.derive_event_authority_address()[0]

    def derive_bonding_curve(self, mint: Pubkey) -> Pubkey:
        """Derive the bonding curve address for a token.

        Args:
            mint: Token mint address

        Returns:
            Bonding curve address
        """
        return pda.derive_bonding_curve_address(mint)[0]

    def derive_associated_bonding_curve(self, mint: Pubkey, bonding_curve: Pubkey) -> Pubkey:
        """Derive the token account holding the curve's real token reserves.

        Args:
            mint: Token mint address
            bonding_curve: Bonding curve address

        Returns:
            Associated bonding curve address
        """
        return pda.derive_associated_token_address(bonding_curve, mint)

    def derive_metadata(self, mint: Pubkey) -> Pubkey:
        return pda.derive_metadata_address(mint)[0]

    def derive_user_token_account(self, user: Pubkey, mint: Pubkey) -> Pubkey:
        """Derive user's associated token account address.

        Args:
            user: User's wallet address
            mint: Token mint address

        Returns:
            User's associated token account address
        """
        return pda.derive_associated_token_address(user, mint)

    def get_token_accounts(self, mint: Pubkey) -> TokenAccounts:
        """Derive the curve-side accounts of a mint."""
        bonding_curve = self.derive_bonding_curve(mint)
        return TokenAccounts(
            mint=mint,
            bonding_curve=bonding_curve,
            associated_bonding_curve=self.derive_associated_bonding_curve(mint, bonding_curve),
        )

    def get_create_instruction_accounts(self, mint: Pubkey, user: Pubkey) -> dict[str, Pubkey]:
        """Get all accounts needed for a create instruction."""
        token_accounts = self.get_token_accounts(mint)
        return {
            "mint": mint,
            "mint_authority": self.derive_mint_authority(),
            "bonding_curve": token_accounts.bonding_curve,
            "associated_bonding_curve": token_accounts.associated_bonding_curve,
            "global": self.derive_global(),
            "mpl_token_metadata": SystemAddresses.MPL_TOKEN_METADATA,
            "metadata": self.derive_metadata(mint),
            "user": user,
            "system_program": SystemAddresses.SYSTEM_PROGRAM,
            "token_program": SystemAddresses.TOKEN_PROGRAM,
            "associated_token_program": SystemAddresses.ASSOCIATED_TOKEN_PROGRAM,
            "rent": SystemAddresses.RENT,
            "event_authority": self.derive_event_authority(),
            "program": self.program_id,
        }

    def get_buy_instruction_accounts(
        self, mint: Pubkey, user: Pubkey, fee_recipient: Pubkey
    ) -> dict[str, Pubkey]:
        """Get all accounts needed for a buy instruction.

        Args:
            mint: Token mint address
            user: User's wallet address
            fee_recipient: Fee recipient from the global account

        Returns:
            Dictionary of account addresses for buy instruction
        """
        token_accounts = self.get_token_accounts(mint)
        return {
            "global": self.derive_global(),
            "fee_recipient": fee_recipient,
            "mint": mint,
            "bonding_curve": token_accounts.bonding_curve,
            "associated_bonding_curve": token_accounts.associated_bonding_curve,
            "associated_user": self.derive_user_token_account(user, mint),
            "user": user,
            "system_program": SystemAddresses.SYSTEM_PROGRAM,
            "token_program": SystemAddresses.TOKEN_PROGRAM,
            "rent": SystemAddresses.RENT,
            "event_authority": self.derive_event_authority(),
            "program": self.program_id,
        }

    def get_sell_instruction_accounts(
        self, mint: Pubkey, user: Pubkey, fee_recipient: Pubkey
    ) -> dict[str, Pubkey]:
        """Get all accounts needed for a sell instruction.

        Args:
            mint: Token mint address
            user: User's wallet address
            fee_recipient: Fee recipient from the global account

        Returns:
            Dictionary of account addresses for sell instruction
        """
        token_accounts = self.get_token_accounts(mint)
        return {
            "global": self.derive_global(),
            "fee_recipient": fee_recipient,
            "mint": mint,
            "bonding_curve": token_accounts.bonding_curve,
            "associated_bonding_curve": token_accounts.associated_bonding_curve,
            "associated_user": self.derive_user_token_account(user, mint),
            "user": user,
            "system_program": SystemAddresses.SYSTEM_PROGRAM,
            "associated_token_program": SystemAddresses.ASSOCIATED_TOKEN_PROGRAM,
            "token_program": SystemAddresses.TOKEN_PROGRAM,
            "event_authority": self.derive_event_authority(),
            "program": self.program_id,
        }
