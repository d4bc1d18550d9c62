"""Page objects for the banking UI."""

from neobank_e2e.pages.banking_page import BankingPage

__all__ = ["BankingPage"]
