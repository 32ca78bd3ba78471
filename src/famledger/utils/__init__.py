"""Utility functions for famledger."""

from famledger.utils.date_parser import parse_date
from famledger.utils.amount_parser import parse_amount
from famledger.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "resolve_account"]
