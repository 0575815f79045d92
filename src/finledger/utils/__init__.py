"""Utility functions for finledger."""

from finledger.utils.amount_parser import parse_amount
from finledger.utils.date_parser import parse_date
from finledger.utils.money import to_money, quantize_money, format_money

__all__ = ["parse_amount", "parse_date", "to_money", "quantize_money", "format_money"]
