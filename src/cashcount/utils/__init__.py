"""Utility functions for cashcount."""

from cashcount.utils.amount_parser import parse_amount

__all__ = ["parse_amount"]
