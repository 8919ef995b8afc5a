"""Ledger balance and valuation engine for GnuCash books."""

__version__ = "0.1.0"
