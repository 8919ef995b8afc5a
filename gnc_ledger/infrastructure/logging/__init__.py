"""Logging helpers for the ledger engine."""
