"""Posting validation package."""

from ledgerly.validation.validator import TransactionValidator

__all__ = ["TransactionValidator"]
