"""
Data Models Package

This package contains all Pydantic models used by the Ledgerly engine.
All data flowing through the pipeline must conform to these schemas.
"""

from ledgerly.models.transaction import (
    AccountType,
    BusinessContext,
    Direction,
    JournalEntry,
    ParsedIntent,
    PaymentMode,
    TaxSplit,
    TextSignals,
    TransactionEvent,
    TransactionStatus,
)
from ledgerly.models.accounts import (
    DEFAULT_CHART_OF_ACCOUNTS,
    ChartOfAccounts,
    load_chart_of_accounts,
)
from ledgerly.models.validation import ValidationIssue, ValidationResult

__all__ = [
    # Transaction models
    "AccountType",
    "BusinessContext",
    "Direction",
    "JournalEntry",
    "ParsedIntent",
    "PaymentMode",
    "TaxSplit",
    "TextSignals",
    "TransactionEvent",
    "TransactionStatus",
    # Chart of accounts
    "ChartOfAccounts",
    "DEFAULT_CHART_OF_ACCOUNTS",
    "load_chart_of_accounts",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
