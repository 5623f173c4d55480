"""
Chart of Accounts

The fixed catalog of ledger account names, grouped by account type.

DESIGN DECISION: The chart is an immutable value handed to the classifier
and the posting rules, not a module-level global. Tests and deployments
can supply their own chart; nothing mutates it at runtime.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ledgerly.models.transaction import AccountType


# Accounts the posting templates write to regardless of category
CASH_ACCOUNT = "Cash"
BANK_ACCOUNT = "Bank"
INPUT_TAX_CREDIT_ACCOUNT = "Input Tax Credit"
GST_PAYABLE_ACCOUNT = "GST Payable"
CAPITAL_ACCOUNT = "Capital"

SYSTEM_ACCOUNTS: dict[str, AccountType] = {
    CASH_ACCOUNT: AccountType.ASSET,
    BANK_ACCOUNT: AccountType.ASSET,
    INPUT_TAX_CREDIT_ACCOUNT: AccountType.ASSET,
    GST_PAYABLE_ACCOUNT: AccountType.LIABILITY,
    CAPITAL_ACCOUNT: AccountType.EQUITY,
}


class ChartOfAccounts(BaseModel):
    """
    Permitted account names per account type.

    Every account type must be present, and the system accounts the
    posting templates rely on must be listed under their proper type.
    """
    model_config = ConfigDict(frozen=True)

    accounts: dict[AccountType, tuple[str, ...]]

    @field_validator('accounts')
    @classmethod
    def validate_names(cls, v: dict[AccountType, tuple[str, ...]]) -> dict[AccountType, tuple[str, ...]]:
        """Strip names and reject blanks or duplicates within a group."""
        cleaned = {}
        for account_type, names in v.items():
            stripped = tuple(name.strip() for name in names)
            if any(not name for name in stripped):
                raise ValueError(f"Blank account name under {account_type.value}")
            if len(set(stripped)) != len(stripped):
                raise ValueError(f"Duplicate account name under {account_type.value}")
            cleaned[account_type] = stripped
        return cleaned

    @model_validator(mode='after')
    def validate_complete(self) -> 'ChartOfAccounts':
        missing_types = [t.value for t in AccountType if t not in self.accounts]
        if missing_types:
            raise ValueError(f"Chart of accounts is missing account types: {missing_types}")

        for name, account_type in SYSTEM_ACCOUNTS.items():
            if name not in self.accounts[account_type]:
                raise ValueError(
                    f"Chart of accounts must list '{name}' under {account_type.value}"
                )
        return self

    def accounts_for(self, account_type: AccountType) -> tuple[str, ...]:
        """Get the account names permitted for an account type."""
        return self.accounts[account_type]

    def permits(self, account_type: AccountType, name: str) -> bool:
        """Check whether an account name is listed under an account type."""
        return name in self.accounts.get(account_type, ())


DEFAULT_CHART_OF_ACCOUNTS = ChartOfAccounts(
    accounts={
        AccountType.ASSET: (
            CASH_ACCOUNT,
            BANK_ACCOUNT,
            INPUT_TAX_CREDIT_ACCOUNT,
            "Accounts Receivable",
            "Equipment",
        ),
        AccountType.LIABILITY: (
            GST_PAYABLE_ACCOUNT,
            "Accounts Payable",
            "Loan",
        ),
        AccountType.INCOME: (
            "Sales",
            "Refunds",
            "Other Income",
        ),
        AccountType.EXPENSE: (
            "Rent",
            "Salary",
            "Utilities",
            "Office Supplies",
            "Professional Fees",
            "General",
        ),
        AccountType.EQUITY: (
            CAPITAL_ACCOUNT,
        ),
    }
)


def load_chart_of_accounts(path: Path) -> ChartOfAccounts:
    """
    Load a chart of accounts from a JSON file.

    Expected shape: {"accounts": {"Asset": ["Cash", ...], ...}}
    Raises pydantic.ValidationError if the chart is incomplete.
    """
    return ChartOfAccounts.model_validate_json(Path(path).read_text(encoding="utf-8"))
