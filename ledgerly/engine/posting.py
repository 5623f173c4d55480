"""
Posting Rule Engine

Turns a classified transaction into journal entries using a fixed
template per account type:

    Income     Dr Cash/Bank total;  Cr category base;  Cr GST Payable tax
    Expense    Dr category base;  Dr Input Tax Credit tax;  Cr Cash/Bank total
    Asset      Dr category amount;  Cr Cash/Bank amount
    Liability  Dr Cash/Bank amount;  Cr category amount
    Equity     Dr Cash/Bank amount;  Cr Capital amount

GST lines are left out when the tax is zero. Asset, Liability and
Equity post the raw amount with no tax split.

Entry order matters and is preserved. Every template balances.
"""

from typing import Callable, Optional, Union

from ledgerly.errors import ConfigurationGapError
from ledgerly.models.accounts import (
    BANK_ACCOUNT,
    CAPITAL_ACCOUNT,
    CASH_ACCOUNT,
    DEFAULT_CHART_OF_ACCOUNTS,
    GST_PAYABLE_ACCOUNT,
    INPUT_TAX_CREDIT_ACCOUNT,
    ChartOfAccounts,
)
from ledgerly.models.transaction import (
    AccountType,
    JournalEntry,
    PaymentMode,
    TaxSplit,
)

Template = Callable[[str, str, int, TaxSplit], list[JournalEntry]]


def settlement_account(mode: Union[PaymentMode, str]) -> str:
    """Cash only for exactly "Cash"; every other mode settles through Bank."""
    return CASH_ACCOUNT if mode == PaymentMode.CASH.value else BANK_ACCOUNT


def _income(category: str, settlement: str, amount: int, tax: TaxSplit) -> list[JournalEntry]:
    entries = [
        JournalEntry.dr(settlement, tax.total),
        JournalEntry.cr(category, tax.base),
    ]
    if tax.tax:
        entries.append(JournalEntry.cr(GST_PAYABLE_ACCOUNT, tax.tax))
    return entries


def _expense(category: str, settlement: str, amount: int, tax: TaxSplit) -> list[JournalEntry]:
    entries = [JournalEntry.dr(category, tax.base)]
    if tax.tax:
        entries.append(JournalEntry.dr(INPUT_TAX_CREDIT_ACCOUNT, tax.tax))
    entries.append(JournalEntry.cr(settlement, tax.total))
    return entries


def _asset(category: str, settlement: str, amount: int, tax: TaxSplit) -> list[JournalEntry]:
    return [
        JournalEntry.dr(category, amount),
        JournalEntry.cr(settlement, amount),
    ]


def _liability(category: str, settlement: str, amount: int, tax: TaxSplit) -> list[JournalEntry]:
    return [
        JournalEntry.dr(settlement, amount),
        JournalEntry.cr(category, amount),
    ]


def _equity(category: str, settlement: str, amount: int, tax: TaxSplit) -> list[JournalEntry]:
    return [
        JournalEntry.dr(settlement, amount),
        JournalEntry.cr(CAPITAL_ACCOUNT, amount),
    ]


POSTING_TEMPLATES: dict[AccountType, Template] = {
    AccountType.INCOME: _income,
    AccountType.EXPENSE: _expense,
    AccountType.ASSET: _asset,
    AccountType.LIABILITY: _liability,
    AccountType.EQUITY: _equity,
}


class PostingRuleEngine:
    """
    Generates balanced journal entries from posting templates.

    Fails loudly (ConfigurationGapError) rather than guessing when an
    account type has no template or a category is not in the chart.
    """

    def __init__(
        self,
        chart: Optional[ChartOfAccounts] = None,
        templates: Optional[dict[AccountType, Template]] = None,
    ):
        self._chart = chart or DEFAULT_CHART_OF_ACCOUNTS
        self._templates = dict(POSTING_TEMPLATES if templates is None else templates)

    def generate(
        self,
        account_type: AccountType,
        category: str,
        mode: Union[PaymentMode, str],
        amount: int,
        tax_split: TaxSplit,
    ) -> list[JournalEntry]:
        """
        Produce the journal entries for one transaction.

        Raises:
            ConfigurationGapError: No template for the account type, or
                the category is not listed under it in the chart.
        """
        template = self._templates.get(account_type)
        if template is None:
            raise ConfigurationGapError(
                account_type=str(getattr(account_type, "value", account_type)),
                category=category,
                message=f"No posting template for account type {account_type}",
            )

        # Equity always credits Capital, whatever the category
        if account_type != AccountType.EQUITY and not self._chart.permits(account_type, category):
            raise ConfigurationGapError(
                account_type=account_type.value,
                category=category,
                message=(
                    f"Category '{category}' is not in the chart of accounts "
                    f"under {account_type.value}"
                ),
            )

        return template(category, settlement_account(mode), amount, tax_split)
