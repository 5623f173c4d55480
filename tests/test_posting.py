"""Tests for the posting rule engine."""

import pytest

from ledgerly.engine import PostingRuleEngine, TaxSplitter, settlement_account
from ledgerly.errors import ConfigurationGapError
from ledgerly.models import AccountType, JournalEntry, PaymentMode, TaxSplit

CATEGORY_FOR = {
    AccountType.INCOME: "Sales",
    AccountType.EXPENSE: "Rent",
    AccountType.ASSET: "Equipment",
    AccountType.LIABILITY: "Loan",
    AccountType.EQUITY: "Capital",
}


def no_tax(amount: int) -> TaxSplit:
    return TaxSplit(base=amount, tax=0, total=amount)


class TestSettlementAccount:
    """Tests for Cash/Bank resolution."""

    def test_cash(self):
        assert settlement_account(PaymentMode.CASH) == "Cash"
        assert settlement_account("Cash") == "Cash"

    @pytest.mark.parametrize("mode", [PaymentMode.BANK, PaymentMode.UPI, "UPI", "cash", "cheque", ""])
    def test_everything_else_is_bank(self, mode):
        """Test only an exact 'Cash' settles through Cash."""
        assert settlement_account(mode) == "Bank"


class TestTemplates:
    """Tests for each posting template."""

    def test_income_without_tax(self, posting_engine):
        entries = posting_engine.generate(
            AccountType.INCOME, "Sales", PaymentMode.CASH, 10000, no_tax(10000)
        )
        assert entries == [
            JournalEntry.dr("Cash", 10000),
            JournalEntry.cr("Sales", 10000),
        ]

    def test_income_with_tax(self, posting_engine, splitter):
        entries = posting_engine.generate(
            AccountType.INCOME, "Sales", PaymentMode.UPI, 1000, splitter.split(1000, 18, False)
        )
        assert entries == [
            JournalEntry.dr("Bank", 1180),
            JournalEntry.cr("Sales", 1000),
            JournalEntry.cr("GST Payable", 180),
        ]

    def test_expense_without_tax(self, posting_engine):
        entries = posting_engine.generate(
            AccountType.EXPENSE, "Rent", PaymentMode.CASH, 5000, no_tax(5000)
        )
        assert entries == [
            JournalEntry.dr("Rent", 5000),
            JournalEntry.cr("Cash", 5000),
        ]

    def test_expense_with_inclusive_tax(self, posting_engine, splitter):
        entries = posting_engine.generate(
            AccountType.EXPENSE, "Rent", PaymentMode.CASH, 5000, splitter.split(5000, 18, True)
        )
        assert entries == [
            JournalEntry.dr("Rent", 4237),
            JournalEntry.dr("Input Tax Credit", 763),
            JournalEntry.cr("Cash", 5000),
        ]

    def test_asset_ignores_tax_split(self, posting_engine, splitter):
        """Test asset purchases post the raw amount."""
        entries = posting_engine.generate(
            AccountType.ASSET, "Equipment", PaymentMode.BANK, 25000, splitter.split(25000, 18, False)
        )
        assert entries == [
            JournalEntry.dr("Equipment", 25000),
            JournalEntry.cr("Bank", 25000),
        ]

    def test_liability(self, posting_engine):
        entries = posting_engine.generate(
            AccountType.LIABILITY, "Loan", PaymentMode.BANK, 200000, no_tax(200000)
        )
        assert entries == [
            JournalEntry.dr("Bank", 200000),
            JournalEntry.cr("Loan", 200000),
        ]

    def test_equity_always_credits_capital(self, posting_engine):
        """Test equity ignores the category and credits Capital."""
        entries = posting_engine.generate(
            AccountType.EQUITY, "Owner Investment", PaymentMode.CASH, 50000, no_tax(50000)
        )
        assert entries == [
            JournalEntry.dr("Cash", 50000),
            JournalEntry.cr("Capital", 50000),
        ]


class TestBalance:
    """Every template balances for every valid input."""

    @pytest.mark.parametrize("account_type", list(AccountType))
    @pytest.mark.parametrize("amount", [0, 99, 123457])
    @pytest.mark.parametrize("rate,inclusive", [(0, False), (18, True), (18, False), (100, True)])
    def test_debits_equal_credits(self, posting_engine, account_type, amount, rate, inclusive):
        split = TaxSplitter().split(amount, rate, inclusive)
        entries = posting_engine.generate(
            account_type, CATEGORY_FOR[account_type], PaymentMode.UPI, amount, split
        )
        assert sum(e.debit for e in entries) == sum(e.credit for e in entries)
        assert all(not (e.debit and e.credit) for e in entries)


class TestConfigurationGaps:
    """Tests for loud failures on unknown combinations."""

    def test_category_not_in_chart(self, posting_engine):
        with pytest.raises(ConfigurationGapError) as exc_info:
            posting_engine.generate(AccountType.EXPENSE, "Travel", PaymentMode.CASH, 100, no_tax(100))
        assert exc_info.value.category == "Travel"

    def test_category_under_wrong_type(self, posting_engine):
        """Test an income account cannot be used as an expense."""
        with pytest.raises(ConfigurationGapError):
            posting_engine.generate(AccountType.EXPENSE, "Sales", PaymentMode.CASH, 100, no_tax(100))

    def test_missing_template(self, chart):
        engine = PostingRuleEngine(chart, templates={})
        with pytest.raises(ConfigurationGapError, match="No posting template"):
            engine.generate(AccountType.INCOME, "Sales", PaymentMode.CASH, 100, no_tax(100))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
