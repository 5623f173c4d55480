"""Tests for the keyword rule tables and the transaction classifier."""

import pytest

from ledgerly.engine import Rule, TransactionClassifier, contains_any, first_match
from ledgerly.engine.classifier import EXPENSE_CATEGORY_RULES
from ledgerly.errors import ConfigurationGapError
from ledgerly.models import (
    DEFAULT_CHART_OF_ACCOUNTS,
    AccountType,
    ChartOfAccounts,
    Direction,
    PaymentMode,
    TextSignals,
)

from conftest import FIXED_TODAY


def signals_for(text: str) -> TextSignals:
    return TextSignals(amount=100, transaction_date=FIXED_TODAY, raw_text=text)


class TestRuleTables:
    """Tests for the rule table helpers."""

    def test_contains_any_is_case_insensitive(self):
        predicate = contains_any("Rent")
        assert predicate("PAID RENT")
        assert not predicate("paid salary")

    def test_first_match_respects_order(self):
        """Test the first accepting rule wins."""
        rules = [
            Rule(contains_any("bank"), "first"),
            Rule(contains_any("bank", "upi"), "second"),
        ]
        assert first_match(rules, "bank upi", "default") == "first"
        assert first_match(rules, "upi", "default") == "second"

    def test_first_match_default(self):
        assert first_match([], "anything", "default") == "default"


class TestDirection:
    """Tests for income/expense detection."""

    @pytest.mark.parametrize("text", [
        "Received 500 from Ravi",
        "Got 500 for consulting",
        "Cash sale 500",
    ])
    def test_income_keywords(self, classifier, text):
        intent = classifier.classify(signals_for(text))
        assert intent.direction == Direction.INCOME
        assert intent.account_type == AccountType.INCOME

    def test_expense_by_default(self, classifier):
        intent = classifier.classify(signals_for("Paid 500 to Ravi"))
        assert intent.direction == Direction.EXPENSE
        assert intent.account_type == AccountType.EXPENSE

    def test_direction_checked_before_category(self, classifier):
        """Test 'received' makes it income even when 'rent' is present."""
        intent = classifier.classify(signals_for("Received rent 8000"))
        assert intent.account_type == AccountType.INCOME
        assert intent.category == "Sales"


class TestCategories:
    """Tests for category resolution."""

    def test_refund_income(self, classifier):
        assert classifier.classify(signals_for("Got refund of 300")).category == "Refunds"

    @pytest.mark.parametrize("text,category", [
        ("Paid rent 5000", "Rent"),
        ("Paid salary 20000", "Salary"),
        ("Team lunch 1500", "Office Supplies"),
        ("Bought food 400", "Office Supplies"),
        ("Paid electrician 700", "General"),
    ])
    def test_expense_categories(self, classifier, text, category):
        assert classifier.classify(signals_for(text)).category == category

    def test_rent_checked_before_salary(self, classifier):
        """Test rule priority: rent comes before salary."""
        assert classifier.classify(signals_for("rent and salary 900")).category == "Rent"

    def test_substring_matching_is_preserved(self, classifier):
        """Test 'parent' matches the rent keyword."""
        assert classifier.classify(signals_for("Gift for parent 900")).category == "Rent"

    def test_signals_carried_through(self, classifier):
        """Test amount, mode and GST flags pass through unchanged."""
        signals = TextSignals(
            amount=1180,
            gst_rate=18,
            is_inclusive_gst=True,
            mode=PaymentMode.UPI,
            transaction_date=FIXED_TODAY,
            raw_text="Paid rent 1180 incl 18 gst upi",
        )
        intent = classifier.classify(signals)
        assert intent.amount == 1180
        assert intent.gst_rate == 18
        assert intent.is_inclusive_gst is True
        assert intent.mode == PaymentMode.UPI
        assert intent.transaction_date == FIXED_TODAY


class TestExtension:
    """Tests for extending and misconfiguring the rules."""

    def test_extra_rule_row(self):
        """Test new categories are added as rule rows."""
        accounts = dict(DEFAULT_CHART_OF_ACCOUNTS.accounts)
        accounts[AccountType.EXPENSE] = accounts[AccountType.EXPENSE] + ("Travel",)
        chart = ChartOfAccounts(accounts=accounts)
        classifier = TransactionClassifier(
            chart,
            expense_category_rules=EXPENSE_CATEGORY_RULES + [
                Rule(contains_any("taxi", "flight"), "Travel"),
            ],
        )
        assert classifier.classify(signals_for("Taxi 450")).category == "Travel"
        assert classifier.classify(signals_for("Paid rent 5000")).category == "Rent"

    def test_rule_outside_chart_fails_loudly(self):
        """Test a category missing from the chart raises ConfigurationGapError."""
        classifier = TransactionClassifier(
            DEFAULT_CHART_OF_ACCOUNTS,
            expense_category_rules=[Rule(contains_any("taxi"), "Travel")],
        )
        with pytest.raises(ConfigurationGapError) as exc_info:
            classifier.classify(signals_for("Taxi 450"))
        assert exc_info.value.category == "Travel"
        assert exc_info.value.account_type == "Expense"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
