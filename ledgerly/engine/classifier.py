"""
Transaction Classifier

Resolves the keywords in an entry into a direction, an account type and
a category account name.

DESIGN DECISION: We use simple keyword matching rather than NLP because:
1. Same text always gives the same postings
2. More transparent to the user
3. Easier to debug

The mapping is deliberately narrow and occasionally surprising
("food" and "lunch" post to Office Supplies). Extend it by adding rows
to the rule tables, not by adding branches.
"""

from typing import Optional, Sequence

from ledgerly.engine.rules import Rule, contains_any, first_match
from ledgerly.errors import ConfigurationGapError
from ledgerly.models.accounts import DEFAULT_CHART_OF_ACCOUNTS, ChartOfAccounts
from ledgerly.models.transaction import (
    AccountType,
    Direction,
    ParsedIntent,
    TextSignals,
)


DIRECTION_RULES: list[Rule] = [
    Rule(contains_any("received", "got", "sale"), Direction.INCOME),
]
DEFAULT_DIRECTION = Direction.EXPENSE

INCOME_CATEGORY_RULES: list[Rule] = [
    Rule(contains_any("refund"), "Refunds"),
]
DEFAULT_INCOME_CATEGORY = "Sales"

EXPENSE_CATEGORY_RULES: list[Rule] = [
    Rule(contains_any("rent"), "Rent"),
    Rule(contains_any("salary"), "Salary"),
    Rule(contains_any("food", "lunch"), "Office Supplies"),
]
DEFAULT_EXPENSE_CATEGORY = "General"

ACCOUNT_TYPE_BY_DIRECTION = {
    Direction.INCOME: AccountType.INCOME,
    Direction.EXPENSE: AccountType.EXPENSE,
}


class TransactionClassifier:
    """
    Classifies entry text using ordered rule tables.

    Stateless apart from its (immutable) chart and tables, so a single
    instance can be shared between threads.
    """

    def __init__(
        self,
        chart: Optional[ChartOfAccounts] = None,
        direction_rules: Optional[Sequence[Rule]] = None,
        income_category_rules: Optional[Sequence[Rule]] = None,
        expense_category_rules: Optional[Sequence[Rule]] = None,
    ):
        self._chart = chart or DEFAULT_CHART_OF_ACCOUNTS
        self._direction_rules = tuple(
            DIRECTION_RULES if direction_rules is None else direction_rules
        )
        self._category_rules = {
            Direction.INCOME: (
                tuple(INCOME_CATEGORY_RULES if income_category_rules is None else income_category_rules),
                DEFAULT_INCOME_CATEGORY,
            ),
            Direction.EXPENSE: (
                tuple(EXPENSE_CATEGORY_RULES if expense_category_rules is None else expense_category_rules),
                DEFAULT_EXPENSE_CATEGORY,
            ),
        }

    def direction_of(self, text: str) -> Direction:
        return first_match(self._direction_rules, text, DEFAULT_DIRECTION)

    def category_of(self, text: str, direction: Direction) -> str:
        rules, default = self._category_rules[direction]
        return first_match(rules, text, default)

    def classify(self, signals: TextSignals) -> ParsedIntent:
        """
        Attach direction, account type and category to the raw signals.

        Raises:
            ConfigurationGapError: If the rules produce a category the
                chart of accounts does not list under the account type.
        """
        direction = self.direction_of(signals.raw_text)
        account_type = ACCOUNT_TYPE_BY_DIRECTION[direction]
        category = self.category_of(signals.raw_text, direction)

        if not self._chart.permits(account_type, category):
            raise ConfigurationGapError(
                account_type=account_type.value,
                category=category,
                message=(
                    f"Category '{category}' is not in the chart of accounts "
                    f"under {account_type.value}"
                ),
            )

        return ParsedIntent(
            amount=signals.amount,
            direction=direction,
            mode=signals.mode,
            category=category,
            account_type=account_type,
            gst_rate=signals.gst_rate,
            is_inclusive_gst=signals.is_inclusive_gst,
            transaction_date=signals.transaction_date,
            raw_text=signals.raw_text,
        )
