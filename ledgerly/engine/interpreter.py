"""
Text Interpreter

Reads the raw signals out of a free-text entry such as
"Paid rent 5000 incl 18% gst via UPI":
- amount (first number in the text)
- GST rate and whether the amount includes GST
- payment mode
Direction and category are decided by the TransactionClassifier.

IMPORTANT BOUNDARIES:
1. This stage never fails on odd text; it falls back to defaults
2. A text with no amount gives amount 0 - rejecting it is the
   pipeline's job, not this stage's
3. Dates are never read from the text; the entry is dated today
"""

import re
from datetime import date
from typing import Callable, Optional

from ledgerly.engine.classifier import TransactionClassifier
from ledgerly.engine.rules import Rule, contains_any, first_match
from ledgerly.engine.tax import round_half_up
from ledgerly.models.transaction import ParsedIntent, PaymentMode, TextSignals


# Digits with optional thousands separators (Indian or western grouping)
# and an optional 1-2 digit decimal part
AMOUNT_PATTERN = re.compile(r"\d+(?:,\d+)*(?:\.\d{1,2})?")
INTEGER_TOKEN = re.compile(r"\d+")

GST_KEYWORD = "gst"

MODE_RULES: list[Rule] = [
    Rule(contains_any("bank", "transfer"), PaymentMode.BANK),
    Rule(contains_any("upi"), PaymentMode.UPI),
]
DEFAULT_MODE = PaymentMode.CASH

INCLUSIVE_RULES: list[Rule] = [
    Rule(contains_any("incl", "included"), True),
]


class TextInterpreter:
    """
    Extracts amount, GST and payment mode from entry text.

    The GST rate scan is independent of the amount scan. It takes the
    first integer outside the amount; when the amount holds the only
    digits in the text, reuse_amount_digits decides whether those digits
    are read as the rate (legacy behavior) or the default rate applies.
    """

    def __init__(
        self,
        classifier: Optional[TransactionClassifier] = None,
        default_gst_rate: int = 18,
        reuse_amount_digits: bool = True,
        today: Callable[[], date] = date.today,
    ):
        self._classifier = classifier or TransactionClassifier()
        self._default_gst_rate = default_gst_rate
        self._reuse_amount_digits = reuse_amount_digits
        self._today = today

    @property
    def classifier(self) -> TransactionClassifier:
        return self._classifier

    def _extract_amount(self, text: str) -> tuple[int, Optional[re.Match]]:
        match = AMOUNT_PATTERN.search(text)
        if match is None:
            return 0, None
        return round_half_up(match.group().replace(",", "")), match

    def _extract_gst_rate(self, text: str, amount_match: Optional[re.Match]) -> int:
        if GST_KEYWORD not in text.lower():
            return 0

        tokens = list(INTEGER_TOKEN.finditer(text))
        if amount_match is not None:
            start, end = amount_match.span()
            outside = [t for t in tokens if t.end() <= start or t.start() >= end]
        else:
            outside = tokens

        if outside:
            return int(outside[0].group())
        if tokens and self._reuse_amount_digits:
            return int(tokens[0].group())
        return self._default_gst_rate

    def extract_signals(self, raw_text: str) -> TextSignals:
        """Read amount, GST, inclusivity and payment mode from the text."""
        amount, amount_match = self._extract_amount(raw_text)

        return TextSignals(
            amount=amount,
            gst_rate=self._extract_gst_rate(raw_text, amount_match),
            is_inclusive_gst=first_match(INCLUSIVE_RULES, raw_text, False),
            mode=first_match(MODE_RULES, raw_text, DEFAULT_MODE),
            transaction_date=self._today(),
            raw_text=raw_text,
        )

    def parse(self, raw_text: str) -> ParsedIntent:
        """
        Interpret an entry and classify it.

        Returns a ParsedIntent; amount is 0 when the text has no number.
        """
        return self._classifier.classify(self.extract_signals(raw_text))
