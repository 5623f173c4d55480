"""
Ordered keyword rule tables.

A rule table is a list of (predicate, result) pairs evaluated top to
bottom; the first predicate that accepts the text wins, otherwise the
table's default applies. Priority and fallthrough are therefore data,
visible in one place and testable on their own.

Usage:
    MODE_RULES = [
        Rule(contains_any("bank", "transfer"), PaymentMode.BANK),
        Rule(contains_any("upi"), PaymentMode.UPI),
    ]
    mode = first_match(MODE_RULES, text, default=PaymentMode.CASH)
"""

from typing import Any, Callable, NamedTuple, Sequence

Predicate = Callable[[str], bool]


class Rule(NamedTuple):
    """One row of a rule table."""
    predicate: Predicate
    result: Any


def contains_any(*keywords: str) -> Predicate:
    """
    Build a predicate matching text that contains any keyword.

    Matching is case-insensitive substring matching: "parent" contains
    "rent".
    """
    lowered = tuple(keyword.lower() for keyword in keywords)

    def predicate(text: str) -> bool:
        text = text.lower()
        return any(keyword in text for keyword in lowered)

    return predicate


def first_match(rules: Sequence[Rule], text: str, default: Any) -> Any:
    """Return the result of the first rule whose predicate accepts text."""
    for rule in rules:
        if rule.predicate(text):
            return rule.result
    return default
