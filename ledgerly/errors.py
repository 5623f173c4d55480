"""
Ledgerly error types.

Only two things can stop a smart entry: a text with no amount in it, and
a classification the posting rules do not cover. Everything else
(unknown payment mode, unknown category keyword, odd GST phrasing)
resolves to a documented default.
"""


class LedgerlyError(Exception):
    """Base exception for Ledgerly errors."""
    pass


class AmountNotFoundError(LedgerlyError):
    """No usable amount could be read from the entry text.

    Surfaced to the user as an input error.
    """

    def __init__(self, raw_text: str, message: str = "No valid amount found in text"):
        self.raw_text = raw_text
        super().__init__(message)


class ConfigurationGapError(LedgerlyError):
    """An account type / category pair has no posting template.

    Only reachable when the classification rules are extended without
    updating the posting rules or the chart of accounts.
    """

    def __init__(self, account_type: str, category: str, message: str):
        self.account_type = account_type
        self.category = category
        super().__init__(message)


class InvalidStatusTransitionError(LedgerlyError):
    """Transaction status change not allowed (e.g. confirming twice)."""

    def __init__(self, current_status: str, requested_status: str):
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            f"Cannot move transaction from '{current_status}' to '{requested_status}'"
        )
