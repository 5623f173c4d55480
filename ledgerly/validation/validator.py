"""
Posting Sanity Checks

Runs after the postings are generated and before the transaction is
assembled. Checks:
- debits equal credits (guard; the models already enforce this)
- amount is not absurdly large
- GST rate is a standard slab
- GST rate is not obviously the amount misread as a rate
- a category keyword actually matched (not the General fallback)

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for human review while the transaction is still a draft.
"""

from typing import Optional

from ledgerly.config import ValidationSettings, get_settings
from ledgerly.engine.classifier import DEFAULT_EXPENSE_CATEGORY
from ledgerly.models.transaction import AccountType, JournalEntry, ParsedIntent
from ledgerly.models.validation import ValidationIssue, ValidationResult


class TransactionValidator:
    """Reports suspicious but postable transactions."""

    def __init__(self, settings: Optional[ValidationSettings] = None):
        self._settings = settings or get_settings().validation

    def _check_balance(self, entries: list[JournalEntry]) -> list[ValidationIssue]:
        debits = sum(e.debit for e in entries)
        credits = sum(e.credit for e in entries)
        if debits == credits:
            return []
        return [ValidationIssue(
            field="entries",
            issue_type="unbalanced",
            message=f"Debits (₹{debits:,}) do not equal credits (₹{credits:,})",
            severity="error",
        )]

    def _check_amount(self, intent: ParsedIntent) -> list[ValidationIssue]:
        max_amount = self._settings.max_transaction_amount_inr
        if intent.amount <= max_amount:
            return []
        return [ValidationIssue(
            field="amount",
            issue_type="suspicious_value",
            message=f"Amount (₹{intent.amount:,}) seems unusually high",
            severity="warning",
            suggested_fix="Please verify this amount is correct",
        )]

    def _check_gst_rate(self, intent: ParsedIntent) -> list[ValidationIssue]:
        if intent.gst_rate > 100:
            return [ValidationIssue(
                field="gst_rate",
                issue_type="suspicious_value",
                message=(
                    f"GST rate ({intent.gst_rate}%) looks like the amount was "
                    "read as the rate"
                ),
                severity="warning",
                suggested_fix="Mention the rate explicitly, e.g. '18% gst'",
            )]
        if intent.gst_rate and intent.gst_rate not in self._settings.standard_gst_rates_list:
            return [ValidationIssue(
                field="gst_rate",
                issue_type="non_standard_rate",
                message=f"GST rate ({intent.gst_rate}%) is not a standard slab",
                severity="warning",
                suggested_fix="Please verify the GST rate",
            )]
        return []

    def _check_category(self, intent: ParsedIntent) -> list[ValidationIssue]:
        if intent.account_type == AccountType.EXPENSE and intent.category == DEFAULT_EXPENSE_CATEGORY:
            return [ValidationIssue(
                field="category",
                issue_type="fallback",
                message=f"No category keyword matched; posted to {DEFAULT_EXPENSE_CATEGORY}",
                severity="info",
            )]
        return []

    def validate(
        self,
        intent: ParsedIntent,
        entries: list[JournalEntry],
    ) -> ValidationResult:
        """
        Run all checks.

        Returns:
            ValidationResult with all issues found
        """
        issues = []
        issues.extend(self._check_balance(entries))
        issues.extend(self._check_amount(intent))
        issues.extend(self._check_gst_rate(intent))
        issues.extend(self._check_category(intent))

        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Generate a user-friendly summary of validation results.

        This is what we show next to the postings preview.
        """
        if result.is_valid and not result.issues:
            return "✅ All checks passed! Please review the postings below."

        lines = []

        if result.has_errors:
            lines.append("❌ This entry cannot be posted:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")

        warnings = [i for i in result.issues if i.severity != "error"]
        if warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for issue in warnings:
                lines.append(f"   • {issue.message}")
                if issue.suggested_fix:
                    lines.append(f"     💡 {issue.suggested_fix}")

        return "\n".join(lines)
