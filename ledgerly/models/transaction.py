"""
Core Data Models for Ledgerly

These models define the strict schemas for everything flowing through the
text-to-posting pipeline. They are designed to:
1. Enforce the bookkeeping invariants at construction time
2. Be immutable once built
3. Be serializable for the transport layer and for logging

All money values are whole numbers of the base currency unit (INR).
There is no paise/cents scaling anywhere in the pipeline.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Callable, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)

from ledgerly.errors import InvalidStatusTransitionError


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class AccountType(str, Enum):
    """The five account groups of double-entry bookkeeping."""
    ASSET = "Asset"
    LIABILITY = "Liability"
    INCOME = "Income"
    EXPENSE = "Expense"
    EQUITY = "Equity"


class Direction(str, Enum):
    """Whether money came in or went out."""
    INCOME = "income"
    EXPENSE = "expense"


class PaymentMode(str, Enum):
    """
    How the money moved.

    Only CASH settles against the Cash account; every other mode
    settles against Bank.
    """
    CASH = "Cash"
    BANK = "Bank"
    UPI = "UPI"


class TransactionStatus(str, Enum):
    """
    Transaction status.

    The pipeline only ever creates transactions. Moving a draft to
    confirmed is an explicit action taken outside the pipeline.
    """
    DRAFT = "draft"
    CONFIRMED = "confirmed"


# =============================================================================
# PIPELINE MODELS
# =============================================================================

class TextSignals(BaseModel):
    """
    Raw signals read from the entry text, before classification.
    """
    model_config = ConfigDict(frozen=True)

    amount: int = Field(ge=0)
    gst_rate: int = Field(default=0, ge=0)
    is_inclusive_gst: bool = False
    mode: PaymentMode = PaymentMode.CASH
    transaction_date: date
    raw_text: str


class ParsedIntent(BaseModel):
    """
    What the entry text says, after interpretation and classification.

    Ephemeral: built once per input and folded into a TransactionEvent.
    """
    model_config = ConfigDict(frozen=True)

    amount: int = Field(
        ...,
        ge=0,
        description="Amount in INR (0 when no amount was found)"
    )
    direction: Direction
    mode: PaymentMode = PaymentMode.CASH
    category: str = Field(
        ...,
        min_length=1,
        description="Account name the transaction is classified to"
    )
    account_type: AccountType
    gst_rate: int = Field(
        default=0,
        ge=0,
        description="GST rate in percent"
    )
    is_inclusive_gst: bool = False
    transaction_date: date = Field(
        ...,
        description="Calendar date the entry was made"
    )
    raw_text: str = Field(
        ...,
        description="Original entry text"
    )


class TaxSplit(BaseModel):
    """Base/tax breakdown of an amount."""
    model_config = ConfigDict(frozen=True)

    base: int = Field(ge=0)
    tax: int = Field(ge=0)
    total: int = Field(ge=0)

    @model_validator(mode='after')
    def validate_sum(self) -> 'TaxSplit':
        if self.base + self.tax != self.total:
            raise ValueError(
                f"Tax split does not add up: {self.base} + {self.tax} != {self.total}"
            )
        return self


class JournalEntry(BaseModel):
    """
    One line of a journal: a debit or a credit against a named account.

    A line may be all zero, but never carries both a debit and a credit.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    account: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Ledger account name"
    )
    debit: int = Field(default=0, ge=0)
    credit: int = Field(default=0, ge=0)

    @model_validator(mode='after')
    def validate_single_sided(self) -> 'JournalEntry':
        if self.debit and self.credit:
            raise ValueError(
                f"Journal entry for {self.account} has both a debit and a credit"
            )
        return self

    @classmethod
    def dr(cls, account: str, amount: int) -> 'JournalEntry':
        return cls(account=account, debit=amount)

    @classmethod
    def cr(cls, account: str, amount: int) -> 'JournalEntry':
        return cls(account=account, credit=amount)


class TransactionEvent(ParsedIntent):
    """
    A fully posted transaction.

    CRITICAL: total debits must equal total credits. A TransactionEvent
    that does not balance cannot be constructed.

    Immutable, apart from the status moving from draft to confirmed,
    which produces a new event (see confirmed()).
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Unique transaction id"
    )
    business_id: str = Field(
        ...,
        min_length=1,
        description="Business the transaction belongs to"
    )
    status: TransactionStatus = TransactionStatus.DRAFT
    tax: TaxSplit
    entries: list[JournalEntry] = Field(
        ...,
        min_length=1,
        description="Journal entries, in posting order"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking sanity-check messages"
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the transaction was posted"
    )

    @model_validator(mode='after')
    def validate_balanced(self) -> 'TransactionEvent':
        if self.total_debit != self.total_credit:
            raise ValueError(
                f"Journal entries are unbalanced: debits {self.total_debit} "
                f"!= credits {self.total_credit}"
            )
        return self

    @property
    def total_debit(self) -> int:
        return sum(entry.debit for entry in self.entries)

    @property
    def total_credit(self) -> int:
        return sum(entry.credit for entry in self.entries)

    def confirmed(self) -> 'TransactionEvent':
        """
        Return a copy of this transaction with status CONFIRMED.

        Raises InvalidStatusTransitionError if already confirmed.
        """
        if self.status != TransactionStatus.DRAFT:
            raise InvalidStatusTransitionError(
                self.status.value, TransactionStatus.CONFIRMED.value
            )
        return self.model_copy(update={"status": TransactionStatus.CONFIRMED})

    def to_wire_dict(self) -> dict:
        """
        Convert to the camelCase shape the transport layer sends to clients.
        """
        return {
            "id": self.id,
            "businessId": self.business_id,
            "status": self.status.value,
            "text": self.raw_text,
            "amount": self.amount,
            "direction": self.direction.value,
            "mode": self.mode.value,
            "category": self.category,
            "accountType": self.account_type.value,
            "gstRate": self.gst_rate,
            "isInclusiveGST": self.is_inclusive_gst,
            "date": self.transaction_date.isoformat(),
            "tax": {
                "base": self.tax.base,
                "tax": self.tax.tax,
                "total": self.tax.total,
            },
            "entries": [
                {"account": e.account, "debit": e.debit, "credit": e.credit}
                for e in self.entries
            ],
            "warnings": list(self.warnings),
            "createdAt": self.created_at.isoformat(),
        }

    def to_log_dict(self) -> dict:
        """
        Convert to a flat dictionary suitable for structured logging.
        """
        return {
            "transaction_id": self.id,
            "business_id": self.business_id,
            "status": self.status.value,
            "account_type": self.account_type.value,
            "category": self.category,
            "mode": self.mode.value,
            "amount": self.amount,
            "gst_rate": self.gst_rate,
            "tax": self.tax.tax,
            "total": self.tax.total,
            "entry_count": len(self.entries),
        }


class BusinessContext(BaseModel):
    """
    Caller-supplied context for one smart entry.

    id_source must return a unique id on every call, including calls
    made in the same millisecond. When omitted, the pipeline's default
    id source is used.
    """
    model_config = ConfigDict(frozen=True)

    business_id: str = Field(
        ...,
        min_length=1,
        description="Business the entry is posted to"
    )
    id_source: Optional[Callable[[], str]] = None
    initial_status: Optional[TransactionStatus] = Field(
        default=None,
        description="Overrides the configured default status"
    )
