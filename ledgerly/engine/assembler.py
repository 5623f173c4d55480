"""
Transaction Assembler

Combines a parsed intent and its journal entries with the caller's
identity context into a TransactionEvent.

Ids come from a caller-supplied source. A bare millisecond timestamp is
not unique (two entries in the same millisecond collide), so the
timestamp source appends a per-millisecond sequence number.
"""

import threading
import time
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional
from uuid import uuid4

from ledgerly.models.transaction import (
    JournalEntry,
    ParsedIntent,
    TaxSplit,
    TransactionEvent,
    TransactionStatus,
)

IdSource = Callable[[], str]


class TimestampIdSource:
    """
    Millisecond-timestamp ids, disambiguated with a sequence number.

    Produces "<epoch ms>-<sequence>", e.g. "1735689600000-0",
    "1735689600000-1". Safe to share between threads.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._last_millis = -1
        self._sequence = 0

    def __call__(self) -> str:
        with self._lock:
            millis = int(self._clock() * 1000)
            if millis <= self._last_millis:
                # Same millisecond, or the clock stepped backwards
                millis = self._last_millis
                self._sequence += 1
            else:
                self._last_millis = millis
                self._sequence = 0
            return f"{millis}-{self._sequence}"


def uuid_id_source() -> str:
    """Random UUID4 ids."""
    return str(uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TransactionAssembler:
    """Builds TransactionEvents with a configurable initial status."""

    def __init__(
        self,
        default_status: TransactionStatus = TransactionStatus.DRAFT,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._default_status = default_status
        self._clock = clock

    @property
    def default_status(self) -> TransactionStatus:
        return self._default_status

    def assemble(
        self,
        intent: ParsedIntent,
        entries: list[JournalEntry],
        business_id: str,
        id_source: IdSource,
        tax: TaxSplit,
        warnings: Iterable[str] = (),
        status: Optional[TransactionStatus] = None,
    ) -> TransactionEvent:
        """
        Create the finished transaction.

        Raises pydantic.ValidationError if the entries do not balance.
        """
        return TransactionEvent(
            **intent.model_dump(),
            id=id_source(),
            business_id=business_id,
            status=status or self._default_status,
            tax=tax,
            entries=entries,
            warnings=list(warnings),
            created_at=self._clock(),
        )
