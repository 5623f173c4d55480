"""
Smart Entry Pipeline

Ties the engine stages together into the single entry point used by
callers:

    text -> interpret -> classify -> split GST -> post -> validate -> assemble

DESIGN DECISION: The pipeline enforces the boundaries:
- No amount, no transaction (AmountNotFoundError before classification or posting)
- No template, no guessing (ConfigurationGapError)
- No unbalanced transaction can be built
- Every step is logged under one correlation id

The pipeline is synchronous and holds no mutable state of its own, so
one instance can serve any number of concurrent callers. Storing the
result and confirming it later are the caller's business.
"""

from datetime import date, datetime
from functools import lru_cache
from typing import Callable, Optional
from uuid import UUID

from ledgerly.config import Settings, get_settings
from ledgerly.engine.assembler import (
    IdSource,
    TimestampIdSource,
    TransactionAssembler,
    utc_now,
    uuid_id_source,
)
from ledgerly.engine.classifier import TransactionClassifier
from ledgerly.engine.interpreter import TextInterpreter
from ledgerly.engine.posting import PostingRuleEngine
from ledgerly.engine.tax import TaxSplitter
from ledgerly.errors import AmountNotFoundError, ConfigurationGapError
from ledgerly.models.accounts import (
    DEFAULT_CHART_OF_ACCOUNTS,
    ChartOfAccounts,
    load_chart_of_accounts,
)
from ledgerly.models.transaction import BusinessContext, TransactionEvent
from ledgerly.observability import configure_logging, create_correlation_id, get_logger
from ledgerly.validation import TransactionValidator

logger = get_logger(__name__)


class SmartEntryPipeline:
    """
    Orchestrates one smart entry from text to posted transaction.

    Flow:
    1. Interpret  -> amount, GST, payment mode
    2. Reject     -> AmountNotFoundError if no amount
    3. Classify   -> direction, account type, category
    4. Split      -> base / tax / total
    5. Post       -> balanced journal entries
    6. Validate   -> non-blocking warnings
    7. Assemble   -> TransactionEvent (draft by default)
    """

    def __init__(
        self,
        chart: Optional[ChartOfAccounts] = None,
        interpreter: Optional[TextInterpreter] = None,
        tax_splitter: Optional[TaxSplitter] = None,
        posting_engine: Optional[PostingRuleEngine] = None,
        assembler: Optional[TransactionAssembler] = None,
        validator: Optional[TransactionValidator] = None,
        id_source: Optional[IdSource] = None,
    ):
        chart = chart or DEFAULT_CHART_OF_ACCOUNTS
        self._chart = chart
        self._interpreter = interpreter or TextInterpreter(TransactionClassifier(chart))
        self._tax_splitter = tax_splitter or TaxSplitter()
        self._posting_engine = posting_engine or PostingRuleEngine(chart)
        self._assembler = assembler or TransactionAssembler()
        self._validator = validator or TransactionValidator()
        self._id_source = id_source or TimestampIdSource()

    @property
    def chart(self) -> ChartOfAccounts:
        return self._chart

    @property
    def validator(self) -> TransactionValidator:
        return self._validator

    def interpret_and_post(
        self,
        raw_text: str,
        context: BusinessContext,
        correlation_id: Optional[UUID] = None,
    ) -> TransactionEvent:
        """
        Turn entry text into a posted transaction.

        Args:
            raw_text: Free-form entry, e.g. "Paid rent 5000 incl 18% gst"
            context: Business id and optional id source / initial status
            correlation_id: Ties together the log lines for this entry

        Returns:
            The posted TransactionEvent (not persisted)

        Raises:
            AmountNotFoundError: If the text holds no usable amount
            ConfigurationGapError: If the category is not in the chart or
                the account type has no posting template
        """
        correlation_id = correlation_id or create_correlation_id()
        log = logger.bind(
            correlation_id=str(correlation_id),
            business_id=context.business_id,
        )
        log.info("smart_entry_received", text=raw_text)

        # The amount is checked before classification can fail
        signals = self._interpreter.extract_signals(raw_text)
        if signals.amount == 0:
            log.warning("amount_not_found", text=raw_text)
            raise AmountNotFoundError(raw_text)

        try:
            intent = self._interpreter.classifier.classify(signals)
            tax = self._tax_splitter.split(
                intent.amount, intent.gst_rate, intent.is_inclusive_gst
            )
            entries = self._posting_engine.generate(
                intent.account_type,
                intent.category,
                intent.mode,
                intent.amount,
                tax,
            )
        except ConfigurationGapError as e:
            log.error(
                "configuration_gap",
                account_type=e.account_type,
                category=e.category,
                error=str(e),
            )
            raise

        result = self._validator.validate(intent, entries)
        for message in result.warnings:
            log.warning("smart_entry_warning", message=message)

        event = self._assembler.assemble(
            intent,
            entries,
            business_id=context.business_id,
            id_source=context.id_source or self._id_source,
            tax=tax,
            warnings=result.warnings,
            status=context.initial_status,
        )

        log.info("smart_entry_posted", **event.to_log_dict())
        return event


def create_pipeline(
    settings: Optional[Settings] = None,
    today: Callable[[], date] = date.today,
    clock: Callable[[], datetime] = utc_now,
) -> SmartEntryPipeline:
    """
    Factory function to build a pipeline from settings.

    Loads the chart of accounts once (from the configured JSON file, if
    any) and configures logging.
    """
    settings = settings or get_settings()
    app_settings = settings.app
    engine_settings = settings.engine

    configure_logging(level=app_settings.log_level, json_logs=app_settings.json_logs)

    if engine_settings.chart_of_accounts_path is not None:
        chart = load_chart_of_accounts(engine_settings.chart_of_accounts_path)
        logger.info(
            "chart_of_accounts_loaded",
            path=str(engine_settings.chart_of_accounts_path),
        )
    else:
        chart = DEFAULT_CHART_OF_ACCOUNTS

    id_source = (
        uuid_id_source if engine_settings.id_strategy == "uuid" else TimestampIdSource()
    )

    return SmartEntryPipeline(
        chart=chart,
        interpreter=TextInterpreter(
            TransactionClassifier(chart),
            default_gst_rate=engine_settings.default_gst_rate,
            reuse_amount_digits=engine_settings.gst_rate_reuses_amount_digits,
            today=today,
        ),
        posting_engine=PostingRuleEngine(chart),
        assembler=TransactionAssembler(
            default_status=engine_settings.default_status,
            clock=clock,
        ),
        validator=TransactionValidator(settings.validation),
        id_source=id_source,
    )


@lru_cache()
def get_default_pipeline() -> SmartEntryPipeline:
    """Pipeline built from the process settings (cached)."""
    return create_pipeline()


def interpret_and_post(raw_text: str, context: BusinessContext) -> TransactionEvent:
    """Run one smart entry through the default pipeline."""
    return get_default_pipeline().interpret_and_post(raw_text, context)
