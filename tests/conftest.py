"""Shared pytest fixtures for Ledgerly tests."""

from datetime import date, datetime, timezone

import pytest

from ledgerly.config import ValidationSettings, get_settings
from ledgerly.engine import (
    PostingRuleEngine,
    TaxSplitter,
    TextInterpreter,
    TransactionAssembler,
    TransactionClassifier,
)
from ledgerly.models import DEFAULT_CHART_OF_ACCOUNTS, BusinessContext
from ledgerly.pipeline import SmartEntryPipeline
from ledgerly.validation import TransactionValidator

FIXED_TODAY = date(2025, 1, 15)
FIXED_NOW = datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate tests from any .env file and cached settings."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def chart():
    return DEFAULT_CHART_OF_ACCOUNTS


@pytest.fixture
def classifier(chart):
    return TransactionClassifier(chart)


@pytest.fixture
def interpreter(classifier):
    """Interpreter with a fixed 'today'."""
    return TextInterpreter(classifier, today=lambda: FIXED_TODAY)


@pytest.fixture
def splitter():
    return TaxSplitter()


@pytest.fixture
def posting_engine(chart):
    return PostingRuleEngine(chart)


@pytest.fixture
def assembler():
    return TransactionAssembler(clock=lambda: FIXED_NOW)


@pytest.fixture
def validator():
    return TransactionValidator(ValidationSettings())


@pytest.fixture
def counter_id_source():
    """Deterministic id source: tx-1, tx-2, ..."""
    state = {"n": 0}

    def next_id() -> str:
        state["n"] += 1
        return f"tx-{state['n']}"

    return next_id


@pytest.fixture
def pipeline(chart, interpreter, assembler, validator, counter_id_source):
    return SmartEntryPipeline(
        chart=chart,
        interpreter=interpreter,
        assembler=assembler,
        validator=validator,
        id_source=counter_id_source,
    )


@pytest.fixture
def context():
    return BusinessContext(business_id="biz-001")
