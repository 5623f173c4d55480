"""
Accounting engine package.

The text-to-posting stages, in pipeline order:
TextInterpreter -> TransactionClassifier -> TaxSplitter ->
PostingRuleEngine -> TransactionAssembler
"""

from ledgerly.engine.assembler import (
    TimestampIdSource,
    TransactionAssembler,
    uuid_id_source,
)
from ledgerly.engine.classifier import TransactionClassifier
from ledgerly.engine.interpreter import TextInterpreter
from ledgerly.engine.posting import PostingRuleEngine, settlement_account
from ledgerly.engine.rules import Rule, contains_any, first_match
from ledgerly.engine.tax import TaxSplitter, round_half_up

__all__ = [
    "PostingRuleEngine",
    "Rule",
    "TaxSplitter",
    "TextInterpreter",
    "TimestampIdSource",
    "TransactionAssembler",
    "TransactionClassifier",
    "contains_any",
    "first_match",
    "round_half_up",
    "settlement_account",
    "uuid_id_source",
]
