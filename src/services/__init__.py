"""Japanese-English gloss lookup services."""

from .aggregator import GlossAggregator, GlossReport
from .jmdict import DictionaryIndex, DictionaryLoadError, JMDictionary, Sense
from .lookup import (
    UNKNOWN,
    Decomposed,
    GlossCollection,
    KanaOnly,
    KanjiWithReadings,
    LookupEngine,
    NotFound,
)
from .report import (
    NO_ENTRY_FOUND,
    ReportWriteError,
    format_report,
    serialize,
    write_report,
)
from .tokenizer import SudachiTokenizer, Tokenizer

__all__ = [
    # Dictionary
    "DictionaryIndex",
    "DictionaryLoadError",
    "JMDictionary",
    "Sense",
    # Tokenizer
    "SudachiTokenizer",
    "Tokenizer",
    # Lookup
    "UNKNOWN",
    "Decomposed",
    "GlossCollection",
    "KanaOnly",
    "KanjiWithReadings",
    "LookupEngine",
    "NotFound",
    # Aggregation
    "GlossAggregator",
    "GlossReport",
    # Report
    "NO_ENTRY_FOUND",
    "ReportWriteError",
    "format_report",
    "serialize",
    "write_report",
]
