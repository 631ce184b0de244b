"""
Tab-separated gloss reports.

Each record is one of:

    <kanji>  TAB  <kana>  TAB  <gloss> [TAB <gloss> ...]   (one row per reading)
    <kana>   TAB  <gloss> [TAB <gloss> ...]
    <word>   TAB  NO_ENTRY_FOUND

Decomposed phrases do not get a row of their own; their sub-tokens are
reported as if they had been looked up directly. Fields are not quoted or
escaped, so a tab or newline inside a gloss breaks the row.
"""

import logging
from collections.abc import Iterator, Mapping
from operator import itemgetter
from pathlib import Path

from services.lookup import (
    Decomposed,
    GlossCollection,
    KanaOnly,
    KanjiWithReadings,
    NotFound,
)

logger = logging.getLogger(__name__)

NO_ENTRY_FOUND = "NO_ENTRY_FOUND"


class ReportWriteError(RuntimeError):
    """The report file could not be opened for writing."""


def _dissolve(word: str, collection: GlossCollection) -> Iterator[tuple[str, GlossCollection]]:
    """Yield (key, collection) pairs with decompositions flattened out."""
    if isinstance(collection, Decomposed):
        for token, sub_collection in collection.entries.items():
            yield from _dissolve(token, sub_collection)
    else:
        yield word, collection


def _records_for(key: str, collection: GlossCollection) -> list[list[str]]:
    if isinstance(collection, KanjiWithReadings):
        return [[key, kana, "\t".join(glosses)] for kana, glosses in collection.readings.items()]
    if isinstance(collection, KanaOnly):
        return [[key, "\t".join(collection.glosses)]]
    if isinstance(collection, NotFound):
        return [[key, NO_ENTRY_FOUND]]
    raise TypeError(f"Unexpected gloss collection: {collection!r}")


def serialize(report: Mapping[str, GlossCollection]) -> list[list[str]]:
    """Turn a gloss report into records, sorted by word."""
    pairs = [pair for word, collection in report.items() for pair in _dissolve(word, collection)]
    # Stable: a sub-token equal to another key keeps both rows
    pairs.sort(key=itemgetter(0))

    records = []
    for key, collection in pairs:
        records.extend(_records_for(key, collection))
    return records


def format_report(records: list[list[str]]) -> str:
    return "".join("\t".join(record) + "\n" for record in records)


def write_report(path: Path | str, report: Mapping[str, GlossCollection]) -> int:
    """
    Write ``report`` to ``path`` as UTF-8 TSV.

    Returns:
        Number of records written.

    Raises:
        ReportWriteError: If the file cannot be opened.
    """
    records = serialize(report)
    try:
        fh = open(path, "w", encoding="utf-8", newline="")
    except OSError as e:
        raise ReportWriteError(f"Cannot open {path} for writing: {e.strerror or e}") from e

    with fh:
        fh.write(format_report(records))

    logger.info("Wrote %d records to %s", len(records), path)
    return len(records)
