"""Translation service - provides the functions behind the API endpoints.

- translate_text: Word-by-word sentence translation
- report_glosses: Every gloss for every word, plus the TSV report
- to_gloss_entry: GlossCollection -> API model
"""

from models import GlossEntry, ReportResponse, TranslateResponse
from services.aggregator import GlossAggregator
from services.lookup import (
    Decomposed,
    GlossCollection,
    KanaOnly,
    KanjiWithReadings,
)
from services.report import format_report, serialize


def to_gloss_entry(word: str, collection: GlossCollection) -> GlossEntry:
    """Convert a gloss collection to its response model."""
    fields = {}
    if isinstance(collection, KanaOnly):
        fields["glosses"] = list(collection.glosses)
    elif isinstance(collection, KanjiWithReadings):
        fields["readings"] = {kana: list(glosses) for kana, glosses in collection.readings.items()}
    elif isinstance(collection, Decomposed):
        fields["components"] = [to_gloss_entry(token, sub) for token, sub in collection.entries.items()]
    return GlossEntry(word=word, kind=collection.kind, **fields)


def translate_text(aggregator: GlossAggregator, text: str) -> TranslateResponse:
    """Translate a sentence using the first gloss of each word."""
    tokens = aggregator.tokenize(text)
    return TranslateResponse(
        text=text,
        translation=aggregator.translate_tokens(tokens),
        tokens=tokens,
    )


def report_glosses(aggregator: GlossAggregator, text: str = "", words: list[str] | None = None) -> ReportResponse:
    """Build the full gloss report for ``words``, or for the tokens of ``text``."""
    if words is not None:
        report = aggregator.build_report(words)
    else:
        report = aggregator.build_report_for_text(text)

    return ReportResponse(
        entries=[to_gloss_entry(word, collection) for word, collection in report.items()],
        count=len(report),
        tsv=format_report(serialize(report)),
    )
