"""Sentence translation and gloss report building on top of LookupEngine."""

import logging
from collections.abc import Iterable
from functools import lru_cache
from typing import Self

from services.jmdict import JMDictionary
from services.lookup import GlossCollection, LookupEngine
from services.tokenizer import SudachiTokenizer, Tokenizer

logger = logging.getLogger(__name__)

GlossReport = dict[str, GlossCollection]


class GlossAggregator:
    """Runs the lookup engine over many words."""

    def __init__(self, engine: LookupEngine, tokenizer: Tokenizer) -> None:
        self._engine = engine
        self._tokenizer = tokenizer

    @classmethod
    @lru_cache(maxsize=1)
    def get_instance(cls) -> Self:
        """Get or create a singleton backed by JMdict and SudachiPy."""
        return cls.from_dictionary(JMDictionary.get_instance())

    @classmethod
    def from_dictionary(cls, jmdict: JMDictionary, tokenizer: Tokenizer | None = None) -> Self:
        """Wire an engine and aggregator around a loaded JMDictionary."""
        tokenizer = tokenizer or SudachiTokenizer()
        return cls(LookupEngine(jmdict.index, tokenizer), tokenizer)

    @property
    def engine(self) -> LookupEngine:
        return self._engine

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    def tokenize(self, text: str) -> list[str]:
        return self._tokenizer.tokenize(text)

    def translate_sentence(self, text: str) -> str:
        """
        Word-by-word translation using the first gloss of every token.

        Each pick is followed by a single space, including the last one.
        Unresolved tokens become "UNKNOWN".
        """
        return self.translate_tokens(self.tokenize(text))

    def translate_tokens(self, tokens: Iterable[str]) -> str:
        """Same as translate_sentence for text that is already tokenized."""
        return "".join(f"{self._engine.resolve_first(token)} " for token in tokens)

    def build_report(self, words: Iterable[str]) -> GlossReport:
        """Every gloss for every word, keyed by word (last write wins)."""
        report: GlossReport = {}
        for word in words:
            report[word] = self._engine.resolve(word)
        logger.debug("Built gloss report for %d words", len(report))
        return report

    def build_report_for_text(self, text: str) -> GlossReport:
        """Tokenize ``text`` and report on each token."""
        return self.build_report(self.tokenize(text))
