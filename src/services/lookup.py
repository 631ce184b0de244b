"""Resolve single Japanese words to English glosses."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar

from services import settings
from services.jmdict import DictionaryIndex, Sense
from services.tokenizer import Tokenizer

logger = logging.getLogger(__name__)

UNKNOWN = "UNKNOWN"


# ============================================================================
# Gloss Collections
# ============================================================================


@dataclass(frozen=True, slots=True)
class NotFound:
    """No dictionary hit, and decomposition gave nothing more."""

    kind: ClassVar[str] = "not_found"


@dataclass(frozen=True, slots=True)
class KanaOnly:
    """Word matched directly in the kana index."""

    glosses: tuple[str, ...] = ()

    kind: ClassVar[str] = "kana_only"

    def __post_init__(self) -> None:
        object.__setattr__(self, "glosses", tuple(self.glosses))


@dataclass(frozen=True, slots=True)
class KanjiWithReadings:
    """Word matched in the kanji index; glosses per kana reading."""

    readings: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    kind: ClassVar[str] = "kanji_with_readings"

    def __post_init__(self) -> None:
        readings = {kana: tuple(glosses) for kana, glosses in self.readings.items()}
        object.__setattr__(self, "readings", MappingProxyType(readings))

    def __hash__(self) -> int:
        return hash(frozenset(self.readings.items()))


@dataclass(frozen=True, slots=True)
class Decomposed:
    """Word split into two or more sub-tokens, each resolved on its own."""

    entries: Mapping[str, "GlossCollection"] = field(default_factory=dict)

    kind: ClassVar[str] = "decomposed"

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))


GlossCollection = NotFound | KanaOnly | KanjiWithReadings | Decomposed


def _flatten(senses: dict[str, Sense]) -> list[str]:
    """All glosses of an entry, ignoring sense boundaries and POS tags."""
    return [gloss for sense in senses.values() for gloss in sense.glosses]


# ============================================================================
# Lookup Engine
# ============================================================================


class LookupEngine:
    """Looks words up in a DictionaryIndex, splitting unknown phrases with a Tokenizer."""

    def __init__(self, index: DictionaryIndex, tokenizer: Tokenizer, max_depth: int | None = None) -> None:
        self._index = index
        self._tokenizer = tokenizer
        self._max_depth = settings.MAX_DECOMPOSITION_DEPTH if max_depth is None else max_depth

    @property
    def index(self) -> DictionaryIndex:
        return self._index

    def resolve(self, word: str) -> GlossCollection:
        """
        Collect every gloss for ``word``.

        Kanji forms are looked up first, then kana. A word found in neither
        is re-tokenized; if that yields more than one token each is resolved
        recursively.
        """
        return self._resolve(word, depth=0, ancestors=frozenset())

    def _resolve(self, word: str, depth: int, ancestors: frozenset[str]) -> GlossCollection:
        kanji_index = self._index.kanji_index
        kana_index = self._index.kana_index

        # {<kana reading>: <entry key>, ...}
        if readings := kanji_index.get(word):
            glosses_by_reading = {}
            for kana, entry_key in readings.items():
                senses = kana_index.get(kana, {}).get(entry_key, {})
                glosses_by_reading[kana] = _flatten(senses)
            return KanjiWithReadings(glosses_by_reading)

        if entries := kana_index.get(word):
            return KanaOnly([gloss for senses in entries.values() for gloss in _flatten(senses)])

        # Perhaps a phrase that can be tokenized
        tokens = self._tokenizer.tokenize(word)

        # A single token would only give the same result again
        if len(tokens) <= 1:
            return NotFound()

        if depth >= self._max_depth:
            logger.warning("Decomposition of %r stopped at depth %d", word, depth)
            return NotFound()

        seen = ancestors | {word}
        sub_entries: dict[str, GlossCollection] = {}
        for token in tokens:
            if token in seen:
                logger.warning("Tokenizer returned %r while decomposing it; not recursing", token)
                sub_entries[token] = NotFound()
            else:
                sub_entries[token] = self._resolve(token, depth + 1, seen)
        return Decomposed(sub_entries)

    def resolve_first(self, word: str) -> str:
        """
        Pick a single gloss for ``word``, or "UNKNOWN".

        Never decomposes. For kanji the alphabetically first reading is used;
        then the first entry, first sense and first gloss.
        """
        if readings := self._index.kanji_index.get(word):
            kana = min(readings)
            return self._first_gloss(self._index.kana_index.get(kana))

        if entries := self._index.kana_index.get(word):
            return self._first_gloss(entries)

        return UNKNOWN

    @staticmethod
    def _first_gloss(entries: dict[str, dict[str, Sense]] | None) -> str:
        if not entries:
            return UNKNOWN
        senses = next(iter(entries.values()))
        if not senses:
            return UNKNOWN
        glosses = next(iter(senses.values())).glosses
        return glosses[0] if glosses else UNKNOWN
