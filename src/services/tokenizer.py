"""Word segmentation backed by SudachiPy."""

import logging
from typing import Any, Protocol

import jaconv
from sudachipy import Dictionary, MorphemeList, SplitMode

from services import settings

logger = logging.getLogger(__name__)


class Tokenizer(Protocol):
    """Anything that splits text into an ordered list of word tokens."""

    def tokenize(self, text: str) -> list[str]:
        ...


SPLIT_MODES = {
    "A": SplitMode.A,
    "B": SplitMode.B,
    "C": SplitMode.C,
}


class SudachiTokenizer:
    """Long-lived SudachiPy tokenizer returning surface forms only."""

    # Morphemes that are not words
    SKIP_POS = frozenset({"空白"})

    def __init__(self, dict_type: str | None = None, split_mode: str | None = None) -> None:
        mode_name = (split_mode or settings.SUDACHI_SPLIT_MODE).upper()
        if mode_name not in SPLIT_MODES:
            raise ValueError(f"Unknown Sudachi split mode: {mode_name!r} (expected A, B or C)")

        self._dict_type = dict_type or settings.SUDACHI_DICT
        self._mode = SPLIT_MODES[mode_name]
        self._tokenizer = Dictionary(dict=self._dict_type).create()
        logger.info("Sudachi tokenizer ready (dict=%s, mode=%s)", self._dict_type, mode_name)

    def morphemes(self, text: str) -> MorphemeList:
        """Raw Sudachi morphemes for ``text``."""
        return self._tokenizer.tokenize(text, self._mode)

    def tokenize(self, text: str) -> list[str]:
        """Split ``text`` into non-empty word tokens."""
        if not text or not text.strip():
            return []

        tokens = []
        for m in self.morphemes(text):
            if m.part_of_speech()[0] in self.SKIP_POS:
                continue
            surface = m.surface()
            if surface.strip():
                tokens.append(surface)
        return tokens


def tokenize_raw(tokenizer: SudachiTokenizer, text: str) -> dict[str, Any]:
    """Raw Sudachi tokenization output for debugging."""
    tokens, lines = [], []
    for m in tokenizer.morphemes(text):
        pos_list = list(m.part_of_speech())
        reading = jaconv.kata2hira(m.reading_form())
        tokens.append({
            "surface": m.surface(), "dictionary_form": m.dictionary_form(),
            "reading": reading, "pos": pos_list, "is_oov": m.is_oov(),
        })
        pos_short = "-".join([p for p in pos_list[:2] if p != "*"])
        lines.append(f"{m.surface()} -> {m.dictionary_form()} [{pos_short}] {reading}")

    return {"tokens": tokens, "count": len(tokens), "result": "\n".join(lines)}
