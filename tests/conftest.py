"""Shared fixtures: a small in-memory dictionary and a scripted tokenizer."""

import pytest

from services.aggregator import GlossAggregator
from services.jmdict import DictionaryIndex, Sense
from services.lookup import LookupEngine


class FakeTokenizer:
    """Splits text according to a fixed table; anything else is one token."""

    def __init__(self, splits: dict[str, list[str]] | None = None):
        self.splits = splits or {}
        self.calls: list[str] = []

    def tokenize(self, text: str) -> list[str]:
        self.calls.append(text)
        if not text.strip():
            return []
        return list(self.splits.get(text, [text]))


SPLITS = {
    "犬猫": ["犬", "猫"],
    "猫犬": ["猫", "犬"],
    "猫が好き": ["猫", "が", "好き"],
    "大きな猫犬": ["大きな", "猫犬"],
    "大きな": ["大き", "な"],
    "上の紙": ["上", "の", "紙"],
}


@pytest.fixture
def index() -> DictionaryIndex:
    kana_index = {
        "ねこ": {"entry_1": {"sense_1": Sense("noun", ["cat"])}},
        "犬": {"entry_1": {"sense_1": Sense("noun", ["dog"])}},
        "うえ": {"entry_1": {"sense_1": Sense("noun", ["above", "up"])}},
        "かみ": {
            "entry_1": {"sense_1": Sense("noun", ["paper"])},
            "entry_2": {"sense_1": Sense("noun", ["god", "deity"])},
            "entry_3": {"sense_1": Sense("noun", ["upper reaches"])},
        },
        "はし": {
            "entry_1": {"sense_1": Sense("noun", ["chopsticks"])},
            "entry_2": {
                "sense_1": Sense("noun", ["bridge"]),
                "sense_2": Sense("noun", ["edge", "end"]),
            },
        },
        "ばか": {
            "entry_1": {
                "sense_1": Sense("noun", ["fool"]),
                "sense_2": Sense("adj-na", ["fool", "idiot"]),
            },
        },
        "の": {"entry_1": {"sense_1": Sense("prt", ["of"])}},
        "から": {"entry_1": {}},
    }
    kanji_index = {
        "猫": {"ねこ": "entry_1"},
        "紙": {"かみ": "entry_1"},
        "神": {"かみ": "entry_2"},
        "上": {"うえ": "entry_1", "かみ": "entry_3"},
    }
    return DictionaryIndex(kanji_index=kanji_index, kana_index=kana_index)


@pytest.fixture
def tokenizer() -> FakeTokenizer:
    return FakeTokenizer(SPLITS)


@pytest.fixture
def engine(index, tokenizer) -> LookupEngine:
    return LookupEngine(index, tokenizer)


@pytest.fixture
def aggregator(engine, tokenizer) -> GlossAggregator:
    return GlossAggregator(engine, tokenizer)
