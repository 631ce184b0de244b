"""Tests for TSV report serialization and writing."""

import pytest

from services.lookup import Decomposed, KanaOnly, KanjiWithReadings, NotFound
from services.report import (
    NO_ENTRY_FOUND,
    ReportWriteError,
    format_report,
    serialize,
    write_report,
)


class TestSerialize:
    def test_kana_only_row(self):
        assert serialize({"はし": KanaOnly(["chopsticks", "bridge"])}) == [
            ["はし", "chopsticks\tbridge"],
        ]

    def test_kanji_row_per_reading(self):
        report = {"上": KanjiWithReadings({"うえ": ["above", "up"], "かみ": ["upper reaches"]})}
        assert serialize(report) == [
            ["上", "うえ", "above\tup"],
            ["上", "かみ", "upper reaches"],
        ]

    def test_not_found_row(self):
        assert serialize({"xyz": NotFound()}) == [["xyz", NO_ENTRY_FOUND]]

    def test_decomposed_rows_use_sub_token_keys(self):
        report = {"犬猫": Decomposed({
            "犬": KanaOnly(["dog"]),
            "猫": KanjiWithReadings({"ねこ": ["cat"]}),
        })}
        assert serialize(report) == [
            ["犬", "dog"],
            ["猫", "ねこ", "cat"],
        ]

    def test_nested_decomposition_dissolves(self):
        report = {"大きな猫": Decomposed({
            "大きな": Decomposed({"大き": NotFound(), "な": NotFound()}),
            "猫": KanjiWithReadings({"ねこ": ["cat"]}),
        })}
        assert [record[0] for record in serialize(report)] == ["な", "大き", "猫"]

    def test_keys_sorted_by_codepoint(self):
        report = {
            "猫": KanjiWithReadings({"ねこ": ["cat"]}),
            "xyz": NotFound(),
            "ねこ": KanaOnly(["cat"]),
            "Abc": NotFound(),
        }
        assert [record[0] for record in serialize(report)] == ["Abc", "xyz", "ねこ", "猫"]

    def test_order_independent_of_insertion(self):
        a = {"ねこ": KanaOnly(["cat"]), "xyz": NotFound(), "犬": KanaOnly(["dog"])}
        b = dict(reversed(list(a.items())))
        assert serialize(a) == serialize(b)

    def test_idempotent(self):
        report = {
            "犬猫": Decomposed({"犬": KanaOnly(["dog"]), "猫": NotFound()}),
            "上": KanjiWithReadings({"うえ": ["above"], "かみ": ["upper reaches"]}),
        }
        assert format_report(serialize(report)) == format_report(serialize(report))

    def test_sub_token_matching_top_level_key_keeps_both(self):
        report = {
            "猫": KanjiWithReadings({"ねこ": ["cat"]}),
            "犬猫": Decomposed({"犬": KanaOnly(["dog"]), "猫": KanjiWithReadings({"ねこ": ["cat"]})}),
        }
        assert serialize(report) == [
            ["犬", "dog"],
            ["猫", "ねこ", "cat"],
            ["猫", "ねこ", "cat"],
        ]

    def test_duplicate_glosses_kept(self):
        assert serialize({"ばか": KanaOnly(["fool", "fool"])}) == [["ばか", "fool\tfool"]]

    def test_empty_report(self):
        assert serialize({}) == []


class TestFormatReport:
    def test_tab_separated_lines(self):
        records = [["猫", "ねこ", "cat"], ["xyz", NO_ENTRY_FOUND]]
        assert format_report(records) == "猫\tねこ\tcat\nxyz\tNO_ENTRY_FOUND\n"

    def test_embedded_tabs_not_escaped(self):
        text = format_report(serialize({"はし": KanaOnly(["chopsticks", "bridge"])}))
        assert text == "はし\tchopsticks\tbridge\n"

    def test_empty(self):
        assert format_report([]) == ""


class TestWriteReport:
    def test_writes_utf8_file(self, tmp_path):
        path = tmp_path / "glosses.tsv"
        report = {
            "犬猫": Decomposed({"犬": KanaOnly(["dog"]), "猫": KanjiWithReadings({"ねこ": ["cat"]})}),
            "xyz": NotFound(),
        }

        count = write_report(path, report)

        assert count == 3
        assert path.read_bytes() == "xyz\tNO_ENTRY_FOUND\n犬\tdog\n猫\tねこ\tcat\n".encode("utf-8")

    def test_accepts_string_path(self, tmp_path):
        path = tmp_path / "glosses.tsv"
        write_report(str(path), {"ねこ": KanaOnly(["cat"])})
        assert path.read_text(encoding="utf-8") == "ねこ\tcat\n"

    def test_empty_report_writes_empty_file(self, tmp_path):
        path = tmp_path / "empty.tsv"
        assert write_report(path, {}) == 0
        assert path.read_text(encoding="utf-8") == ""

    def test_unopenable_path_raises(self, tmp_path):
        path = tmp_path / "missing" / "glosses.tsv"

        with pytest.raises(ReportWriteError) as exc_info:
            write_report(path, {"ねこ": KanaOnly(["cat"])})

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert str(path) in str(exc_info.value)
