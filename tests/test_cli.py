"""
Tests for cli.py - Command line interface.
"""

import gzip
import json

import pytest

import cli
from cli import main


@pytest.fixture
def use_aggregator(monkeypatch, aggregator):
    monkeypatch.setattr(cli, "build_aggregator", lambda dict_path=None: aggregator)
    return aggregator


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_version(self, capsys):
        assert main(['--version']) == 0
        assert 'jetranslator 0.1.0' in capsys.readouterr().out

    def test_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--help'])
        assert exc_info.value.code == 0
        assert 'JMdict' in capsys.readouterr().out

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_translate_needs_text(self):
        with pytest.raises(SystemExit) as exc_info:
            main(['translate'])
        assert exc_info.value.code == 2


class TestTranslateCommand:
    def test_translate(self, use_aggregator, capsys):
        assert main(['translate', '猫犬']) == 0
        assert capsys.readouterr().out == 'cat dog \n'

    def test_arguments_joined(self, use_aggregator, capsys):
        assert main(['translate', '猫', '犬']) == 0
        # "猫 犬" is not in the split table, so it stays one unknown token
        assert capsys.readouterr().out == 'UNKNOWN \n'


class TestReportCommand:
    def test_report_to_stdout(self, use_aggregator, capsys):
        assert main(['report', '犬猫']) == 0
        assert capsys.readouterr().out == '犬\tdog\n猫\tねこ\tcat\n'

    def test_report_words(self, use_aggregator, capsys):
        assert main(['report', '--words', '猫', 'xyz']) == 0
        assert capsys.readouterr().out == 'xyz\tNO_ENTRY_FOUND\n猫\tねこ\tcat\n'

    def test_report_to_file(self, use_aggregator, tmp_path, capsys):
        path = tmp_path / 'report.tsv'

        assert main(['report', '-w', 'ねこ', '-o', str(path)]) == 0

        assert path.read_text(encoding='utf-8') == 'ねこ\tcat\n'
        assert 'Wrote 1 records' in capsys.readouterr().err

    def test_unwritable_report(self, use_aggregator, tmp_path, capsys):
        path = tmp_path / 'missing' / 'report.tsv'

        assert main(['report', '-w', 'ねこ', '-o', str(path)]) == 1
        assert 'Error writing report' in capsys.readouterr().err


class TestDictionaryLoading:
    def test_dictionary_error(self, monkeypatch, capsys):
        def fail(dict_path=None):
            raise FileNotFoundError(dict_path)

        monkeypatch.setattr(cli, "build_aggregator", fail)

        assert main(['--dict', '/nonexistent.json', 'translate', '猫']) == 1
        assert 'Error loading dictionary' in capsys.readouterr().err

    def test_truncated_dictionary(self, tmp_path, capsys):
        data = gzip.compress(json.dumps({"words": []}).encode("utf-8"))
        path = tmp_path / "jmdict-eng.json.gz"
        path.write_bytes(data[:len(data) // 2])

        assert main(['--dict', str(path), 'translate', '猫']) == 1
        assert 'Error loading dictionary' in capsys.readouterr().err
