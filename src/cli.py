"""
Command line interface for the Japanese-English translator.

Usage:
    jetranslator translate "日本語テキスト"
    jetranslator report "日本語テキスト" -o glosses.tsv
    jetranslator report --words 猫 犬 -o glosses.tsv
    jetranslator --dict data/jmdict-eng.json.gz translate "猫"
"""

import argparse
import logging
import sys
from typing import Optional

from services import settings
from services.aggregator import GlossAggregator
from services.jmdict import JMDictionary
from services.report import ReportWriteError, format_report, serialize, write_report

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def build_aggregator(dict_path: Optional[str] = None) -> GlossAggregator:
    """Load JMdict (from ``dict_path`` if given) and wire up the aggregator."""
    if dict_path is None:
        return GlossAggregator.get_instance()
    return GlossAggregator.from_dictionary(JMDictionary(dict_path))


def translate_command(parsed, aggregator: GlossAggregator) -> int:
    text = ' '.join(parsed.text)
    print(aggregator.translate_sentence(text))
    return 0


def report_command(parsed, aggregator: GlossAggregator) -> int:
    if parsed.words:
        report = aggregator.build_report(parsed.text)
    else:
        report = aggregator.build_report_for_text(' '.join(parsed.text))

    if parsed.output:
        count = write_report(parsed.output, report)
        print(f"Wrote {count} records to {parsed.output}", file=sys.stderr)
    else:
        sys.stdout.write(format_report(serialize(report)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Japanese to English gloss lookup using JMdict',
        prog='jetranslator',
    )

    parser.add_argument(
        '-d', '--dict',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to jmdict-simplified JSON file (default: search data/ or download)',
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log progress to stderr',
    )

    parser.add_argument(
        '--version',
        action='store_true',
        help='Show version information',
    )

    subparsers = parser.add_subparsers(dest='command')

    translate = subparsers.add_parser('translate', help='Translate text word by word')
    translate.add_argument('text', nargs='+', help='Japanese text to translate')
    translate.set_defaults(handler=translate_command)

    report = subparsers.add_parser('report', help='Write every gloss for every word as TSV')
    report.add_argument('text', nargs='+', help='Japanese text (or words with --words)')
    report.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        metavar='FILE',
        help='Report file (default: stdout)',
    )
    report.add_argument(
        '-w', '--words',
        action='store_true',
        help='Treat arguments as words instead of tokenizing them',
    )
    report.set_defaults(handler=report_command)

    return parser


def main(args: Optional[list] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    parsed = parser.parse_args(args)

    if parsed.version:
        print(f'jetranslator {__version__}')
        return 0

    if not parsed.command:
        parser.print_help()
        return 1

    settings.configure_logging(logging.INFO if parsed.verbose else logging.WARNING)

    try:
        aggregator = build_aggregator(parsed.dict)
    except (OSError, ValueError) as e:
        print(f'Error loading dictionary: {e}', file=sys.stderr)
        return 1

    try:
        return parsed.handler(parsed, aggregator)
    except ReportWriteError as e:
        print(f'Error writing report: {e}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
