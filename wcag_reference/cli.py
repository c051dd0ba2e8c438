#!/usr/bin/env python3
"""
WCAG Reference CLI

Command-line interface for looking up WCAG 2.0/2.1/2.2 success criteria
and techniques, and for regenerating the bundled dataset from saved pages.

Usage:
    python -m wcag_reference criterion 2.1 2.1.1
    wcag-ref technique 2.0 SCR27 --link
    wcag-ref generate 2.2 --guidelines WCAG22.html --techniques Techniques.html
"""

import argparse
import logging
import sys

from . import __version__
from .dataset import load_dataset, resolve_data_dir
from .exceptions import WCAGReferenceError
from .generator import generate_version, write_dataset
from .models import WCAGVersion
from .reference import WCAGReference, parse_criterion_number

VERSION_CHOICES = [version.value for version in WCAGVersion]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )


def parse_args(args: list = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='wcag-ref',
        description='Look up WCAG 2.0, 2.1 and 2.2 success criteria and techniques',
        epilog='Example: wcag-ref criterion 2.2 2.4.11 --link'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--data-dir',
        type=str,
        default=None,
        help='Directory with wcag20.json, wcag21.json and wcag22.json (default: bundled data)'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    # Lookups
    criterion = subparsers.add_parser('criterion', help='Show a success criterion')
    criterion.add_argument('wcag_version', help='WCAG version (2.0, 2.1 or 2.2)')
    criterion.add_argument('number', help='Criterion number, e.g. 2.4.7')

    technique = subparsers.add_parser('technique', help='Show a technique')
    technique.add_argument('wcag_version', help='WCAG version (2.0, 2.1 or 2.2)')
    technique.add_argument('code', help='Technique code, e.g. G57 or ARIA12')

    for lookup in (criterion, technique):
        lookup.add_argument(
            '--link',
            action='store_true',
            help='Print only the direct link'
        )
        lookup.add_argument(
            '-f', '--format',
            choices=['json', 'text'],
            default='text',
            help='Output format (default: text)'
        )

    # Dataset generation
    generate = subparsers.add_parser(
        'generate',
        help='Build a dataset file from saved W3C pages'
    )
    generate.add_argument('wcag_version', choices=VERSION_CHOICES, help='WCAG version')
    generate.add_argument(
        '--guidelines',
        required=True,
        help='Saved HTML of the WCAG recommendation'
    )
    generate.add_argument(
        '--techniques',
        required=True,
        help='Saved HTML of the techniques index'
    )
    generate.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output JSON file (default: <data dir>/wcag2X.json, see --data-dir)'
    )

    return parser.parse_args(args)


def _lookup(parsed: argparse.Namespace) -> str:
    reference = WCAGReference(load_dataset(parsed.data_dir) if parsed.data_dir else None)

    if parsed.command == 'criterion':
        record = reference.get_criterion_by_handle(parsed.wcag_version, parsed.number)
        if parsed.link:
            return reference.get_link_to_criterion(
                parsed.wcag_version, *parse_criterion_number(parsed.number)
            )
    else:
        record = reference.get_technique_data(parsed.wcag_version, parsed.code)
        if parsed.link:
            return reference.get_link_to_technique(parsed.wcag_version, parsed.code)

    if parsed.format == 'json':
        return record.to_json()
    return record.to_text()


def main(args: list = None) -> int:
    """
    Main entry point for CLI.

    Args:
        args: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parsed = parse_args(args)
    setup_logging(parsed.verbose)

    logger = logging.getLogger(__name__)

    try:
        if parsed.command == 'generate':
            version = WCAGVersion(parsed.wcag_version)
            output = parsed.output or resolve_data_dir(parsed.data_dir) / f"{version.partition}.json"
            partition = generate_version(version, parsed.guidelines, parsed.techniques)
            write_dataset(partition, output)
            return 0

        print(_lookup(parsed))
        return 0
    except WCAGReferenceError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
