#!/usr/bin/env python3
"""
Surgeon CLI - run extraction queries against HTML documents

Usage:
    surgeon run <query.yaml> [document.html] [--evaluator static|browser] [--output result.json]
    surgeon validate <query.yaml>

Query files are YAML (or JSON) holding the denormalized query, e.g.:

    - select article {0,}
    - title: select h1 | read text
      links: select a {0,} | read attribute href

The document is read from stdin when no path is given.
"""

import argparse
import asyncio
import json
import sys
from typing import Any

import yaml

from . import surgeon, surgeon_async
from .config import Config
from .diagnostics import enable_diagnostics, get_logger
from .evaluators import StaticEvaluator, open_browser_evaluator
from .exceptions import InvalidDataError, SurgeonError
from .query import create_query, describe_query

logger = get_logger(__name__)

QUERY_ARG_HELP = "Path to YAML/JSON query file"


def _configure_diagnostics(args, settings: Config):
    if getattr(args, "verbose", False) or settings.debug:
        enable_diagnostics("DEBUG")
    elif getattr(args, "quiet", False):
        enable_diagnostics("ERROR")
    else:
        enable_diagnostics("INFO")


def load_query_file(path: str) -> Any:
    """
    Load a denormalized query from YAML/JSON

    Raises:
        SurgeonError: Missing, unreadable or empty file
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        raise SurgeonError(f"Query file not found: {path}")
    except yaml.YAMLError as e:
        raise SurgeonError(f"Invalid YAML in query file {path}: {e}") from e

    if content is None:
        raise SurgeonError(f"Query file is empty: {path}")
    return content


def _read_document(args) -> str:
    if args.document:
        with open(args.document, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()
    return sys.stdin.read()


async def _run_in_browser(instructions: Any, document: str, settings: Config) -> Any:
    async with open_browser_evaluator(settings.headless, settings.browser_timeout_ms) as evaluator:
        query = surgeon_async({"evaluator": evaluator})
        return await query(instructions, document)


def cmd_run(args):
    """Run a query against a document"""
    settings = Config()
    _configure_diagnostics(args, settings)

    try:
        instructions = load_query_file(args.query)
        document = _read_document(args)

        logger.info(f"Running query {args.query} with {args.evaluator} evaluator")
        if args.evaluator == "browser":
            result = asyncio.run(_run_in_browser(instructions, document, settings))
        else:
            query = surgeon({"evaluator": StaticEvaluator(settings.html_parser)})
            result = query(instructions, document)

    except InvalidDataError as e:
        logger.error(f"No data found: {e} Input: {str(e.input_value)[:200]}")
        return 2
    except SurgeonError as e:
        logger.error(f"Query failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return 1

    output = json.dumps(result, indent=2, ensure_ascii=False, default=str)
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(output)
        logger.info(f"Result written to: {args.output}")
    else:
        print(output)

    return 0


def cmd_validate(args):
    """Normalize a query and print its canonical instructions"""
    enable_diagnostics("INFO" if args.verbose else "WARNING")

    try:
        query = create_query(load_query_file(args.query))
    except SurgeonError as e:
        logger.error(f"Validation error: {e}")
        return 1

    print(json.dumps(describe_query(query), indent=2, ensure_ascii=False))
    print(f"✓ Query is valid: {args.query} ({len(query)} instruction(s))", file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="surgeon",
        description="Surgeon - declarative data extraction from HTML documents",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    run_parser = subparsers.add_parser('run', help='Run a query against a document')
    run_parser.add_argument('query', help=QUERY_ARG_HELP)
    run_parser.add_argument('document', nargs='?', help='HTML document (default: stdin)')
    run_parser.add_argument('--evaluator', '-e', choices=['static', 'browser'], default='static',
                            help='Document evaluator')
    run_parser.add_argument('--output', '-o', help='Output file for results')
    run_parser.add_argument('--verbose', action='store_true', help='Verbose output')
    run_parser.add_argument('--quiet', '-q', action='store_true', help='Quiet mode')
    run_parser.set_defaults(func=cmd_run)

    validate_parser = subparsers.add_parser('validate', help='Validate a query file')
    validate_parser.add_argument('query', help=QUERY_ARG_HELP)
    validate_parser.add_argument('--verbose', action='store_true', help='Verbose output')
    validate_parser.set_defaults(func=cmd_validate)

    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
