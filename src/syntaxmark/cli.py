"""Command-line entry point.

Usage:
    syntaxmark -f source.c                  # HTML to stdout
    syntaxmark -f source.c -o source.html   # HTML to a file
    syntaxmark --dump-syntax                # print the rule table
    syntaxmark -f source.c --dump-tags      # print recorded annotations
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING, NoReturn

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from syntaxmark import __version__, configure_logging
from syntaxmark.config import get_settings
from syntaxmark.pipeline import highlight, scan
from syntaxmark.rules import default_catalog

if TYPE_CHECKING:
    from syntaxmark.annotations import AnnotationStore
    from syntaxmark.rules import RuleCatalog

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

EXIT_FAILURE = 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="syntaxmark",
        description="Render a C source file as syntax-highlighted HTML.",
    )
    parser.add_argument("-f", "--file", help="source file to highlight")
    parser.add_argument(
        "-o",
        "--output",
        help="write HTML to this file instead of standard output",
    )
    debug = parser.add_argument_group("debug")
    debug.add_argument(
        "-s",
        "--dump-syntax",
        action="store_true",
        help="print the highlighting rule table and exit",
    )
    debug.add_argument(
        "-t",
        "--dump-tags",
        action="store_true",
        help="print the recorded annotations instead of the HTML",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def _rule_table(catalog: RuleCatalog) -> Table:
    table = Table("Open pattern", "Close pattern", "Opening tag", "Closing tag")
    for row in catalog.describe():
        table.add_row(*(escape(cell) for cell in row))
    return table


def _annotation_table(store: AnnotationStore) -> Table:
    table = Table("Line", "Column", "Markup")
    for row in store.describe():
        table.add_row(*(escape(cell) for cell in row))
    return table


def _fail_open(path: str, exc: OSError) -> NoReturn:
    logger.debug("Could not open %s: %s", path, exc)
    err_console.print(f"error: could not open {escape(path)}", soft_wrap=True)
    sys.exit(EXIT_FAILURE)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for syntaxmark."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as exc:
        err_console.print(
            f"error: invalid configuration\n{escape(str(exc))}", soft_wrap=True
        )
        sys.exit(EXIT_FAILURE)
    configure_logging(settings.log)

    if args.dump_syntax:
        console.print(_rule_table(default_catalog()))
        return

    if args.file is None:
        parser.print_usage(sys.stderr)
        sys.exit(EXIT_FAILURE)

    try:
        stream = open(args.file, "rb")  # noqa: SIM115
    except OSError as exc:
        _fail_open(args.file, exc)

    with stream:
        if args.dump_tags:
            console.print(_annotation_table(scan(stream).store))
            return

        if args.output is None:
            highlight(
                stream, sys.stdout.buffer, name=args.file, render_config=settings.render
            )
            return

        try:
            sink = open(args.output, "wb")  # noqa: SIM115
        except OSError as exc:
            _fail_open(args.output, exc)

        with sink:
            highlight(stream, sink, name=args.file, render_config=settings.render)
