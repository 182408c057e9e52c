"""Wren CLI: expand, match and inspect URI templates from the shell.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren: expand and match RFC 6570 URI templates.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log parse and match details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren expand ------------------------------------------------------
    expand_parser = subparsers.add_parser("expand", help="Expand a template")
    expand_parser.add_argument("template", help="URI template (e.g. '/users/{id}{?q}')")
    expand_parser.add_argument(
        "bindings",
        nargs="*",
        metavar="NAME=VALUE",
        help="Variable binding; repeat a name to bind a list",
    )
    expand_parser.add_argument(
        "--json",
        dest="json_bindings",
        default=None,
        metavar="OBJECT",
        help="Bindings as a JSON object (merged before NAME=VALUE pairs)",
    )
    expand_parser.add_argument(
        "--no-normalize",
        action="store_true",
        help="Skip Unicode NFKC normalization of values",
    )

    # -- wren match -------------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Match a URI against a template")
    match_parser.add_argument("template", help="URI template")
    match_parser.add_argument("uri", help="Concrete URI to match")
    match_parser.add_argument(
        "--prefix",
        action="store_true",
        help="Allow unmatched text after the template",
    )

    # -- wren parse -------------------------------------------------------
    parse_parser = subparsers.add_parser("parse", help="Show a template's parsed nodes")
    parse_parser.add_argument("template", help="URI template")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "expand":
        from wren.cli._expand import run_expand

        run_expand(args)
    elif args.command == "match":
        from wren.cli._match import run_match

        run_match(args)
    elif args.command == "parse":
        from wren.cli._parse import run_parse

        run_parse(args)
