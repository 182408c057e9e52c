"""``wren match``: match a URI and print the recovered bindings as JSON."""

import argparse
import json
import sys

from wren.config import TemplateConfig
from wren.errors import ParseError
from wren.template.template import Template


def run_match(args: argparse.Namespace) -> None:
    """Match ``args.uri`` against ``args.template``.

    Prints the bindings as a JSON object. Exits with code 1 when the URI
    does not match and 2 when the template is malformed.
    """
    try:
        template = Template(args.template, config=TemplateConfig(full_match=not args.prefix))
    except ParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    result = template.match(args.uri)
    if result is None:
        print(f"No match: {args.uri!r} does not fit {args.template!r}", file=sys.stderr)
        raise SystemExit(1)

    print(json.dumps(result.bindings, ensure_ascii=False))
