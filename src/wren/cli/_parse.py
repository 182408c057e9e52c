"""``wren parse``: print a template's node sequence, one node per line."""

import argparse
import sys

from wren.errors import ParseError
from wren.template.nodes import Literal
from wren.template.template import Template


def run_parse(args: argparse.Namespace) -> None:
    try:
        template = Template(args.template)
    except ParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    for node in template.nodes:
        if isinstance(node, Literal):
            print(f"{'literal':<18}  {node.text!r}")
        else:
            specs = ", ".join(str(var) for var in node.variables)
            print(f"{node.operator.kind.value:<18}  {specs}")
