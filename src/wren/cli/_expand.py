"""``wren expand``: expand a template against command-line bindings."""

import argparse
import json
import sys
from typing import Any

from wren.errors import WrenError
from wren.template.template import Template


def parse_bindings(pairs: list[str], json_bindings: str | None = None) -> dict[str, Any]:
    """Build a bindings mapping from ``--json`` and ``NAME=VALUE`` pairs.

    A name given more than once collects its values into a list. Pairs
    override names also present in the JSON object.

    Raises ``ValueError`` for a pair without ``=`` or JSON that is not
    an object.
    """
    bindings: dict[str, Any] = {}
    if json_bindings:
        loaded = json.loads(json_bindings)
        if not isinstance(loaded, dict):
            msg = "--json must be a JSON object"
            raise ValueError(msg)
        bindings.update(loaded)

    collected: dict[str, list[str]] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            msg = f"Expected NAME=VALUE, got {pair!r}"
            raise ValueError(msg)
        collected.setdefault(name, []).append(value)

    for name, values in collected.items():
        bindings[name] = values[0] if len(values) == 1 else values
    return bindings


def run_expand(args: argparse.Namespace) -> None:
    """Print the expansion of ``args.template``.

    Exits with code 2 on a malformed template, bad bindings, or a value
    the template cannot expand.
    """
    try:
        bindings = parse_bindings(args.bindings, args.json_bindings)
        template = Template(args.template)
        result = template.expand(bindings, normalize=not args.no_normalize)
    except (ValueError, WrenError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    print(result)
