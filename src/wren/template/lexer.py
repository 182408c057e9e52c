"""Single-pass template tokenizer.

Turns a template string into an immutable tuple of ``Literal`` and
``Expression`` nodes. Three states, one forward pass, no backtracking::

    PLAIN       copy text up to the next "{"
    EXPRESSION  read the optional operator symbol
    VARSPEC     read "name", "name*" or "name:N", separated by ","

Examples::

    "/users"            -> (Literal("/users"),)
    "/users/{id}"       -> (Literal("/users/"), Expression(PLAIN, (id,)))
    "{?q,lang}"         -> (Expression(FORM, (q, lang)),)
    "{/coord*}"         -> (Expression(PATH, (coord*,)),)
"""

import enum

from wren._internal.charclass import is_digit, is_pct_triplet, is_varchar
from wren.errors import ParseError
from wren.template.nodes import Expression, Literal, Node, VariableSpec
from wren.template.operators import PLAIN, Operator, operator_for


class _State(enum.Enum):
    PLAIN = "plain"
    EXPRESSION = "expression"
    VARSPEC = "varspec"


def _varchar_width(template: str, pos: int) -> int:
    """Width of the varchar at *pos*: 1, 3 for a ``%XX`` escape, 0 for none."""
    if pos >= len(template):
        return 0
    if is_varchar(template[pos]):
        return 1
    if is_pct_triplet(template, pos):
        return 3
    return 0


def _scan_varname(template: str, pos: int) -> int:
    """Return the end of the varname starting at *pos* (== *pos* if none).

    varname = varchar *( ["."] varchar ); a "." must sit between two
    varchars, so a trailing dot is left unconsumed.
    """
    end = pos
    while True:
        width = _varchar_width(template, end)
        if width:
            end += width
            continue
        if end > pos and end < len(template) and template[end] == ".":
            if _varchar_width(template, end + 1):
                end += 1
                continue
        return end


def _scan_varspec(template: str, pos: int) -> tuple[VariableSpec, int] | None:
    """Scan one varspec at *pos*. Returns the spec and the new position."""
    end = _scan_varname(template, pos)
    if end == pos:
        return None
    name = template[pos:end]

    if end < len(template) and template[end] == "*":
        return VariableSpec(name, explode=True), end + 1

    if end < len(template) and template[end] == ":":
        digits_end = end + 1
        while digits_end < len(template) and is_digit(template[digits_end]):
            digits_end += 1
        if digits_end > end + 1:
            prefix = int(template[end + 1 : digits_end])
            if prefix < 1:
                reason = f"prefix length for {name!r} must be positive"
                raise ParseError(template, end + 1, reason)
            return VariableSpec(name, prefix=prefix), digits_end

    return VariableSpec(name), end


def tokenize(template: str) -> tuple[Node, ...]:
    """Tokenize *template* into literal and expression nodes.

    Raises ``ParseError`` for an unterminated expression, an incomplete
    variable specification, an expression without variables, or a
    variable named twice in the same expression.
    """
    nodes: list[Node] = []
    state = _State.PLAIN
    pos = 0
    expression_start = 0
    operator: Operator = PLAIN
    variables: list[VariableSpec] = []

    while pos < len(template):
        if state is _State.PLAIN:
            brace = template.find("{", pos)
            if brace == -1:
                nodes.append(Literal(template[pos:]))
                pos = len(template)
            else:
                if brace > pos:
                    nodes.append(Literal(template[pos:brace]))
                expression_start = brace
                pos = brace + 1
                state = _State.EXPRESSION

        elif state is _State.EXPRESSION:
            operator = operator_for(template[pos])
            if operator is not PLAIN:
                pos += 1
            variables = []
            state = _State.VARSPEC

        else:
            scanned = _scan_varspec(template, pos)
            if scanned is not None:
                spec, pos = scanned
                if any(var.name == spec.name for var in variables):
                    reason = f"variable {spec.name!r} repeated in expression"
                    raise ParseError(template, pos, reason)
                variables.append(spec)
                continue

            char = template[pos]
            if char == ",":
                pos += 1
            elif char == "}":
                if not variables:
                    raise ParseError(template, expression_start, "expression has no variables")
                nodes.append(Expression(operator, tuple(variables)))
                pos += 1
                state = _State.PLAIN
            else:
                raise ParseError(template, pos, "incomplete variable specification")

    if state is not _State.PLAIN:
        raise ParseError(template, expression_start, "unterminated expression")

    return tuple(nodes)
