"""Extraction: the reverse of expansion.

Recovers variable values from URI text by scanning explicit character
classes with a single shared ``Cursor``. Every scan is a bounded forward
walk, so matching stays linear in the length of the URI; there is no
regular-expression backtracking to blow up on hostile input.

Two algorithms cover the eight operators:

- **bare** (PLAIN, RESERVED, FRAGMENT, PATH, LABEL): values are
  positional, separated by the operator's joiner.
- **named** (FORM, FORM_CONTINUATION, PATH_PARAMS): values are tagged
  ``name=value`` and assigned to the declared variable with that name.
"""

from collections.abc import Callable

from wren._internal.charclass import RESERVED, UNRESERVED, is_pct_triplet
from wren._internal.encoding import decode
from wren._internal.types import Value
from wren.errors import UnsupportedOperation
from wren.template.nodes import Expression, VariableSpec
from wren.template.operators import OPERATORS, NamingMode, Operator, OperatorKind


class Cursor:
    """Scan position over the source text of one ``match`` call.

    ``stop`` bounds every scan; the template sets it to where the next
    literal begins so an expression never swallows that literal.
    """

    __slots__ = ("pos", "stop", "text")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.stop = len(text)

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    @property
    def remaining(self) -> str:
        return self.text[self.pos :]

    def bound(self, boundary: str | None) -> None:
        """Limit scans to before the next occurrence of *boundary*."""
        self.stop = len(self.text)
        if boundary:
            found = self.text.find(boundary, self.pos)
            if found != -1:
                self.stop = found

    def peek(self, literal: str) -> bool:
        return self.pos + len(literal) <= self.stop and self.text.startswith(literal, self.pos)

    def consume(self, literal: str) -> bool:
        """Advance past *literal* if it is next. Empty literals always match."""
        if self.peek(literal):
            self.pos += len(literal)
            return True
        return False

    def match_literal(self, literal: str) -> bool:
        """Advance past *literal* ignoring ``stop`` (used for literal nodes)."""
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def scan(self, accept: frozenset[str], limit: int | None = None) -> str:
        """Consume a run of *accept* characters and ``%XX`` escapes.

        An escape counts as one character toward *limit*.
        """
        text = self.text
        start = pos = self.pos
        count = 0
        while pos < self.stop and (limit is None or count < limit):
            if text[pos] in accept:
                pos += 1
            elif is_pct_triplet(text, pos) and pos + 3 <= self.stop:
                pos += 3
            else:
                break
            count += 1
        self.pos = pos
        return text[start:pos]


def _value_charset(operator: Operator, *, explode: bool, final: bool) -> frozenset[str]:
    chars = UNRESERVED | RESERVED if operator.allows_reserved else UNRESERVED | {","}
    if explode:
        return chars | {operator.joiner, ",", "="}
    if not final:
        # a later variable follows after the joiner
        return chars - {operator.joiner}
    return chars


_BARE_CHARSETS: dict[tuple[OperatorKind, bool, bool], frozenset[str]] = {
    (op.kind, explode, final): _value_charset(op, explode=explode, final=final)
    for op in OPERATORS.values()
    for explode in (False, True)
    for final in (False, True)
}

_KEY_CHARS = UNRESERVED
_NAMED_VALUE_CHARS = UNRESERVED | {","}


def _split_commas(scanned: str) -> Value:
    if "," in scanned:
        return [decode(item) for item in scanned.split(",")]
    return decode(scanned)


def _shape_items(items: list[tuple[str, str | None]]) -> Value:
    """Turn exploded ``key[=value]`` items into a scalar, list or mapping.

    Without any ``=`` the items are list members (a single one stays a
    scalar). With any ``=`` they form a mapping; bare keys map to ``""``.
    """
    if any(value is not None for _, value in items):
        return {decode(key): decode(value or "") for key, value in items}
    values = [decode(key) for key, _ in items]
    if len(values) == 1:
        return values[0]
    return values


def _split_item(item: str) -> tuple[str, str | None]:
    key, sep, value = item.partition("=")
    return (key, value) if sep else (key, None)


def _extract_bare(
    cursor: Cursor,
    operator: Operator,
    variables: tuple[VariableSpec, ...],
    bindings: dict[str, Value],
) -> None:
    last = len(variables) - 1
    for index, var in enumerate(variables):
        if index and not cursor.consume(operator.joiner):
            # Later variables were undefined when the URI was expanded
            return
        accept = _BARE_CHARSETS[(operator.kind, var.explode, index == last)]
        if var.explode:
            scanned = cursor.scan(accept)
            separator = operator.joiner if operator.joiner in scanned else ","
            bindings[var.name] = _shape_items(
                [_split_item(item) for item in scanned.split(separator)]
            )
        else:
            bindings[var.name] = _split_commas(cursor.scan(accept, var.prefix))


def _read_key(cursor: Cursor, operator: Operator, first: bool) -> str | None:
    """Read ``[joiner]key`` at the cursor, or return None without moving."""
    start = cursor.pos
    if not first and not cursor.consume(operator.joiner):
        return None
    key = cursor.scan(_KEY_CHARS)
    if not key:
        cursor.pos = start
        return None
    return key


def _read_named_value(cursor: Cursor, limit: int | None = None) -> str | None:
    """Read ``=value`` at the cursor; None when there is no ``=``."""
    if not cursor.consume("="):
        return None
    return cursor.scan(_NAMED_VALUE_CHARS, limit)


def _extract_named(
    cursor: Cursor,
    operator: Operator,
    variables: tuple[VariableSpec, ...],
    bindings: dict[str, Value],
) -> None:
    first = True
    for index, var in enumerate(variables):
        later_names = {later.name for later in variables[index + 1 :]}

        if not var.explode:
            start = cursor.pos
            key = _read_key(cursor, operator, first)
            if key is None or key != var.name:
                # Undefined at expansion time; the item belongs to a later variable
                cursor.pos = start
                continue
            value = _read_named_value(cursor, var.prefix)
            bindings[var.name] = "" if value is None else _split_commas(value)
            first = False
            continue

        items: list[tuple[str, str | None]] = []
        while True:
            start = cursor.pos
            key = _read_key(cursor, operator, first)
            if key is None or key in later_names:
                cursor.pos = start
                break
            value = _read_named_value(cursor)
            items.append((key, value))
            first = False

        if not items:
            continue
        if all(key == var.name for key, _ in items):
            values = [decode(value or "") for _, value in items]
            bindings[var.name] = values[0] if len(values) == 1 else values
        else:
            bindings[var.name] = _shape_items(items)


Extractor = Callable[[Cursor, Operator, tuple[VariableSpec, ...], dict[str, Value]], None]

EXTRACTORS: dict[OperatorKind, Extractor] = {
    op.kind: _extract_bare if op.naming is NamingMode.BARE else _extract_named
    for op in OPERATORS.values()
}


def extract_expression(
    cursor: Cursor,
    expression: Expression,
    bindings: dict[str, Value],
    *,
    boundary: str | None = None,
) -> None:
    """Consume one expression's text at the cursor into *bindings*.

    When the operator's leader is not at the cursor, the expression was
    empty at expansion time: none of its variables is recorded and the
    cursor does not move. This is not a failed match.

    *boundary* is the text of the literal that follows the expression.
    Its first occurrence after the leader ends the expression's values.

    Raises ``UnsupportedOperation`` if the operator has no extractor.
    """
    operator = expression.operator
    try:
        extractor = EXTRACTORS[operator.kind]
    except KeyError:
        msg = f"No extraction algorithm for the {operator} operator."
        raise UnsupportedOperation(msg) from None

    cursor.bound(None)
    if not cursor.consume(operator.leader):
        return
    cursor.bound(boundary)
    extractor(cursor, operator, expression.variables, bindings)
