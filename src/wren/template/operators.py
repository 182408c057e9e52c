"""The eight RFC 6570 expression operators and their fixed metadata.

Each operator is described by one frozen ``Operator`` record. The lexer
looks operators up by their template symbol; both engines dispatch on
``Operator.kind``.
"""

import enum
from dataclasses import dataclass


class OperatorKind(enum.Enum):
    PLAIN = "plain"
    RESERVED = "reserved"
    FRAGMENT = "fragment"
    PATH = "path"
    LABEL = "label"
    PATH_PARAMS = "path_params"
    FORM = "form"
    FORM_CONTINUATION = "form_continuation"


class NamingMode(enum.Enum):
    """How a rendered value is tagged with its variable name.

    BARE:       ``value``
    NAMED:      ``name=value``
    PATH_STYLE: ``name=value``, or just ``name`` when value is empty
    """

    BARE = "bare"
    NAMED = "named"
    PATH_STYLE = "path_style"


@dataclass(frozen=True, slots=True)
class Operator:
    """Fixed rendering rules for one expression operator."""

    kind: OperatorKind
    symbol: str  # character after "{" in the template, "" for PLAIN
    leader: str
    joiner: str
    allows_reserved: bool
    naming: NamingMode

    @property
    def named(self) -> bool:
        return self.naming is not NamingMode.BARE

    def __str__(self) -> str:
        return self.kind.value


PLAIN = Operator(OperatorKind.PLAIN, "", "", ",", False, NamingMode.BARE)
RESERVED = Operator(OperatorKind.RESERVED, "+", "", ",", True, NamingMode.BARE)
FRAGMENT = Operator(OperatorKind.FRAGMENT, "#", "#", ",", True, NamingMode.BARE)
PATH = Operator(OperatorKind.PATH, "/", "/", "/", False, NamingMode.BARE)
LABEL = Operator(OperatorKind.LABEL, ".", ".", ".", False, NamingMode.BARE)
PATH_PARAMS = Operator(OperatorKind.PATH_PARAMS, ";", ";", ";", False, NamingMode.PATH_STYLE)
FORM = Operator(OperatorKind.FORM, "?", "?", "&", False, NamingMode.NAMED)
FORM_CONTINUATION = Operator(
    OperatorKind.FORM_CONTINUATION, "&", "&", "&", False, NamingMode.NAMED
)

OPERATORS: dict[OperatorKind, Operator] = {
    op.kind: op
    for op in (
        PLAIN,
        RESERVED,
        FRAGMENT,
        PATH,
        LABEL,
        PATH_PARAMS,
        FORM,
        FORM_CONTINUATION,
    )
}

# Symbols the lexer consumes right after "{" (PLAIN has none)
OPERATOR_SYMBOLS: dict[str, Operator] = {
    op.symbol: op for op in OPERATORS.values() if op.symbol
}


def operator_for(symbol: str) -> Operator:
    """Return the operator for a template symbol, PLAIN for anything else.

    The lexer only consumes the character when it names an operator, so
    ``operator_for("x")`` is PLAIN and ``x`` stays part of the varspec.
    """
    return OPERATOR_SYMBOLS.get(symbol, PLAIN)
