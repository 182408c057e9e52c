"""Wren exception hierarchy.

Shared across the lexer, both engines, and ``Template`` so every module
raises and catches the same types. A URI that simply does not fit a
template is not an error: ``Template.match`` returns ``None`` for it.
``NoMatch`` exists only for callers who opt into
``Template.require_match``.
"""

from dataclasses import dataclass


class WrenError(Exception):
    """Base for all wren-specific errors."""


@dataclass(frozen=True, slots=True)
class ParseError(WrenError, ValueError):
    """A malformed template string.

    Raised while constructing a ``Template``; a template that fails to
    parse is never produced, so ``expand`` and ``match`` never see one.
    """

    template: str
    position: int
    reason: str

    def __str__(self) -> str:
        return f"{self.reason} at position {self.position} in {self.template!r}"


class InvalidValueType(WrenError, TypeError):
    """A bound value (or binding key) has a type wren cannot expand.

    Accepted values are strings, numbers, booleans, enum members,
    non-string sequences and mappings.
    """

    def __init__(self, name: object, value: object) -> None:
        self.name = name
        self.value_type = type(value)
        super().__init__(
            f"Can't convert {self.value_type.__name__} bound to {name!r} "
            "into a string, list or mapping"
        )


class InvalidTemplateValue(WrenError, ValueError):
    """A processor's ``validate`` hook rejected a bound value."""

    def __init__(self, name: str, value: object) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{value!r} is an invalid value for {name!r}")


class UnsupportedOperation(WrenError, NotImplementedError):
    """Extraction was requested for an operator with no extraction algorithm.

    Signals an engine limitation, not a URI that failed to match.
    """


class NoMatch(WrenError, LookupError):  # noqa: N818
    """Raised by ``Template.require_match`` when the URI does not fit."""

    def __init__(self, template: str, uri: str) -> None:
        self.template = template
        self.uri = uri
        super().__init__(f"{uri!r} does not match template {template!r}")
