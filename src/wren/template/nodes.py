"""Template nodes: Literal text and Expression frozen dataclasses."""

from dataclasses import dataclass
from typing import TypeAlias

from wren.template.operators import Operator


@dataclass(frozen=True, slots=True)
class VariableSpec:
    """One ``varspec`` inside an expression.

    Plain:    ``{name}``    (explode=False, prefix=None)
    Explode:  ``{name*}``   (explode=True)
    Prefix:   ``{name:3}``  (prefix=3)
    """

    name: str
    explode: bool = False
    prefix: int | None = None

    def __post_init__(self) -> None:
        if self.explode and self.prefix is not None:
            msg = f"Variable {self.name!r} cannot be both exploded and prefixed."
            raise ValueError(msg)
        if self.prefix is not None and self.prefix < 1:
            msg = f"Prefix length for {self.name!r} must be positive, got {self.prefix}."
            raise ValueError(msg)

    def __str__(self) -> str:
        if self.explode:
            return f"{self.name}*"
        if self.prefix is not None:
            return f"{self.name}:{self.prefix}"
        return self.name


@dataclass(frozen=True, slots=True)
class Literal:
    """Text copied verbatim on expansion and matched verbatim on match."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Expression:
    """A ``{...}`` expression: one operator applied to its variables."""

    operator: Operator
    variables: tuple[VariableSpec, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(var.name for var in self.variables)

    def __str__(self) -> str:
        specs = ",".join(str(var) for var in self.variables)
        return f"{{{self.operator.symbol}{specs}}}"


Node: TypeAlias = Literal | Expression
