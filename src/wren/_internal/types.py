"""Shared type aliases used across wren modules."""

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

# A value recovered by matching, or rendered by expansion:
# scalar, ordered list, or ordered key/value mapping.
Value: TypeAlias = str | list[str] | dict[str, str]

# What callers may bind to a variable before coercion.
BindingValue: TypeAlias = (
    str | int | float | bool | Sequence[Any] | Mapping[Any, Any] | None
)

# Caller-supplied bindings (keys are names or enum members).
Bindings: TypeAlias = Mapping[Any, BindingValue]
