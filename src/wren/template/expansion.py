"""Variable expansion: bound Python values to percent-encoded URI text.

``expand_variable`` renders one variable for its operator;
``expand_expression`` joins the rendered variables of one ``{...}``
expression. Undefined values (``None``, empty lists, empty mappings)
render nothing, and an expression with nothing to render emits no leader.
"""

import enum
import numbers
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias, runtime_checkable

from wren._internal.charclass import RESERVED_SAFE, UNRESERVED_SAFE
from wren._internal.encoding import encode, normalize
from wren._internal.types import Bindings, Value
from wren.errors import InvalidTemplateValue, InvalidValueType
from wren.template.nodes import Expression, VariableSpec
from wren.template.operators import NamingMode, Operator


@runtime_checkable
class Validator(Protocol):
    """Expansion hook that vets each defined value before it is rendered.

    A false result raises ``InvalidTemplateValue``.
    """

    def validate(self, name: str, value: Value) -> bool: ...


@runtime_checkable
class Transformer(Protocol):
    """Expansion hook that renders a value itself.

    The result is used as-is, with no percent-encoding applied.
    """

    def transform(self, name: str, value: Value) -> str | list[str]: ...


# A processor may implement either hook or both.
Processor: TypeAlias = Validator | Transformer


@dataclass(frozen=True, slots=True)
class Rendered:
    """One expanded variable, before naming and joining.

    ``keypairs`` is True for exploded mappings, whose items are already
    ``key=value`` shaped and never get the variable name prepended.
    """

    name: str
    value: str | list[str]
    keypairs: bool = False


def _coerce_scalar(name: str, value: Any) -> str:
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, numbers.Number):
        return str(value)
    raise InvalidValueType(name, value)


def coerce_value(name: str, value: Any) -> Value | None:
    """Coerce a bound value into a scalar, list or mapping of strings.

    Returns ``None`` for undefined values: ``None`` itself and empty
    lists or mappings.

    Raises ``InvalidValueType`` for anything that is not a string,
    number, boolean, enum member, non-string sequence or mapping.
    """
    if value is None:
        return None
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, str | bool | numbers.Number):
        return _coerce_scalar(name, value)
    if isinstance(value, Mapping):
        pairs = {
            _coerce_scalar(name, key): _coerce_scalar(name, item)
            for key, item in value.items()
        }
        return pairs or None
    if isinstance(value, Sequence) and not isinstance(value, bytes | bytearray):
        items = [_coerce_scalar(name, item) for item in value]
        return items or None
    raise InvalidValueType(name, value)


def _normalize_value(value: Value, form: str) -> Value:
    if isinstance(value, dict):
        return {normalize(key, form): normalize(item, form) for key, item in value.items()}
    if isinstance(value, list):
        return [normalize(item, form) for item in value]
    return normalize(value, form)


def _encoder(operator: Operator) -> Callable[[str], str]:
    if operator.allows_reserved:
        return lambda text: encode(text, RESERVED_SAFE, keep_escapes=True)
    return lambda text: encode(text, UNRESERVED_SAFE)


def expand_variable(
    variable: VariableSpec,
    value: Any,
    operator: Operator,
    *,
    normalize_values: bool = True,
    normalization_form: str = "NFKC",
    processor: Processor | None = None,
) -> Rendered | None:
    """Render one bound value per *operator*'s rules.

    Returns ``None`` when the value is undefined, so the variable
    contributes nothing to its expression.

    Examples (PLAIN operator)::

        {var}   "hello world!"          -> Rendered("var", "hello%20world%21")
        {var:3} "value"                 -> Rendered("var", "val")
        {list}  ["a", "b"]              -> Rendered("list", "a,b")
        {list*} ["a", "b"]              -> Rendered("list", ["a", "b"])
        {keys*} {"a": "1", "b": "2"}    -> Rendered("keys", ["a=1", "b=2"], keypairs=True)
    """
    name = variable.name
    coerced = coerce_value(name, value)
    if coerced is None:
        return None

    if isinstance(processor, Validator) and not processor.validate(name, coerced):
        raise InvalidTemplateValue(name, coerced)

    if normalize_values:
        coerced = _normalize_value(coerced, normalization_form)

    if isinstance(processor, Transformer):
        transformed = processor.transform(name, coerced)
        if isinstance(transformed, list) and not variable.explode:
            transformed = ",".join(transformed)
        return Rendered(name, transformed)

    enc = _encoder(operator)
    prefix = variable.prefix

    if isinstance(coerced, dict):
        # Prefix modifiers do not apply to mappings
        if variable.explode:
            pairs = []
            for key, item in coerced.items():
                if item == "" and operator.naming is NamingMode.PATH_STYLE:
                    pairs.append(enc(key))
                else:
                    pairs.append(f"{enc(key)}={enc(item)}")
            return Rendered(name, pairs, keypairs=True)
        flat = ",".join(f"{enc(key)},{enc(item)}" for key, item in coerced.items())
        return Rendered(name, flat)

    if isinstance(coerced, list):
        items = [enc(item[:prefix] if prefix else item) for item in coerced]
        if variable.explode:
            return Rendered(name, items)
        return Rendered(name, ",".join(items))

    return Rendered(name, enc(coerced[:prefix] if prefix else coerced))


def format_rendered(rendered: Rendered, naming: NamingMode) -> list[str]:
    """Apply the operator's naming mode, one output unit per list item."""
    items = rendered.value if isinstance(rendered.value, list) else [rendered.value]
    if rendered.keypairs or naming is NamingMode.BARE:
        return list(items)
    if naming is NamingMode.PATH_STYLE:
        return [rendered.name if item == "" else f"{rendered.name}={item}" for item in items]
    return [f"{rendered.name}={item}" for item in items]


def expand_expression(
    expression: Expression,
    bindings: Bindings,
    *,
    normalize_values: bool = True,
    normalization_form: str = "NFKC",
    processor: Processor | None = None,
) -> str:
    """Expand one expression against *bindings* (keys already strings).

    Returns ``""`` when none of its variables is defined; otherwise the
    operator's leader followed by the rendered units joined by its joiner.
    """
    operator = expression.operator
    units: list[str] = []
    for variable in expression.variables:
        rendered = expand_variable(
            variable,
            bindings.get(variable.name),
            operator,
            normalize_values=normalize_values,
            normalization_form=normalization_form,
            processor=processor,
        )
        if rendered is not None:
            units.extend(format_rendered(rendered, operator.naming))

    if not units:
        return ""
    return operator.leader + operator.joiner.join(units)
