"""Template and MatchResult: the public face of the engine."""

import enum
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from wren._internal.types import Bindings, Value
from wren.config import DEFAULT_CONFIG, TemplateConfig
from wren.errors import InvalidValueType, NoMatch
from wren.template.expansion import Processor, expand_expression
from wren.template.extraction import Cursor, extract_expression
from wren.template.lexer import tokenize
from wren.template.nodes import Expression, Literal, Node

logger = logging.getLogger("wren.template")
match_logger = logging.getLogger("wren.match")


def normalize_keys(bindings: Bindings) -> dict[str, Any]:
    """Return *bindings* with string keys.

    Enum members stand in for names: a string-valued member contributes
    its value, any other member its ``name``.
    """
    normalized: dict[str, Any] = {}
    for key, value in bindings.items():
        if isinstance(key, enum.Enum):
            key = key.value if isinstance(key.value, str) else key.name
        elif not isinstance(key, str):
            raise InvalidValueType(key, key)
        normalized[key] = value
    return normalized


class Template:
    """An RFC 6570 URI template, parsed once and immutable afterwards.

    Usage::

        template = Template("/maps/{area}{/coord*}")
        template.expand({"area": "sf", "coord": ["37.8", "-122.4"]})
        # "/maps/sf/37.8/-122.4"

        match = template.match("/maps/sf/37.8/-122.4")
        match.bindings
        # {"area": "sf", "coord": ["37.8", "-122.4"]}

    Instances hold no per-call state, so one template can serve any
    number of threads at once.
    """

    __slots__ = ("_config", "_nodes", "_source", "_variables")

    def __init__(self, source: str, *, config: TemplateConfig | None = None) -> None:
        if not isinstance(source, str):
            msg = f"Template source must be a string, got {type(source).__name__}."
            raise TypeError(msg)
        self._source = source
        self._config = config or DEFAULT_CONFIG
        self._nodes = tokenize(source)

        seen: dict[str, None] = {}
        for node in self._nodes:
            if isinstance(node, Expression):
                for name in node.names:
                    seen.setdefault(name)
        self._variables = tuple(seen)
        logger.debug(
            "Parsed template %r: %d nodes, variables %s",
            source,
            len(self._nodes),
            self._variables,
        )

    @property
    def source(self) -> str:
        return self._source

    pattern = source

    @property
    def config(self) -> TemplateConfig:
        return self._config

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    @property
    def variables(self) -> tuple[str, ...]:
        """Declared variable names, in first-occurrence order."""
        return self._variables

    keys = variables
    names = variables

    def expand(
        self,
        bindings: Bindings | None = None,
        *,
        normalize: bool | None = None,
        processor: Processor | None = None,
    ) -> str:
        """Expand the template against *bindings*.

        Variables missing from *bindings* (or bound to ``None``, ``[]``
        or ``{}``) are undefined and render nothing. *normalize* defaults
        to the config's ``normalize_values``.

        Raises ``InvalidValueType`` for unsupported bound values and
        ``InvalidTemplateValue`` when *processor* rejects one.
        """
        mapping = normalize_keys(bindings or {})
        if normalize is None:
            normalize = self._config.normalize_values

        parts: list[str] = []
        for node in self._nodes:
            if isinstance(node, Literal):
                parts.append(node.text)
            else:
                parts.append(
                    expand_expression(
                        node,
                        mapping,
                        normalize_values=normalize,
                        normalization_form=self._config.normalization_form,
                        processor=processor,
                    )
                )
        return "".join(parts)

    def match(self, uri: object) -> "MatchResult | None":
        """Match *uri* against the template and recover its bindings.

        *uri* may be a string or anything whose ``str()`` is the URI.
        Returns ``None`` when the URI does not fit the template. Only
        variables actually present in the URI appear in the bindings;
        when a name occurs in several expressions, the last captured
        value wins.
        """
        source = str(uri)
        cursor = Cursor(source)
        bindings: dict[str, Value] = {}

        for index, node in enumerate(self._nodes):
            if isinstance(node, Literal):
                if not cursor.match_literal(node.text):
                    match_logger.debug(
                        "No match for %r: literal %r expected at position %d (node %d)",
                        source,
                        node.text,
                        cursor.pos,
                        index,
                    )
                    return None
                continue

            following = self._nodes[index + 1] if index + 1 < len(self._nodes) else None
            boundary = following.text if isinstance(following, Literal) else None
            leader = node.operator.leader
            if not (leader and boundary and boundary.startswith(leader)):
                extract_expression(cursor, node, bindings, boundary=boundary)
                continue

            # The leader may instead open the following literal, so fall
            # back to an absent expression when the literal is not next.
            start = cursor.pos
            captured = dict(bindings)
            extract_expression(cursor, node, bindings, boundary=boundary)
            if not cursor.text.startswith(boundary, cursor.pos):
                match_logger.debug(
                    "Expression %d of %r read as absent: literal %r follows",
                    index,
                    source,
                    boundary,
                )
                cursor.pos = start
                bindings.clear()
                bindings.update(captured)

        if self._config.full_match and not cursor.at_end:
            match_logger.debug(
                "No match for %r: unmatched trailing text %r", source, cursor.remaining
            )
            return None

        return MatchResult(source=source, template=self, bindings=bindings)

    def require_match(self, uri: object) -> "MatchResult":
        """Like ``match``, but raise ``NoMatch`` instead of returning None."""
        result = self.match(uri)
        if result is None:
            raise NoMatch(self._source, str(uri))
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Template):
            return NotImplemented
        return self._source == other._source

    def __hash__(self) -> int:
        return hash((Template, self._source))

    def __str__(self) -> str:
        return self._source

    def __repr__(self) -> str:
        return f"Template({self._source!r})"


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Result of a successful ``Template.match``.

    ``bindings`` holds only the variables observed in the URI; use
    ``variables`` for every name the template declares.
    """

    source: str
    template: Template
    bindings: dict[str, Value] = field(default_factory=dict)

    @property
    def uri(self) -> str:
        return self.source

    @property
    def mapping(self) -> MappingProxyType[str, Value]:
        """Read-only view of ``bindings``."""
        return MappingProxyType(self.bindings)

    @property
    def variables(self) -> tuple[str, ...]:
        return self.template.variables

    keys = variables
    names = variables

    @property
    def values_captured(self) -> tuple[Value | None, ...]:
        """Captured value per declared variable, None where absent."""
        return tuple(self.bindings.get(name) for name in self.variables)

    def values_at(self, *names: str) -> list[Value | None]:
        return [self.bindings.get(name) for name in names]

    def get(self, name: str, default: Value | None = None) -> Value | None:
        return self.bindings.get(name, default)

    def __getitem__(self, name: str) -> Value:
        return self.bindings[name]

    def __contains__(self, name: object) -> bool:
        return name in self.bindings
