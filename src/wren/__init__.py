"""Wren: RFC 6570 URI templates, in both directions.

Expand a template against bindings, or match a concrete URI against a
template to recover them.

Basic usage::

    from wren import Template

    template = Template("/maps/{area}{/coord*}{?zoom}")

    template.expand({"area": "sf", "coord": ["37.8", "-122.4"], "zoom": 12})
    # "/maps/sf/37.8/-122.4?zoom=12"

    template.match("/maps/sf/37.8/-122.4").bindings
    # {"area": "sf", "coord": ["37.8", "-122.4"]}
"""

__version__ = "0.1.0-dev"
__all__ = [
    "InvalidTemplateValue",
    "InvalidValueType",
    "MatchResult",
    "NoMatch",
    "ParseError",
    "Processor",
    "Template",
    "TemplateConfig",
    "Transformer",
    "UnsupportedOperation",
    "Validator",
    "WrenError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name in ("Template", "MatchResult"):
        from wren.template import template as _template

        return getattr(_template, name)

    if name in ("Processor", "Transformer", "Validator"):
        from wren.template import expansion as _expansion

        return getattr(_expansion, name)

    if name == "TemplateConfig":
        from wren.config import TemplateConfig

        return TemplateConfig

    if name in (
        "InvalidTemplateValue",
        "InvalidValueType",
        "NoMatch",
        "ParseError",
        "UnsupportedOperation",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
