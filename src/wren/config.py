"""Template configuration.

TemplateConfig is a frozen dataclass, immutable after creation, so a
``Template`` holding one stays safe to share between threads.
"""

from dataclasses import dataclass

NORMALIZATION_FORMS = frozenset({"NFC", "NFD", "NFKC", "NFKD"})


@dataclass(frozen=True, slots=True)
class TemplateConfig:
    """Per-template behavior switches. All fields have sensible defaults::

        config = TemplateConfig(normalize_values=False, full_match=False)
        template = Template("/users/{id}", config=config)
    """

    # Expansion
    normalize_values: bool = True  # default for expand(..., normalize=None)
    normalization_form: str = "NFKC"

    # Matching
    full_match: bool = True  # False accepts URIs with trailing unmatched text

    def __post_init__(self) -> None:
        if self.normalization_form not in NORMALIZATION_FORMS:
            allowed = ", ".join(sorted(NORMALIZATION_FORMS))
            msg = (
                f"Unknown normalization form {self.normalization_form!r}. "
                f"Expected one of: {allowed}"
            )
            raise ValueError(msg)


DEFAULT_CONFIG = TemplateConfig()
