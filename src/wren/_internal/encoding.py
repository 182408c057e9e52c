"""Percent-encoding and Unicode normalization primitives.

Thin wrappers over ``urllib.parse`` and ``unicodedata`` with the exact
behavior URI templates need: UTF-8 byte-wise escapes with uppercase hex,
and optional pass-through of existing ``%XX`` triplets for reserved
expansion.
"""

import unicodedata
from urllib.parse import quote, unquote

from wren._internal.charclass import UNRESERVED_SAFE, is_pct_triplet


def encode(text: str, safe: str = UNRESERVED_SAFE, *, keep_escapes: bool = False) -> str:
    """Percent-encode every character of *text* outside *safe*.

    Alphanumerics and ``_.-~`` are always left alone. With
    *keep_escapes*, well-formed ``%XX`` triplets already present in
    *text* are copied through instead of having their ``%`` escaped.

    Examples::

        encode("hello world!")                  -> "hello%20world%21"
        encode("a/b", RESERVED_SAFE)            -> "a/b"
        encode("50%25", RESERVED_SAFE, keep_escapes=True) -> "50%25"
    """
    if not keep_escapes or "%" not in text:
        return quote(text, safe=safe)

    parts: list[str] = []
    start = 0
    pos = text.find("%")
    while pos != -1:
        if is_pct_triplet(text, pos):
            parts.append(quote(text[start:pos], safe=safe))
            parts.append(text[pos : pos + 3])
            start = pos + 3
            pos = text.find("%", start)
        else:
            pos = text.find("%", pos + 1)
    parts.append(quote(text[start:], safe=safe))
    return "".join(parts)


def decode(text: str) -> str:
    """Decode ``%XX`` escapes as UTF-8. Other characters pass through."""
    if "%" not in text:
        return text
    return unquote(text, errors="replace")


def normalize(text: str, form: str = "NFKC") -> str:
    """Apply Unicode normalization (compatibility composition by default)."""
    return unicodedata.normalize(form, text)
