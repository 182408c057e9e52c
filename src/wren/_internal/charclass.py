"""URI character classes (RFC 3986 §2) shared by the lexer and both engines.

Built once at import time as immutable frozensets. Every predicate takes a
single character and answers membership in constant time.
"""

import string

ALPHA = frozenset(string.ascii_letters)
DIGIT = frozenset(string.digits)
HEXDIG = frozenset(string.hexdigits)

UNRESERVED = ALPHA | DIGIT | frozenset("-._~")
GEN_DELIMS = frozenset(":/?#[]@")
SUB_DELIMS = frozenset("!$&'()*+,;=")
RESERVED = GEN_DELIMS | SUB_DELIMS

# varchar = ALPHA / DIGIT / "_" / pct-encoded  (RFC 6570 §2.3)
VARCHAR = ALPHA | DIGIT | frozenset("_")

# Safe-character strings for urllib.parse.quote (alphanumerics and "_.-~"
# are always safe there).
UNRESERVED_SAFE = "~"
RESERVED_SAFE = "".join(sorted(RESERVED)) + UNRESERVED_SAFE


def is_alpha(ch: str) -> bool:
    return ch in ALPHA


def is_digit(ch: str) -> bool:
    return ch in DIGIT


def is_unreserved(ch: str) -> bool:
    return ch in UNRESERVED


def is_reserved(ch: str) -> bool:
    return ch in RESERVED


def is_varchar(ch: str) -> bool:
    return ch in VARCHAR


def is_pct_triplet(text: str, pos: int) -> bool:
    """Return True if ``text[pos:pos + 3]`` is a ``%XX`` escape."""
    return (
        pos + 2 < len(text)
        and text[pos] == "%"
        and text[pos + 1] in HEXDIG
        and text[pos + 2] in HEXDIG
    )
