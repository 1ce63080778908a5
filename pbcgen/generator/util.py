"""String helpers shared by the C generators.

Case folding here is ASCII only. Schema identifiers are ASCII and the
generated C must not depend on the host locale.
"""

import string

from .types import Cardinality

_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _is_upper(c: str) -> bool:
    return "A" <= c <= "Z"


def split_string_using(full: str, delim: str) -> list[str]:
    """Split a string on any of the characters in delim.

    Every character of delim is its own separator, the string is not matched
    as a whole. Empty pieces are dropped.
    """
    pieces: list[str] = []
    start = None
    for i, c in enumerate(full):
        if c in delim:
            if start is not None:
                pieces.append(full[start:i])
                start = None
        elif start is None:
            start = i
    if start is not None:
        pieces.append(full[start:])
    return pieces


def string_replace(s: str, oldsub: str, newsub: str, replace_all: bool) -> str:
    """Replace the first (or every) occurrence of oldsub with newsub.

    An empty oldsub leaves s untouched. Searching resumes after each
    replacement, so newsub is never matched again.
    """
    if not oldsub:
        return s

    result: list[str] = []
    start_pos = 0
    while True:
        pos = s.find(oldsub, start_pos)
        if pos == -1:
            break
        result.append(s[start_pos:pos])
        result.append(newsub)
        start_pos = pos + len(oldsub)
        if not replace_all:
            break
    result.append(s[start_pos:])
    return "".join(result)


def to_upper(name: str) -> str:
    return name.translate(_TO_UPPER)


def to_lower(name: str) -> str:
    return name.translate(_TO_LOWER)


def camel_to_upper(name: str) -> str:
    """FooBar -> FOO_BAR."""
    was_upper = True  # suppress initial _
    out: list[str] = []
    for c in name:
        is_upper = _is_upper(c)
        if is_upper and not was_upper:
            out.append("_")
        out.append(c if is_upper else to_upper(c))
        was_upper = is_upper
    return "".join(out)


def camel_to_lower(name: str) -> str:
    """FooBar -> foo_bar."""
    was_upper = True  # suppress initial _
    out: list[str] = []
    for c in name:
        is_upper = _is_upper(c)
        if is_upper and not was_upper:
            out.append("_")
        out.append(to_lower(c) if is_upper else c)
        was_upper = is_upper
    return "".join(out)


def to_camel(name: str) -> str:
    """foo_bar -> FooBar."""
    out: list[str] = []
    next_is_upper = True
    for c in name:
        if c == "_":
            next_is_upper = True
        elif next_is_upper:
            out.append(to_upper(c))
            next_is_upper = False
        else:
            out.append(c)
    return "".join(out)


def convert_to_spaces(s: str) -> str:
    """Blank out a string, keeping its length (used to align continuation lines)."""
    return " " * len(s)


def fast_hex(i: int) -> str:
    """Render a byte as lowercase hex without padding."""
    return format(i & 0xFF, "x")


def get_label_name(cardinality: Cardinality) -> str:
    return {
        Cardinality.OPTIONAL: "optional",
        Cardinality.REQUIRED: "required",
        Cardinality.REPEATED: "repeated",
    }[cardinality]
