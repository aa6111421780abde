# SPDX-License-Identifier: MPL-2.0
"""Character classes from RFC 5322 section 3.2 with RFC 6532 extensions.

Each predicate takes a single character (a one-element ``str``). Code points
at or above 0x80 count as visible characters, which is how RFC 6532 admits
UTF-8 into atoms, quoted strings and comments.
"""

# RFC 5322 3.2.3. specials, minus the period which callers opt into
SPECIALS = frozenset('()<>[]:;@\\,"')

ASCII_DIGITS = frozenset("0123456789")


def is_multibyte(c: str) -> bool:
    """Return True if c needs more than one byte in UTF-8."""
    return ord(c) >= 0x80


def is_vchar(c: str) -> bool:
    """Return True if c is a visible (printing) character."""
    return "!" <= c <= "~" or is_multibyte(c)


def is_wsp(c: str) -> bool:
    """Return True if c is a space or horizontal tab (RFC 5234 WSP)."""
    return c == " " or c == "\t"


def is_digit(c: str) -> bool:
    """Return True if c is an ASCII decimal digit."""
    return c in ASCII_DIGITS


def is_atext(c: str, allow_dot: bool = False) -> bool:
    """Return True if c is an atext character.

    The period is a special in RFC 5322 but is part of dot-atom-text, so it
    is accepted only when ``allow_dot`` is set.
    """
    if c == ".":
        return allow_dot
    if c in SPECIALS:
        return False
    return is_vchar(c)


def is_qtext(c: str) -> bool:
    """Return True if c may appear unescaped inside a quoted string."""
    if c == "\\" or c == '"':
        return False
    return is_vchar(c)


def is_cchar(c: str) -> bool:
    """Return True if c may appear unescaped inside a comment."""
    if c == "(" or c == ")" or c == "\\":
        return False
    return is_vchar(c)
