# SPDX-License-Identifier: MPL-2.0
"""Helpers for callers that hold a whole header line rather than its value."""

import re
from typing import Optional, Union

from .config import ParserOptions
from .models import AuthenticationResults
from .parser import parse
from .scanner import decode_value

FIELD_NAME = "Authentication-Results"

_FIELD_NAME_RE = re.compile(r"\A[ \t]*Authentication-Results[ \t]*:", re.IGNORECASE)
_FOLD_RE = re.compile(r"\r?\n(?=[ \t])")


def strip_field_name(value: str) -> str:
    """Remove a leading ``Authentication-Results:`` field name, if present."""
    return _FIELD_NAME_RE.sub("", value, count=1)


def unfold(value: str) -> str:
    """Undo RFC 5322 folding: drop line breaks that precede white space."""
    return _FOLD_RE.sub("", value).rstrip("\r\n")


def parse_header(
    field: Union[str, bytes], options: Optional[ParserOptions] = None
) -> AuthenticationResults:
    """Parse a raw ``Authentication-Results`` header line.

    The field name is optional and the value may still be folded.
    ``ParseError.position`` is an offset into
    ``unfold(strip_field_name(field))``, not into ``field`` itself.
    """
    return parse(unfold(strip_field_name(decode_value(field))), options)
