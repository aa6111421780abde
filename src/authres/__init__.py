# SPDX-License-Identifier: MPL-2.0
"""
authres - Authentication-Results header parsing.

This package parses the value of an email ``Authentication-Results`` header
field (RFC 7601) into immutable models: the authserv-id, the header version
and the ordered per-method results with their reasons and properties.
"""

import contextlib
from importlib.metadata import version

# Set up version
__version__ = "0.1.0"

with contextlib.suppress(Exception):
    __version__ = version("authres")


# Core components
from authres.core import (
    AuthenticationResult,
    AuthenticationResults,
    AuthResError,
    ConfigurationError,
    ParseError,
    ParserOptions,
    Property,
    parse,
    parse_header,
)

# Public API
__all__ = [
    "parse",
    "parse_header",
    "ParserOptions",
    "AuthenticationResults",
    "AuthenticationResult",
    "Property",
    "AuthResError",
    "ConfigurationError",
    "ParseError",
    "__version__",
]
