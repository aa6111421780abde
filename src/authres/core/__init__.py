# SPDX-License-Identifier: MPL-2.0
"""Core functionality for authres."""
from authres.core.config import ParserOptions
from authres.core.exceptions import AuthResError, ConfigurationError, ParseError
from authres.core.header import parse_header
from authres.core.models import AuthenticationResult, AuthenticationResults, Property
from authres.core.parser import parse

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
]
