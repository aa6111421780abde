# SPDX-License-Identifier: MPL-2.0
"""Custom exceptions for the Authentication-Results parser.

Every grammar production reports its own failure kind so callers can tell a
missing authserv-id from an unknown property type without parsing messages.
All parse failures derive from :class:`ParseError` and carry the cursor
position at which the failure was detected.
"""

from typing import Any, ClassVar, Dict, Optional


class AuthResError(Exception):
    """Base exception for all authres errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(AuthResError):
    """Raised when parser options are invalid or missing."""

    pass


class ParseError(AuthResError):
    """Base exception for header parse failures."""

    kind: ClassVar[str] = "ParseError"

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the parse error.

        Args:
            message: Error message
            position: Offset into the header value where parsing failed
            details: Optional dictionary with additional error details
        """
        super().__init__(message, details)
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at offset {self.position})"


class AuthServIDMissingError(ParseError):
    """Raised when the header does not start with an authserv-id."""

    kind = "AuthServIDMissing"


class UnsupportedVersionError(ParseError):
    """Raised when the header version is present and not "1"."""

    kind = "UnsupportedVersion"


class MethodMissingError(ParseError):
    """Raised when a resinfo has no method name."""

    kind = "MethodMissing"


class MethodSpecSyntaxError(ParseError):
    """Raised when a methodspec is malformed."""

    kind = "MethodSpecSyntax"


class ResultMissingError(ParseError):
    """Raised when a methodspec has no result keyword."""

    kind = "ResultMissing"


class ReasonSpecSyntaxError(ParseError):
    """Raised when ``reason`` is not followed by ``=``."""

    kind = "ReasonSpecSyntax"


class InvalidPTypeError(ParseError):
    """Raised when a propspec uses a property type outside the whitelist."""

    kind = "InvalidPType"


class PropSpecSyntaxError(ParseError):
    """Raised when a propspec is malformed."""

    kind = "PropSpecSyntax"


class PValueMissingError(ParseError):
    """Raised when a propspec has no value."""

    kind = "PValueMissing"


class InvalidEncodingError(ParseError):
    """Raised when the header value is not valid UTF-8."""

    kind = "InvalidEncoding"


class InvalidAtomError(ParseError):
    """Raised when an atom is empty or violates the dot rules."""

    kind = "InvalidAtom"


class LeadingDotError(InvalidAtomError):
    """Raised when a dot-atom starts with a dot."""

    kind = "LeadingDot"


class DoubleDotError(InvalidAtomError):
    """Raised when a dot-atom contains two consecutive dots."""

    kind = "DoubleDot"


class TrailingDotError(InvalidAtomError):
    """Raised when a dot-atom ends with a dot."""

    kind = "TrailingDot"


class InvalidTextError(ParseError):
    """Raised when a text run is empty or contains a forbidden character."""

    kind = "InvalidText"


class TrailingGarbageError(ParseError):
    """Raised when input remains after the last resinfo."""

    kind = "TrailingGarbage"


class UnterminatedCommentError(ParseError):
    """Raised when the input ends inside a comment."""

    kind = "UnterminatedComment"


class UnterminatedQuotedStringError(ParseError):
    """Raised when the input ends inside a quoted string."""

    kind = "UnterminatedQuotedString"


class CommentNestingError(ParseError):
    """Raised when comments nest deeper than the configured limit."""

    kind = "CommentNesting"
