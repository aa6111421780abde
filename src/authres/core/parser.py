# SPDX-License-Identifier: MPL-2.0
"""
Recursive-descent parser for the Authentication-Results header (RFC 7601).

Each production is a plain function taking the :class:`Cursor` for the
current call. Productions that sit inside a loop return an :class:`Outcome`:
``MORE`` carries a parsed value and guarantees that input was consumed,
``DONE`` means the loop has nothing further to read. Failures are raised as
:class:`~authres.core.exceptions.ParseError` subclasses, so a caller never
sees a partially built structure.

Grammar, with CFWS omitted::

    header     = authserv-id [ version ] ( "none" / *resinfo )
    resinfo    = ";" ( "none" / methodspec [ reasonspec ] *propspec )
    methodspec = method [ "/" version ] "=" result
    reasonspec = "reason" "=" value
    propspec   = ptype "." property "=" pvalue
    pvalue     = quoted-string [ "@" domain ] / "@" domain / text [ "@" domain ]
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Generic, List, Optional, Tuple, TypeVar, Union

from .charclass import is_atext
from .config import ParserOptions
from .exceptions import (
    AuthServIDMissingError,
    DoubleDotError,
    InvalidAtomError,
    InvalidPTypeError,
    InvalidTextError,
    LeadingDotError,
    MethodMissingError,
    MethodSpecSyntaxError,
    PropSpecSyntaxError,
    PValueMissingError,
    ReasonSpecSyntaxError,
    ResultMissingError,
    TrailingDotError,
    TrailingGarbageError,
    UnsupportedVersionError,
)
from .models import AuthenticationResult, AuthenticationResults, Property
from .scanner import Cursor

logger = logging.getLogger(__name__)

TOKEN_NONE = "none"
TOKEN_REASON = "reason"
SUPPORTED_VERSION = "1"

T = TypeVar("T")


class Status(str, Enum):
    """Whether a looping production produced a value."""

    MORE = "more"
    DONE = "done"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Non-error result of a looping production."""

    status: Status
    value: Optional[T] = None

    @classmethod
    def more(cls, value: T) -> "Outcome[T]":
        return cls(Status.MORE, value)

    @classmethod
    def done(cls) -> "Outcome[T]":
        return cls(Status.DONE)

    @property
    def is_done(self) -> bool:
        return self.status is Status.DONE


def is_value_char(c: str) -> bool:
    """Characters of a method name, property name or bare pvalue."""
    return c != "=" and is_atext(c, allow_dot=True)


def is_method_char(c: str) -> bool:
    """Like :func:`is_value_char`, but "/" introduces the method version."""
    return c != "/" and is_value_char(c)


def parse(
    value: Union[str, bytes], options: Optional[ParserOptions] = None
) -> AuthenticationResults:
    """Parse the value of an Authentication-Results header field.

    Args:
        value: The unfolded field value, without the field name
        options: Parser options, defaults to :class:`ParserOptions`

    Returns:
        The parsed header

    Raises:
        ParseError: The first grammar violation found in ``value``
    """
    if options is None:
        options = ParserOptions()
    cursor = Cursor(value, max_comment_depth=options.max_comment_depth)

    cursor.skip_cfws()
    auth_serv_id = parse_auth_serv_id(cursor)
    cursor.skip_cfws()
    version = parse_version(cursor)
    cursor.skip_cfws()
    logger.debug("authserv-id %r, version %r", auth_serv_id, version)

    results: List[AuthenticationResult] = []
    while True:
        outcome = parse_resinfo(cursor, options.allowed_ptypes)
        if outcome.is_done:
            break
        results.append(outcome.value)

    cursor.skip_cfws()
    if not cursor.at_end():
        raise TrailingGarbageError(
            f"unexpected {cursor.rest!r} after last result", position=cursor.pos
        )
    logger.debug("parsed %d result(s) from %r", len(results), auth_serv_id)
    return AuthenticationResults(
        auth_serv_id=auth_serv_id, version=version, results=tuple(results)
    )


def parse_auth_serv_id(cursor: Cursor) -> str:
    try:
        return cursor.consume_atom(allow_dot=True, permissive=False)
    except (LeadingDotError, DoubleDotError, TrailingDotError):
        raise
    except InvalidAtomError as exc:
        raise AuthServIDMissingError("no authserv-id", position=exc.position) from exc


def parse_version(cursor: Cursor) -> str:
    """Parse the optional header version; only version 1 exists."""
    start = cursor.pos
    version = cursor.consume_digits()
    cursor.skip_cfws()
    if version and version != SUPPORTED_VERSION:
        raise UnsupportedVersionError(
            f"unsupported version: {version!r}",
            position=start,
            details={"version": version},
        )
    return version


def parse_resinfo(
    cursor: Cursor, ptypes: AbstractSet[str]
) -> Outcome[AuthenticationResult]:
    cursor.skip_cfws()
    if not cursor.consume_char(";"):
        return Outcome.done()
    cursor.skip_cfws()
    if cursor.consume_keyword(TOKEN_NONE):
        return Outcome.done()

    method, version, result = parse_method_spec(cursor)
    cursor.skip_cfws()
    reason = parse_reason_spec(cursor)

    properties: List[Property] = []
    while True:
        outcome = parse_prop_spec(cursor, ptypes)
        if outcome.is_done:
            break
        properties.append(outcome.value)

    logger.debug("resinfo %s=%s with %d property(ies)", method, result, len(properties))
    return Outcome.more(
        AuthenticationResult(
            method=method,
            version=version,
            result=result,
            reason=reason,
            properties=tuple(properties),
        )
    )


def parse_method_spec(cursor: Cursor) -> Tuple[str, str, str]:
    """Parse ``method [ "/" version ] "=" result``."""
    cursor.skip_cfws()
    method, version = parse_method(cursor)
    cursor.skip_cfws()
    if not cursor.consume_char("="):
        raise MethodSpecSyntaxError(
            f"expected '=' after method {method!r}", position=cursor.pos
        )
    cursor.skip_cfws()
    try:
        result = cursor.consume_atom(allow_dot=True, permissive=False)
    except (LeadingDotError, DoubleDotError, TrailingDotError):
        raise
    except InvalidAtomError as exc:
        raise ResultMissingError(
            f"expected result for method {method!r}", position=exc.position
        ) from exc
    return method, version, result


def parse_method(cursor: Cursor) -> Tuple[str, str]:
    """Parse a method name and its optional version."""
    try:
        method = cursor.consume_any_text(is_method_char)
    except InvalidTextError as exc:
        raise MethodMissingError("expected method", position=exc.position) from exc
    cursor.skip_cfws()
    version = ""
    if cursor.consume_char("/"):
        cursor.skip_cfws()
        version = cursor.consume_digits()
        if not version:
            raise MethodSpecSyntaxError(
                f"expected version after '{method}/'", position=cursor.pos
            )
    return method, version


def parse_reason_spec(cursor: Cursor) -> str:
    """Parse an optional ``reason=value``, returning "" when absent."""
    if not cursor.consume_keyword(TOKEN_REASON):
        return ""
    cursor.skip_cfws()
    if not cursor.consume_char("="):
        raise ReasonSpecSyntaxError("expected '=' after 'reason'", position=cursor.pos)
    cursor.skip_cfws()
    reason = cursor.consume_quoted_string()
    if reason is None:
        try:
            reason = cursor.consume_atom(allow_dot=True, permissive=False)
        except (LeadingDotError, DoubleDotError, TrailingDotError):
            raise
        except InvalidAtomError as exc:
            raise ReasonSpecSyntaxError(
                "expected value after 'reason='", position=exc.position
            ) from exc
    cursor.skip_cfws()
    return reason


def parse_prop_spec(cursor: Cursor, ptypes: AbstractSet[str]) -> Outcome[Property]:
    """Parse ``ptype "." property "=" pvalue``.

    Anything that does not start with a ptype ends the property list.
    """
    cursor.skip_cfws()
    start = cursor.pos
    try:
        ptype = cursor.consume_atom(allow_dot=False, permissive=False)
    except InvalidAtomError:
        return Outcome.done()
    if ptype.lower() not in ptypes:
        raise InvalidPTypeError(
            f"invalid property type: {ptype!r}",
            position=start,
            details={"ptype": ptype, "allowed": sorted(ptypes)},
        )
    cursor.skip_cfws()
    if not cursor.consume_char("."):
        raise PropSpecSyntaxError(f"expected '.' after {ptype!r}", position=cursor.pos)
    cursor.skip_cfws()
    try:
        name = cursor.consume_any_text(is_value_char)
    except InvalidTextError as exc:
        raise PropSpecSyntaxError(
            f"expected property name after '{ptype}.'", position=exc.position
        ) from exc
    cursor.skip_cfws()
    if not cursor.consume_char("="):
        raise PropSpecSyntaxError(
            f"expected '=' after '{ptype}.{name}'", position=cursor.pos
        )
    value = parse_pvalue(cursor)
    return Outcome.more(Property(type=ptype.lower(), name=name, value=value))


def parse_pvalue(cursor: Cursor) -> str:
    cursor.skip_cfws()
    start = cursor.pos
    quoted = cursor.consume_quoted_string()
    if quoted is not None:
        domain = _parse_domain(cursor)
        if domain is not None:
            value = f"{quoted}@{domain}"
        elif quoted:
            value = quoted
        else:
            raise PValueMissingError("empty property value", position=start)
    elif cursor.peek() == "@":
        value = f"@{_parse_domain(cursor)}"
    else:
        try:
            local = cursor.consume_any_text(is_value_char)
        except InvalidTextError as exc:
            raise PValueMissingError("expected property value", position=exc.position) from exc
        domain = _parse_domain(cursor)
        value = local if domain is None else f"{local}@{domain}"
    cursor.skip_cfws()
    return value


def _parse_domain(cursor: Cursor) -> Optional[str]:
    """Parse ``"@" domain`` if present."""
    if not cursor.consume_char("@"):
        return None
    try:
        return cursor.consume_atom(allow_dot=True, permissive=False)
    except (LeadingDotError, DoubleDotError, TrailingDotError):
        raise
    except InvalidAtomError as exc:
        raise PValueMissingError("expected domain after '@'", position=exc.position) from exc
