# SPDX-License-Identifier: MPL-2.0
"""
Cursor over an Authentication-Results header value.

The cursor owns an immutable copy of the input and a single integer
position. Scanning primitives either advance the position and return what
they consumed, or leave the position where it was and report failure, by
returning a false value (``consume_char``, ``consume_literal``) or by raising
a :class:`~authres.core.exceptions.ParseError` (``consume_atom``,
``consume_any_text``).

CFWS handling follows RFC 5322 section 3.2.2: runs of space and tab, and
parenthesized comments that may nest and may contain quoted-pairs.
"""

from typing import Callable, List, Optional, Type, Union

from .charclass import is_atext, is_cchar, is_digit, is_qtext, is_vchar, is_wsp
from .config import DEFAULT_MAX_COMMENT_DEPTH
from .exceptions import (
    CommentNestingError,
    DoubleDotError,
    InvalidAtomError,
    InvalidEncodingError,
    InvalidTextError,
    LeadingDotError,
    ParseError,
    TrailingDotError,
    UnterminatedCommentError,
    UnterminatedQuotedStringError,
)

CharPredicate = Callable[[str], bool]


def _is_word_char(c: str) -> bool:
    # qtext minus the parentheses, which delimit comments
    return c not in "()" and is_qtext(c)


def decode_value(value: Union[str, bytes]) -> str:
    """Return ``value`` as text, rejecting anything that is not valid UTF-8.

    Bytes are decoded strictly. Text is checked for lone surrogates, which is
    what a lossy ``surrogateescape`` decode leaves behind for invalid bytes.
    """
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidEncodingError(
                "invalid UTF-8 in header value", position=exc.start
            ) from exc
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidEncodingError(
            "invalid UTF-8 in header value", position=exc.start
        ) from exc
    return value


class Cursor:
    """A position into a header value plus the scanning primitives."""

    def __init__(
        self,
        value: Union[str, bytes],
        max_comment_depth: int = DEFAULT_MAX_COMMENT_DEPTH,
    ) -> None:
        self.text = decode_value(value)
        self.pos = 0
        self.max_comment_depth = max_comment_depth

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, rest={self.rest!r})"

    @property
    def rest(self) -> str:
        """The unconsumed part of the input."""
        return self.text[self.pos:]

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Return the next character, or an empty string at end of input."""
        return self.text[self.pos:self.pos + 1]

    def _scan(self, predicate: CharPredicate, start: Optional[int] = None) -> int:
        """Return the end of the maximal run matching ``predicate``."""
        end = self.pos if start is None else start
        text = self.text
        while end < len(text) and predicate(text[end]):
            end += 1
        return end

    # Single characters and literals

    def consume_char(self, expected: str) -> bool:
        """Consume ``expected`` if it is the next character."""
        if self.peek() != expected:
            return False
        self.pos += 1
        return True

    def consume_literal(self, token: str) -> bool:
        """Consume ``token`` if the input continues with it (case-sensitive)."""
        if not self.text.startswith(token, self.pos):
            return False
        self.pos += len(token)
        return True

    def consume_keyword(self, token: str) -> bool:
        """Consume ``token`` only when it is not the prefix of a longer word."""
        start = self.pos
        if not self.consume_literal(token):
            return False
        following = self.peek()
        if following and following != "=" and is_atext(following, allow_dot=True):
            self.pos = start
            return False
        return True

    # Runs

    def consume_digits(self) -> str:
        """Consume a possibly empty run of ASCII digits."""
        start = self.pos
        self.pos = self._scan(is_digit)
        return self.text[start:self.pos]

    def consume_any_text(self, predicate: CharPredicate) -> str:
        """Consume the maximal non-empty run of characters matching ``predicate``."""
        start = self.pos
        end = self._scan(predicate)
        if end == start:
            raise InvalidTextError("expected text", position=start)
        self.pos = end
        return self.text[start:end]

    def consume_atom(self, allow_dot: bool = False, permissive: bool = False) -> str:
        """Consume an atom, or a dot-atom when ``allow_dot`` is set.

        Unless ``permissive``, a dot may not lead, trail, or follow another
        dot. The position is left unchanged when an error is raised.
        """
        start = self.pos
        end = self._scan(lambda c: is_atext(c, allow_dot))
        if end == start:
            raise InvalidAtomError("expected atom", position=start)
        atom = self.text[start:end]
        if not permissive:
            if atom.startswith("."):
                raise LeadingDotError("leading dot in atom", position=start)
            if ".." in atom:
                raise DoubleDotError("double dot in atom", position=start + atom.index(".."))
            if atom.endswith("."):
                raise TrailingDotError("trailing dot in atom", position=end - 1)
        self.pos = end
        return atom

    def _consume_quoted_pair(self, unterminated: Type[ParseError], opened_at: int) -> str:
        """Consume a backslash and the character it escapes."""
        escaped = self.text[self.pos + 1:self.pos + 2]
        if not escaped:
            raise unterminated("unexpected end of input after backslash", position=opened_at)
        if not (is_vchar(escaped) or is_wsp(escaped)):
            raise InvalidTextError(f"cannot escape {escaped!r}", position=self.pos + 1)
        self.pos += 2
        return escaped

    def consume_quoted_string(self) -> Optional[str]:
        """Consume a quoted string and return its content.

        Returns None, without consuming anything, when the next character is
        not a double quote. Words are separated by CFWS: comments inside the
        quotes are dropped, each separator becomes a single space, and CFWS
        next to the quotes is dropped.
        """
        opened_at = self.pos
        if not self.consume_char('"'):
            return None
        words: List[str] = []
        while True:
            self.skip_cfws()
            c = self.peek()
            if not c:
                raise UnterminatedQuotedStringError(
                    "unterminated quoted string", position=opened_at
                )
            if c == '"':
                self.pos += 1
                return " ".join(words)
            word = self._consume_qcontent(opened_at)
            if not word:
                raise InvalidTextError(
                    f"unexpected {c!r} in quoted string", position=self.pos
                )
            words.append(word)

    def _consume_qcontent(self, opened_at: int) -> str:
        parts: List[str] = []
        while True:
            c = self.peek()
            if c == "\\":
                parts.append(self._consume_quoted_pair(UnterminatedQuotedStringError, opened_at))
            elif c and _is_word_char(c):
                start = self.pos
                self.pos = self._scan(_is_word_char)
                parts.append(self.text[start:self.pos])
            else:
                return "".join(parts)

    # Comments and folding white space

    def skip_space(self) -> None:
        self.pos = self._scan(is_wsp)

    def skip_cfws(self) -> None:
        """Skip any mix of white space and comments."""
        self.skip_space()
        while self._skip_comment(depth=1):
            self.skip_space()
        self.skip_space()

    def _skip_comment(self, depth: int) -> bool:
        opened_at = self.pos
        if not self.consume_char("("):
            return False
        if depth > self.max_comment_depth:
            raise CommentNestingError(
                f"comments nested deeper than {self.max_comment_depth}",
                position=opened_at,
                details={"max_comment_depth": self.max_comment_depth},
            )
        while True:
            c = self.peek()
            if not c:
                raise UnterminatedCommentError("unterminated comment", position=opened_at)
            if c == ")":
                self.pos += 1
                return True
            if is_wsp(c):
                self.skip_space()
            elif c == "(":
                self._skip_comment(depth + 1)
            elif c == "\\":
                self._consume_quoted_pair(UnterminatedCommentError, opened_at)
            elif is_cchar(c):
                self.pos = self._scan(is_cchar)
            else:
                raise InvalidTextError(f"unexpected {c!r} in comment", position=self.pos)
