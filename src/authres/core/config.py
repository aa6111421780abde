# SPDX-License-Identifier: MPL-2.0
"""Parser options.

Defaults can be overridden from the environment:

- ``AUTHRES_MAX_COMMENT_DEPTH``: maximum comment nesting depth
- ``AUTHRES_EXTRA_PTYPES``: comma separated property types accepted in
  addition to the built-in whitelist
"""

import os
from typing import Any, FrozenSet, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .charclass import is_atext
from .exceptions import ConfigurationError

DEFAULT_MAX_COMMENT_DEPTH = 64

# Property types understood without any configuration
PTYPES: FrozenSet[str] = frozenset({"smtp", "header", "body", "policy", "mailfrom"})


class ParserOptions(BaseModel):
    """Tunables for :func:`authres.parse`."""

    model_config = ConfigDict(frozen=True)

    max_comment_depth: int = Field(default=DEFAULT_MAX_COMMENT_DEPTH, ge=1, le=512)
    extra_ptypes: FrozenSet[str] = frozenset()

    @field_validator("extra_ptypes", mode="before")
    @classmethod
    def _normalize_ptypes(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, Iterable):
            return value
        ptypes = set()
        for item in value:
            if not isinstance(item, str):
                raise ValueError(f"ptype must be a string, not {type(item).__name__}")
            ptype = item.strip().lower()
            if not ptype:
                continue
            # ptypes are scanned as plain atoms, so anything else never matches
            if not all(is_atext(c, allow_dot=False) for c in ptype):
                raise ValueError(f"invalid ptype {item!r}")
            ptypes.add(ptype)
        return frozenset(ptypes)

    @property
    def allowed_ptypes(self) -> FrozenSet[str]:
        """Property types the parser accepts."""
        return PTYPES | self.extra_ptypes

    @classmethod
    def create(cls, **kwargs: Any) -> "ParserOptions":
        """Build options, reporting bad values as :class:`ConfigurationError`."""
        try:
            return cls(**kwargs)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid parser options: {exc.error_count()} error(s)",
                details={"errors": exc.errors(include_url=False)},
            ) from exc

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ParserOptions":
        """Build options from ``AUTHRES_*`` environment variables."""
        if environ is None:
            environ = os.environ
        kwargs: dict = {}
        depth = environ.get("AUTHRES_MAX_COMMENT_DEPTH")
        if depth:
            kwargs["max_comment_depth"] = depth
        extra = environ.get("AUTHRES_EXTRA_PTYPES")
        if extra:
            kwargs["extra_ptypes"] = extra
        return cls.create(**kwargs)
