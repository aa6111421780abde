# SPDX-License-Identifier: MPL-2.0
"""Data models for parsed Authentication-Results headers."""
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class Property(BaseModel):
    """One ``ptype.property=value`` piece of evidence.

    ``type`` is stored lower-cased because ptypes match case-insensitively,
    so ``str()`` rebuilds the token with that spelling (``SMTP.mailfrom=x``
    becomes ``smtp.mailfrom=x``). ``name`` and ``value`` keep the source
    spelling.
    """

    model_config = ConfigDict(frozen=True)

    type: str  # noqa: A003
    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.type}.{self.name}={self.value}"


class AuthenticationResult(BaseModel):
    """Outcome of one authentication method (a resinfo)."""

    model_config = ConfigDict(frozen=True)

    method: str
    version: str = ""
    result: str
    reason: str = ""
    properties: Tuple[Property, ...] = ()

    def get_all(self, ptype: str, name: str) -> List[str]:
        """Return the values of every matching property, in header order."""
        ptype = ptype.lower()
        return [p.value for p in self.properties if p.type == ptype and p.name == name]

    def get(self, ptype: str, name: str) -> Optional[str]:
        """Return the value of the first matching property, or None."""
        values = self.get_all(ptype, name)
        return values[0] if values else None


class AuthenticationResults(BaseModel):
    """A parsed Authentication-Results header value."""

    model_config = ConfigDict(frozen=True)

    auth_serv_id: str
    version: str = ""
    results: Tuple[AuthenticationResult, ...] = ()

    def find(self, method: str) -> List[AuthenticationResult]:
        """Return the results reported for ``method``, in header order."""
        method = method.lower()
        return [r for r in self.results if r.method.lower() == method]
