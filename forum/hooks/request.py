"""
Request context

Minimal, framework-neutral description of the current HTTP request as the
request checkpoints need it: the method and the two parameter sources.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from starlette.requests import Request

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class RequestContext:
    """
    Attributes:
        method: HTTP method, upper-cased on construction.
        query:  Query-string parameters (the GET payload).
        form:   Parsed form body (the POST payload).
    """

    method: str = "GET"
    query: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    form: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", (self.method or "").upper())

    def is_post(self) -> bool:
        return self.method == "POST"

    def is_get(self) -> bool:
        return self.method == "GET"

    def action(self, source: str) -> Any:
        """Return the raw ``action`` parameter from ``source`` ("query" or "form")."""
        params = self.form if source == "form" else self.query
        return params.get("action")

    @classmethod
    async def from_starlette(cls, request: Request) -> RequestContext:
        """Build a context from a Starlette/FastAPI request, parsing the form body for POST only."""
        form: Mapping[str, Any] = _EMPTY
        if request.method.upper() == "POST":
            form = dict(await request.form())
        return cls(method=request.method, query=dict(request.query_params), form=form)
