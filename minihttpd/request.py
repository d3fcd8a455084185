"""Incoming requests and their request line."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from minihttpd.content import Body, Headers, Version
from minihttpd.method import Method
from minihttpd.response import Response, ResponseError
from minihttpd.status import Status


@dataclass(frozen=True)
class RequestLine:
    """The first line of a request: method, target path and version."""

    method: Method
    path: str
    version: Version

    @classmethod
    def parse(cls, text: str) -> "RequestLine":
        """Parse ``METHOD PATH VERSION``; missing parts count as empty.

        Raises InvalidMethodError or InvalidVersionError.
        """
        parts = text.split()
        method_text, path, version_text = (parts + ["", "", ""])[:3]
        method = Method.parse(method_text)
        version = Version.parse(version_text)
        return cls(method=method, path=path, version=version)


def _bad_request() -> ResponseError:
    return ResponseError(Response(Status.BAD_REQUEST))


@dataclass
class Request:
    """A parsed request, plus parameters filled in by routing."""

    method: Method
    path: str
    version: Version
    headers: Headers = field(default_factory=Headers)
    body: Optional[Body] = None
    path_parameters: Optional[Dict[str, str]] = None
    query_parameters: Optional[Dict[str, str]] = None

    @classmethod
    def from_parts(
        cls, request_line: RequestLine, headers: Headers, body: Optional[Body]
    ) -> "Request":
        return cls(
            method=request_line.method,
            path=request_line.path,
            version=request_line.version,
            headers=headers,
            body=body,
        )

    def get_query(self, name: str) -> Optional[str]:
        return (self.query_parameters or {}).get(name)

    def get_parameter(self, name: str) -> Optional[str]:
        return (self.path_parameters or {}).get(name)

    def get_parameter_or_error(self, name: str) -> str:
        """Path parameter ``name``; raises ResponseError (400) if missing."""
        value = self.get_parameter(name)
        if value is None:
            raise _bad_request()
        return value

    def get_query_or_error(self, name: str) -> str:
        """Query parameter ``name``; raises ResponseError (400) if missing."""
        value = self.get_query(name)
        if value is None:
            raise _bad_request()
        return value

    def set_path_parameters(self, parameters: Dict[str, str]) -> None:
        """Store path parameters; an empty mapping leaves them unchanged."""
        if parameters:
            self.path_parameters = dict(parameters)

    def set_query_parameters(self, parameters: Dict[str, str]) -> None:
        """Store query parameters; an empty mapping leaves them unchanged."""
        if parameters:
            self.query_parameters = dict(parameters)

    def set_header(self, key: str, value: str) -> None:
        self.headers.set(key, value)

    def get_header(self, name: str) -> Optional[str]:
        return self.headers.get(name)

    def get_header_or_error(self, name: str) -> str:
        """Header ``name``; raises ResponseError (400) if missing."""
        value = self.get_header(name)
        if value is None:
            raise _bad_request()
        return value

    def split_path(self) -> Tuple[str, str]:
        """Return ``(path, query)`` with surrounding slashes removed from the path."""
        path = self.path.lstrip("/").rstrip("/")
        route, _, queries = path.partition("?")
        return route, queries

    def __str__(self) -> str:
        return f"[Request]: {self.method} {self.path} {self.version}"


RequestHandler = Callable[[Request], Response]
"""A handler returns a Response or raises ResponseError."""

if TYPE_CHECKING:  # pragma: no cover
    __all__ = ["Request", "RequestLine", "RequestHandler"]