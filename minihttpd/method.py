"""HTTP request methods."""

from __future__ import annotations

from enum import Enum

from minihttpd.errors import InvalidMethodError


class Method(Enum):
    """A request method; the member's value is its canonical name."""

    OPTIONS = "OPTIONS"
    CONNECT = "CONNECT"
    DELETE = "DELETE"
    TRACE = "TRACE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    POST = "POST"
    GET = "GET"
    PUT = "PUT"

    @classmethod
    def parse(cls, value: str) -> "Method":
        """Parse a method name, ignoring ASCII case.

        Raises InvalidMethodError for anything else.
        """
        if value.isascii():
            member = cls.__members__.get(value.upper())
            if member is not None:
                return member
        raise InvalidMethodError(value)

    def __str__(self) -> str:
        return self.value