"""Message bodies, header maps and protocol versions."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterator, Optional, Tuple, TypeVar, Union

from minihttpd.content_type import ContentType
from minihttpd.errors import InvalidVersionError

Body = Union[str, bytes]

T = TypeVar("T")


def body_bytes(body: Body) -> bytes:
    """Return a body as bytes; text is encoded as UTF-8."""
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    raise TypeError(f"body must be str or bytes, not {type(body).__name__}")


class Headers:
    """A map of header names to values.

    Names are stored as given. Lookups through ``get`` use the lower-cased
    name, while ``has`` checks the name exactly.
    """

    CONTENT_LENGTH = "Content-Length"
    CONTENT_TYPE = "Content-Type"

    def __init__(self) -> None:
        self._headers: Dict[str, str] = {}

    @classmethod
    def from_text(cls, text: str) -> "Headers":
        """Build headers from CRLF-separated ``name:value`` lines.

        Lines without a colon are skipped; the value keeps everything after
        the first colon, including leading whitespace.
        """
        headers = cls()
        for line in text.split("\r\n"):
            key, separator, value = line.partition(":")
            if separator:
                headers._headers[key] = value
        return headers

    def get(self, name: str) -> Optional[str]:
        """Value stored under the lower-cased ``name``, if any."""
        return self._headers.get(name.lower())

    def get_as(self, name: str, converter: Callable[[str], T]) -> Optional[T]:
        """Value under ``name`` passed through ``converter``, or None if absent or unconvertible."""
        value = self.get(name)
        if value is None:
            return None
        try:
            return converter(value)
        except (ValueError, TypeError):
            return None

    def set(self, key: str, value: str) -> None:
        self._headers[key] = value

    def has(self, name: str) -> bool:
        return name in self._headers

    def set_content_type(self, content_type: ContentType) -> None:
        self.set(self.CONTENT_TYPE, content_type.value)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(name, value)`` pairs."""
        return iter(self._headers.items())

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"Headers({self._headers!r})"


class Version(Enum):
    """A supported HTTP protocol version."""

    HTTP_1_1 = "HTTP/1.1"
    HTTP_2 = "HTTP/2"
    HTTP_3 = "HTTP/3"

    @classmethod
    def parse(cls, value: str) -> "Version":
        """Parse a version token, ignoring ASCII case.

        Raises InvalidVersionError for anything else.
        """
        if value.isascii():
            wanted = value.upper()
            for member in cls:
                if member.value == wanted:
                    return member
        raise InvalidVersionError(value)

    def __str__(self) -> str:
        return self.value