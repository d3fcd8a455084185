"""Accumulating raw request bytes and turning them into message parts."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from minihttpd.content import Headers
from minihttpd.errors import InvalidParseError
from minihttpd.request import RequestLine


class RequestBuffer:
    """Collects bytes of a request until the header block is complete."""

    MAX_HEADERS_BYTES = 8192
    HEADERS_END_PATTERN = b"\r\n\r\n"

    def __init__(self) -> None:
        self._value = bytearray()
        self._headers_end: Optional[int] = None

    def add(self, chunk: bytes) -> None:
        self._value.extend(chunk)
        if self._headers_end is None:
            position = self._value.find(self.HEADERS_END_PATTERN)
            if position != -1:
                self._headers_end = position + len(self.HEADERS_END_PATTERN)

    def split(self) -> Optional[Tuple[bytes, bytes, bytes]]:
        """Return ``(request_line, headers, body)`` once the header block ended, else None."""
        if self._headers_end is None:
            return None
        pre_header = bytes(self._value[: self._headers_end])
        body = bytes(self._value[self._headers_end :])

        line_end = pre_header.find(b"\r\n")
        if line_end == -1:
            return None
        request_line = pre_header[:line_end]
        headers = pre_header[line_end + 2 : len(pre_header) - 4]
        return request_line, headers, body

    def exceeded_max_bytes(self) -> bool:
        return len(self._value) > self.MAX_HEADERS_BYTES

    def __len__(self) -> int:
        return len(self._value)


def _decode(data: bytes) -> str:
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as error:
        raise InvalidParseError(error) from error


def parse_body(body: bytes) -> Optional[bytes]:
    """Return the body as bytes, or None when it is empty."""
    if not body:
        return None
    return bytes(body)


def parse_request_line(data: bytes) -> RequestLine:
    """Decode and parse a request line; raises an HttpError subclass on failure."""
    return RequestLine.parse(_decode(data))


def parse_headers(data: bytes) -> Headers:
    """Decode and parse a header block; raises InvalidParseError on bad UTF-8."""
    return Headers.from_text(_decode(data))


def parse_query_parameters(queries: str) -> Dict[str, str]:
    """Parse ``a=1&b=2``; pieces without ``=`` are ignored."""
    parameters: Dict[str, str] = {}
    for segment in queries.split("&"):
        key, separator, value = segment.partition("=")
        if separator:
            parameters[key] = value
    return parameters