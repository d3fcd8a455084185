"""HTTP responses and the exception that carries one out of a handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from minihttpd.content import Body, Headers, Version, body_bytes
from minihttpd.content_type import ContentType
from minihttpd.status import Status


@dataclass
class Response:
    """A response: status, optional version, headers and optional body.

    The ``with_*`` methods change the response and return it, so calls chain.
    """

    status: Status
    version: Optional[Version] = None
    headers: Headers = field(default_factory=Headers)
    body: Optional[Body] = None

    def to_bytes(self) -> bytes:
        """Serialise the response for the wire.

        The version defaults to HTTP/1.1. A Content-Length header is added
        after the stored headers whenever the body is not empty.
        """
        version = self.version or Version.HTTP_1_1
        payload = body_bytes(self.body) if self.body is not None else b""

        lines = [f"{version.value} {self.status.code()} {self.status.reason()}"]
        lines.extend(f"{key}: {value}" for key, value in self.headers)
        if payload:
            lines.append(f"{Headers.CONTENT_LENGTH}: {len(payload)}")

        head = "".join(f"{line}\r\n" for line in lines) + "\r\n"
        return head.encode("utf-8") + payload

    def with_headers(self, headers: Headers) -> "Response":
        """Replace all headers."""
        self.headers = headers
        return self

    def with_header(self, key: str, value: str) -> "Response":
        self.headers.set(key, value)
        return self

    def _with_body(self, body: Body, content_type: ContentType) -> "Response":
        self.body = body
        self.headers.set_content_type(content_type)
        return self

    def with_html(self, content: str) -> "Response":
        return self._with_body(content, ContentType.HTML)

    def with_text(self, content: str) -> "Response":
        return self._with_body(content, ContentType.PLAIN)

    def with_json(self, content: str) -> "Response":
        return self._with_body(content, ContentType.JSON)

    def with_xml(self, content: str) -> "Response":
        return self._with_body(content, ContentType.XML)

    def with_css(self, content: str) -> "Response":
        return self._with_body(content, ContentType.CSS)

    def with_javascript(self, content: str) -> "Response":
        return self._with_body(content, ContentType.JAVASCRIPT)

    def with_csv(self, content: str) -> "Response":
        return self._with_body(content, ContentType.CSV)

    def with_bytes(self, data: bytes, content_type: ContentType) -> "Response":
        return self._with_body(bytes(data), content_type)

    def with_file(self, data: bytes, content_type: ContentType) -> "Response":
        """Attach the contents of a file as a binary body."""
        return self.with_bytes(data, content_type)


class ResponseError(Exception):
    """Raised by handlers and middleware to answer early with ``response``."""

    def __init__(self, response: Response) -> None:
        self.response = response
        super().__init__(f"{response.status.code()} {response.status.reason()}")