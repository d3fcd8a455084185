"""Exceptions raised while parsing HTTP messages and serving connections."""

from __future__ import annotations


class HttpError(Exception):
    """A request could not be understood as HTTP."""


class InvalidMethodError(HttpError):
    """The request line names a method that is not known."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method '{method}' is invalid")


class InvalidVersionError(HttpError):
    """The request line names an HTTP version that is not supported."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"HTTP Version '{version}' is invalid")


class InvalidParseError(HttpError):
    """Part of a request was not valid UTF-8."""

    def __init__(self, error: UnicodeDecodeError) -> None:
        self.error = error
        super().__init__(f"Error during parsing: {error}")


class ServerError(Exception):
    """A connection could not be served."""


class EmptyRequestError(ServerError):
    """The peer closed the connection before a full request arrived."""

    def __init__(self) -> None:
        super().__init__("Request is empty")


class RequestTooLargeError(ServerError):
    """The request grew past the size the server accepts."""

    def __init__(self) -> None:
        super().__init__("Request size is out of bounds")