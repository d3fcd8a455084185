"""A threaded TCP server that reads requests, routes them and writes responses."""

from __future__ import annotations

import socket
import sys
import threading
from typing import List, Optional

from minihttpd.content import Headers
from minihttpd.errors import EmptyRequestError, HttpError, RequestTooLargeError, ServerError
from minihttpd.parser import (
    RequestBuffer,
    parse_body,
    parse_headers,
    parse_query_parameters,
    parse_request_line,
)
from minihttpd.request import Request
from minihttpd.response import Response, ResponseError
from minihttpd.routing import Middleware, Router, run_middleware_chain
from minihttpd.status import Status

CHUNK_BYTES_AMOUNT = 1024


def _content_length(value: str) -> int:
    """Parse a Content-Length value strictly: optional '+', then ASCII digits only."""
    digits = value[1:] if value.startswith("+") else value
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"invalid content length {value!r}")
    return int(digits)


def read_request(stream) -> Request:
    """Read one request from a socket-like object with ``recv``.

    Raises EmptyRequestError if the peer closes early, RequestTooLargeError
    once more than the buffer limit has arrived, and HttpError subclasses
    when the request cannot be parsed.
    """
    buffer = RequestBuffer()
    while True:
        chunk = stream.recv(CHUNK_BYTES_AMOUNT)
        if not chunk:
            raise EmptyRequestError()

        buffer.add(chunk)
        if buffer.exceeded_max_bytes():
            raise RequestTooLargeError()

        parts = buffer.split()
        if parts is None:
            continue

        request_line, header_block, body = parts
        headers = parse_headers(header_block)
        body_length = headers.get_as(Headers.CONTENT_LENGTH, _content_length) or 0
        if len(body) < body_length:
            continue

        line = parse_request_line(request_line)
        return Request.from_parts(line, headers, parse_body(body))


class Server:
    """Routes requests to routers by their first path segment."""

    def __init__(self, host: str, port: str) -> None:
        self.host = host
        self.port = port
        self.routers: List[Router] = []
        self.middlewares: List[Middleware] = []

    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def route(self, router: Router) -> "Server":
        self.routers.append(router)
        return self

    def use_middleware(self, middleware: Middleware) -> "Server":
        self.middlewares.append(middleware)
        return self

    def _find_router(self, base_path: str) -> Optional[Router]:
        return next((router for router in self.routers if router.path == base_path), None)

    def dispatch(self, request: Request) -> Response:
        """Run middleware, find the route and call its handler."""
        try:
            run_middleware_chain(self.middlewares, request)
        except ResponseError as error:
            return error.response

        path, queries = request.split_path()
        segments = path.lstrip("/").split("/")

        router = self._find_router(segments[0])
        if router is None:
            return Response(Status.NOT_FOUND)

        found = router.get_route(request.method, segments[1:])
        if found is None:
            return Response(Status.NOT_FOUND)
        route, parameters = found

        version = request.version
        request.set_query_parameters(parse_query_parameters(queries))
        request.set_path_parameters(parameters)

        try:
            route.run_middlewares(request)
        except ResponseError as error:
            return error.response

        try:
            response = route.handler(request)
        except ResponseError as error:
            return error.response

        response.version = version
        return response

    def handle_connection(self, stream) -> Response:
        """Read a request from ``stream`` and produce its response."""
        return self.dispatch(read_request(stream))

    def _serve(self, connection: socket.socket) -> None:
        with connection:
            try:
                response = self.handle_connection(connection)
            except (ServerError, HttpError, OSError) as error:
                print(f"Connection error: {error!r}", file=sys.stderr)
                return
            try:
                connection.sendall(response.to_bytes())
            except OSError as error:
                print(f"Write error: {error!r}", file=sys.stderr)

    def start(self) -> None:
        """Listen on the address and serve each connection in its own thread."""
        try:
            port = int(self.port)
        except ValueError:
            raise OSError(f"invalid port {self.port!r}") from None

        with socket.create_server((self.host, port)) as listener:
            print("# Server is listening")
            while True:
                try:
                    connection, _ = listener.accept()
                except OSError as error:
                    print(f"Error accepting connection: {error!r}", file=sys.stderr)
                    continue
                threading.Thread(target=self._serve, args=(connection,), daemon=True).start()