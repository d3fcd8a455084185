import socket
import threading
import time

import pytest

from minihttpd.content import Version
from minihttpd.errors import EmptyRequestError, InvalidMethodError, RequestTooLargeError
from minihttpd.method import Method
from minihttpd.request import Request
from minihttpd.response import Response, ResponseError
from minihttpd.routing import Router
from minihttpd.server import Server, read_request
from minihttpd.status import Status


def _pair(data: bytes, close: bool = True):
    left, right = socket.socketpair()
    right.sendall(data)
    if close:
        right.shutdown(socket.SHUT_WR)
    return left, right


def _echo_handler(request):
    return Response(Status.OK).with_text(
        f"{request.get_parameter('id')}|{request.get_query('x')}"
    )


def _server():
    server = Server("127.0.0.1", "0")
    router = Router("/users")
    router.on_get("/:id", _echo_handler)
    server.route(router)
    return server


def test_read_request_without_body():
    left, right = _pair(b"GET /users/1 HTTP/1.1\r\nhost:example.com\r\n\r\n")
    with left, right:
        request = read_request(left)
    assert request.method is Method.GET
    assert request.path == "/users/1"
    assert request.version is Version.HTTP_1_1
    assert request.body is None
    assert request.get_header("host") == "example.com"


def test_read_request_waits_for_body():
    left, right = socket.socketpair()
    with left, right:
        right.sendall(b"POST /a HTTP/1.1\r\ncontent-length:5\r\n\r\nhe")
        right.sendall(b"llo")
        right.shutdown(socket.SHUT_WR)
        request = read_request(left)
    assert request.method is Method.POST
    assert request.body == b"hello"


def test_read_request_empty_connection():
    left, right = _pair(b"")
    with left, right:
        with pytest.raises(EmptyRequestError):
            read_request(left)


def test_read_request_incomplete_then_closed():
    left, right = _pair(b"GET /a HTTP/1.1\r\n")
    with left, right:
        with pytest.raises(EmptyRequestError):
            read_request(left)


def test_read_request_too_large():
    left, right = _pair(b"GET /" + b"a" * 9000)
    with left, right:
        with pytest.raises(RequestTooLargeError):
            read_request(left)


def test_read_request_invalid_method():
    left, right = _pair(b"FETCH /a HTTP/1.1\r\n\r\n")
    with left, right:
        with pytest.raises(InvalidMethodError):
            read_request(left)


def test_address_and_chaining():
    server = Server("127.0.0.1", "8080")
    assert server.address() == "127.0.0.1:8080"
    router = Router("/x")
    assert server.route(router) is server
    assert server.routers == [router]


def test_dispatch_routes_with_parameters_and_query():
    request = Request(method=Method.GET, path="/users/42?x=abc", version=Version.HTTP_2)
    response = _server().dispatch(request)
    assert response.status is Status.OK
    assert response.body == "42|abc"
    assert response.version is Version.HTTP_2


@pytest.mark.parametrize(
    "method, path",
    [
        (Method.GET, "/nobody/1"),
        (Method.GET, "/users/1/extra"),
        (Method.POST, "/users/1"),
    ],
)
def test_dispatch_not_found(method, path):
    request = Request(method=method, path=path, version=Version.HTTP_1_1)
    assert _server().dispatch(request).status is Status.NOT_FOUND


def test_middleware_order():
    calls = []
    server = Server("127.0.0.1", "0")

    def global_mw(request, next_):
        calls.append("global")
        next_()

    def route_mw(request, next_):
        calls.append("route")
        next_()

    def handler(request):
        calls.append("handler")
        return Response(Status.CREATED)

    router = Router("/items")
    router.on_post("/new", handler).use(route_mw)
    server.use_middleware(global_mw).route(router)

    request = Request(method=Method.POST, path="/items/new", version=Version.HTTP_1_1)
    assert server.dispatch(request).status is Status.CREATED
    assert calls == ["global", "route", "handler"]


def test_global_middleware_short_circuits():
    server = _server()

    def deny(request, next_):
        raise ResponseError(Response(Status.UNAUTHORIZED))

    server.use_middleware(deny)
    request = Request(method=Method.GET, path="/users/1", version=Version.HTTP_1_1)
    assert server.dispatch(request).status is Status.UNAUTHORIZED


def test_middleware_without_next_still_routes():
    server = _server()
    server.use_middleware(lambda request, next_: None)
    request = Request(method=Method.GET, path="/users/5", version=Version.HTTP_1_1)
    assert server.dispatch(request).body == "5|None"


def test_handler_error_response_keeps_no_version():
    server = Server("127.0.0.1", "0")
    router = Router("/a")

    def handler(request):
        return Response(Status.OK).with_text(request.get_query_or_error("q"))

    router.on_get("/b", handler)
    server.route(router)
    request = Request(method=Method.GET, path="/a/b", version=Version.HTTP_3)
    response = server.dispatch(request)
    assert response.status is Status.BAD_REQUEST
    assert response.version is None


def test_handle_connection():
    left, right = _pair(b"GET /users/9 HTTP/1.1\r\n\r\n")
    with left, right:
        response = _server().handle_connection(left)
    assert response.to_bytes().startswith(b"HTTP/1.1 200 OK\r\n")
    assert response.body == "9|None"


def _free_port() -> int:
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def test_start_serves_over_tcp():
    port = _free_port()
    server = _server()
    server.port = str(port)
    threading.Thread(target=server.start, daemon=True).start()

    deadline = time.monotonic() + 5
    while True:
        try:
            client = socket.create_connection(("127.0.0.1", port), timeout=5)
            break
        except OSError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.05)

    with client:
        client.sendall(b"GET /users/3?x=y HTTP/1.1\r\n\r\n")
        received = b""
        while chunk := client.recv(4096):
            received += chunk
    assert received.startswith(b"HTTP/1.1 200 OK\r\n")
    assert received.endswith(b"\r\n\r\n3|y")


def test_start_rejects_bad_port():
    with pytest.raises(OSError):
        Server("127.0.0.1", "notaport").start()