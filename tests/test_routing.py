import pytest

from minihttpd.content import Headers
from minihttpd.method import Method
from minihttpd.request import Request, RequestLine
from minihttpd.response import Response, ResponseError
from minihttpd.routing import Route, RouteBuilder, Router, run_middleware_chain
from minihttpd.status import Status


def _request():
    return Request.from_parts(RequestLine.parse("GET /users/1 HTTP/1.1"), Headers(), None)


def _handler(request):
    return Response(Status.OK)


def _other_handler(request):
    return Response(Status.CREATED)


def test_router_strips_leading_slash_and_str():
    router = Router("/users")
    assert router.path == "users"
    assert str(router) == "[Router 'users']"


def test_route_strips_leading_slash():
    assert Route(Method.GET, "/:id", _handler).path == ":id"


def test_get_route_captures_parameter():
    router = Router("/users")
    router.on_get("/:id", _handler)
    route, parameters = router.get_route(Method.GET, ["42"])
    assert route.handler is _handler
    assert parameters == {"id": "42"}


def test_get_route_literal_and_parameter_segments():
    router = Router("users")
    router.on_get("/:id/posts/:post", _handler)
    _, parameters = router.get_route(Method.GET, ["1", "posts", "9"])
    assert parameters == {"id": "1", "post": "9"}
    assert router.get_route(Method.GET, ["1", "comments", "9"]) is None


def test_get_route_method_mismatch():
    router = Router("users")
    router.on_get("/:id", _handler)
    assert router.get_route(Method.POST, ["1"]) is None


def test_get_route_length_mismatch():
    router = Router("users")
    router.on_get("/:id", _handler)
    assert router.get_route(Method.GET, ["1", "2"]) is None
    assert router.get_route(Method.GET, []) is None


def test_first_matching_route_wins():
    router = Router("users")
    router.on_get("/me", _handler)
    router.on_get("/:id", _other_handler)
    route, parameters = router.get_route(Method.GET, ["me"])
    assert route.handler is _handler
    assert parameters == {}
    route, _ = router.get_route(Method.GET, ["7"])
    assert route.handler is _other_handler


@pytest.mark.parametrize(
    "register, method",
    [
        ("on_get", Method.GET),
        ("on_post", Method.POST),
        ("on_put", Method.PUT),
        ("on_delete", Method.DELETE),
        ("on_patch", Method.PATCH),
        ("on_head", Method.HEAD),
        ("on_options", Method.OPTIONS),
        ("on_connect", Method.CONNECT),
        ("on_trace", Method.TRACE),
    ],
)
def test_method_helpers(register, method):
    router = Router("items")
    builder = getattr(router, register)("/x", _handler)
    assert builder.route.method is method
    assert router.get_route(method, ["x"])[0] is builder.route


def test_route_builder_use_adds_middleware():
    router = Router("users")
    builder = router.on_get("/:id", _handler)

    def middleware(request, next_):
        next_()

    assert builder.use(middleware) is builder
    assert builder.route.middlewares == [middleware]


def test_chain_runs_in_order():
    calls = []
    request = _request()

    def first(request, next_):
        calls.append("first")
        request.set_header("x-order", "first")
        next_()
        calls.append("first-after")

    def second(request, next_):
        calls.append("second")
        request.set_header("x-order", request.get_header("x-order") + ",second")
        next_()

    run_middleware_chain([first, second], request)
    assert calls == ["first", "second", "first-after"]
    assert request.get_header("x-order") == "first,second"


def test_chain_stops_without_next():
    calls = []
    request = _request()

    def stopper(request, next_):
        calls.append("stopper")
        request.set_header("x-stopper", "ran")

    def never(request, next_):
        calls.append("never")
        request.set_header("x-never", "ran")

    run_middleware_chain([stopper, never], request)
    assert calls == ["stopper"]
    assert request.get_header("x-stopper") == "ran"
    assert request.get_header("x-never") is None


def test_chain_mutates_request():
    request = _request()

    def authenticate(request, next_):
        request.set_header("x-auth", "authenticated-user")
        next_()

    run_middleware_chain([authenticate], request)
    assert request.get_header("x-auth") == "authenticated-user"


def test_route_middleware_error_propagates():
    route = Route(Method.GET, "/:id", _handler)

    def reject(request, next_):
        raise ResponseError(Response(Status.BAD_REQUEST))

    route.add_middleware(reject)
    with pytest.raises(ResponseError) as info:
        route.run_middlewares(_request())
    assert info.value.response.status is Status.BAD_REQUEST


def test_error_from_later_middleware_reaches_caller():
    seen = []

    def outer(request, next_):
        seen.append("outer")
        next_()

    def inner(request, next_):
        raise ResponseError(Response(Status.FORBIDDEN))

    with pytest.raises(ResponseError) as info:
        run_middleware_chain([outer, inner], _request())
    assert info.value.response.status is Status.FORBIDDEN
    assert seen == ["outer"]


def test_route_builder_keeps_router():
    router = Router("users")
    builder = RouteBuilder(router, Route(Method.GET, "x", _handler))
    assert builder.router is router
    assert builder.route.path == "x"