"""Routes, routers and middleware chains."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from minihttpd.method import Method
from minihttpd.request import Request, RequestHandler

NextFn = Callable[[], None]
"""Runs the rest of the chain; raises ResponseError if a later step answers early."""

Middleware = Callable[[Request, NextFn], None]
"""Inspects or changes a request; raises ResponseError to answer early."""


def run_middleware_chain(middlewares: Sequence[Middleware], request: Request) -> None:
    """Run ``middlewares`` in order, each deciding whether to call the next.

    A middleware that returns without calling ``next_`` ends the chain
    quietly; a ResponseError raised anywhere propagates to the caller.
    """
    if not middlewares:
        return
    current, *rest = middlewares
    current(request, lambda: run_middleware_chain(rest, request))


class Route:
    """A handler bound to a method and a path pattern such as ``:id/posts``."""

    def __init__(self, method: Method, path: str, handler: RequestHandler) -> None:
        self.method = method
        self.path = path.lstrip("/")
        self.handler = handler
        self.middlewares: List[Middleware] = []

    def run_middlewares(self, request: Request) -> None:
        run_middleware_chain(self.middlewares, request)

    def add_middleware(self, middleware: Middleware) -> None:
        self.middlewares.append(middleware)

    def __repr__(self) -> str:
        return f"Route({self.method}, {self.path!r})"


class RouteBuilder:
    """Returned when a route is registered, to attach middleware to it."""

    def __init__(self, router: "Router", route: Route) -> None:
        self.router = router
        self.route = route

    def use(self, middleware: Middleware) -> "RouteBuilder":
        self.route.add_middleware(middleware)
        return self


class Router:
    """A group of routes under one base path segment."""

    def __init__(self, path: str) -> None:
        self.path = path.lstrip("/")
        self.routes: List[Route] = []

    def get_route(
        self, method: Method, segments: Sequence[str]
    ) -> Optional[Tuple[Route, Dict[str, str]]]:
        """First route matching ``method`` and ``segments``, with captured parameters."""
        for route in self.routes:
            if route.method is not method:
                continue
            route_segments = route.path.split("/")
            if len(route_segments) != len(segments):
                continue
            parameters = _match(route_segments, segments)
            if parameters is not None:
                return route, parameters
        return None

    def on_method(self, path: str, handler: RequestHandler, method: Method) -> RouteBuilder:
        route = Route(method, path, handler)
        self.routes.append(route)
        return RouteBuilder(self, route)

    def on_get(self, path: str, handler: RequestHandler) -> RouteBuilder:
        return self.on_method(path, handler, Method.GET)

    def on_post(self, path: str, handler: RequestHandler) -> RouteBuilder:
        return self.on_method(path, handler, Method.POST)

    def on_put(self, path: str, handler: RequestHandler) -> RouteBuilder:
        return self.on_method(path, handler, Method.PUT)

    def on_delete(self, path: str, handler: RequestHandler) -> RouteBuilder:
        return self.on_method(path, handler, Method.DELETE)

    def on_patch(self, path: str, handler: RequestHandler) -> RouteBuilder:
        return self.on_method(path, handler, Method.PATCH)

    def on_head(self, path: str, handler: RequestHandler) -> RouteBuilder:
        return self.on_method(path, handler, Method.HEAD)

    def on_options(self, path: str, handler: RequestHandler) -> RouteBuilder:
        return self.on_method(path, handler, Method.OPTIONS)

    def on_connect(self, path: str, handler: RequestHandler) -> RouteBuilder:
        return self.on_method(path, handler, Method.CONNECT)

    def on_trace(self, path: str, handler: RequestHandler) -> RouteBuilder:
        return self.on_method(path, handler, Method.TRACE)

    def __str__(self) -> str:
        return f"[Router '{self.path}']"


def _match(route_segments: Sequence[str], segments: Sequence[str]) -> Optional[Dict[str, str]]:
    parameters: Dict[str, str] = {}
    for pattern, actual in zip(route_segments, segments):
        if pattern.startswith(":"):
            parameters[pattern.lstrip(":")] = actual
        elif pattern != actual:
            return None
    return parameters