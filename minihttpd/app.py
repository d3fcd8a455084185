"""A sample application: a users route guarded by middleware."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from minihttpd.errors import HttpError, ServerError
from minihttpd.request import Request
from minihttpd.response import Response, ResponseError
from minihttpd.routing import NextFn, Router
from minihttpd.server import Server
from minihttpd.status import Status

_U32_MAX = 0xFFFFFFFF


def get_user_by_id(request: Request) -> Response:
    """Answer with the requested user id as JSON."""
    user_id = request.get_parameter_or_error("id")
    auth = request.get_header_or_error("x-auth")

    print(f"User ID: {user_id}")
    print(f"Auth: {auth}")

    return (
        Response(Status.OK)
        .with_json(f'{{ "user_id": "{user_id}" }}')
        .with_header("x-powered-by", "minihttpd")
    )


def auth_middleware(request: Request, next_: NextFn) -> None:
    """Mark every request as authenticated."""
    print("[auth_middleware] running")
    request.set_header("x-auth", "authenticated-user")
    next_()


def _is_u32(text: str) -> bool:
    digits = text[1:] if text.startswith("+") else text
    return digits.isascii() and digits.isdigit() and int(digits) <= _U32_MAX


def validate_id_middleware(request: Request, next_: NextFn) -> None:
    """Reject requests whose ``id`` parameter is not an unsigned 32-bit number."""
    print("[validate_id_middleware] running")
    user_id = request.get_parameter_or_error("id")
    if not _is_u32(user_id):
        raise ResponseError(
            Response(Status.BAD_REQUEST).with_json('{ "error": "id must be numeric" }')
        )
    next_()


def build_server(host: str, port: str) -> Server:
    server = Server(host, port)
    users_router = Router("/users")
    users_router.on_get("/:id", get_user_by_id).use(validate_id_middleware)
    server.use_middleware(auth_middleware)
    server.route(users_router)
    return server


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the sample users application.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", default="8080")
    args = parser.parse_args(argv)

    server = build_server(args.host, args.port)
    try:
        server.start()
    except (ServerError, HttpError, OSError) as error:
        print(error)
        return 1
    except KeyboardInterrupt:
        pass
    print("# Server stopped #")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())