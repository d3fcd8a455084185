# minihttpd

A small threaded HTTP server. Routes are grouped under routers. Parameters
come from the path (`/users/:id`) and from the query string. Middleware
chains can stop a request early.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the demo server

```
minihttpd
minihttpd --host 0.0.0.0 --port 9000
```

The defaults are `--host 127.0.0.1` and `--port 8080`. The demo serves
`GET /users/:id`:

- A global middleware (`auth_middleware`) sets the header
  `x-auth: authenticated-user` on every request.
- A route middleware (`validate_id_middleware`) checks the id. If it is not
  an unsigned 32-bit number, it answers `400 Bad Request` with the body
  `{ "error": "id must be numeric" }`.
- The handler (`get_user_by_id`) answers with JSON and the header
  `x-powered-by: minihttpd`.

```
curl http://127.0.0.1:8080/users/42
{ "user_id": "42" }
```

The server runs until it is interrupted with Ctrl-C. It then prints
`# Server stopped #`. If it cannot listen, it prints the error and exits
with status 1.

## Writing your own server

```python
from minihttpd.routing import Router
from minihttpd.server import Server
from minihttpd.response import Response
from minihttpd.status import Status


def hello(request):
    name = request.get_parameter_or_error("name")
    return Response(Status.OK).with_text(f"hello {name}")


def logger(request, next_):
    print(request)
    next_()


router = Router("/greet")
router.on_get("/:name", hello)

server = Server("127.0.0.1", "8080")
server.use_middleware(logger)
server.route(router)
server.start()
```

### Handlers

A handler takes a `Request` and returns a `Response`. It may also raise a
`ResponseError` that carries a response, and that response is sent as it
is. Three methods raise such an error with `400 Bad Request` when the value
is missing: `get_parameter_or_error`, `get_query_or_error` and
`get_header_or_error`. The plain `get_parameter`, `get_query` and
`get_header` return `None` instead.

`Response` methods such as `with_text`, `with_html`, `with_json`,
`with_xml`, `with_css`, `with_javascript`, `with_csv`, `with_bytes`,
`with_file` and `with_header` change the response and return it, so calls
can be chained. `to_bytes()` writes the response out for the wire. It
defaults to `HTTP/1.1` and adds a `Content-Length` header when the body is
not empty.

### Middleware

A middleware is called as `middleware(request, next_)`:

- Call `next_()` to go on down the chain.
- Raise `ResponseError` to answer at once.
- If it does neither, the rest of that chain is skipped, but the request
  still goes on to routing and the handler.

Global middleware is added with `Server.use_middleware`. Middleware for a
single route is added with `use`:

```python
router.on_get("/:name", hello).use(logger)
```

### Routing

The first path segment picks the router. The remaining segments are matched
against the route patterns, and a segment that starts with `:` captures a
parameter. Query pairs `a=1&b=2` become query parameters. The registration
methods are `on_get`, `on_post`, `on_put`, `on_delete`, `on_patch`,
`on_head`, `on_options`, `on_connect`, `on_trace` and `on_method`.
`Server.dispatch(request)` runs all of this for a request that has already
been parsed. It is useful in tests.

A request gets `404 Not Found` when its router, method or path is unknown.

## What it does not do

- Each connection carries exactly one request. There is no keep-alive, no
  chunked transfer encoding and no TLS.
- A request is turned away once more than 8192 bytes have been read.
- The request line must name one of the nine standard methods. The version
  must be `HTTP/1.1`, `HTTP/2` or `HTTP/3`, and this is only a label: the
  wire format is always HTTP/1.x text.
- Header names are stored as they arrive, but `Headers.get` looks them up in
  lower case. So `Content-Length` and other incoming headers are found only
  if the client sends their names in lower case.
- Header values keep any whitespace that follows the colon.
- Query values are not percent-decoded.
- There is no static file serving, logging setup or configuration file.