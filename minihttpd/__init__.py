"""A small threaded HTTP server with routers, path parameters and middleware."""

__version__ = "0.1.0"