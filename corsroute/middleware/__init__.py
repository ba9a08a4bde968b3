"""HTTP middleware for cross-cutting concerns."""

from corsroute.middleware.cors import CORSRouterMiddleware, setup_cors

__all__ = [
    "CORSRouterMiddleware",
    "setup_cors",
]
