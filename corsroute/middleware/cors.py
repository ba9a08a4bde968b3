"""CORS router middleware for Starlette/FastAPI applications."""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from corsroute.models.request import RequestContext
from corsroute.models.routing import Terminal
from corsroute.services.responses import VARY
from corsroute.services.router import ResourceRouter


class CORSRouterMiddleware(BaseHTTPMiddleware):
    """
    Apply per-resource CORS policies ahead of the application's routes.

    - Preflight requests on a registered resource are answered here and
      never reach a route handler
    - Simple CORS requests get their headers merged into the handler's response
    - request.state.cors_classification / cors_headers expose the decision
    """

    def __init__(self, app: ASGIApp, router: ResourceRouter) -> None:
        super().__init__(app)
        self.router = router

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Dispatch request through the CORS resource router."""
        ctx = RequestContext.from_headers(request.method, request.headers)
        outcome = self.router.dispatch(ctx, request.url.path)

        request.state.cors_classification = outcome.classification
        request.state.cors_headers = outcome.headers

        if isinstance(outcome, Terminal):
            return Response(status_code=outcome.status_code, headers=outcome.headers)

        response = await call_next(request)
        for name, value in outcome.headers.items():
            if name == VARY:
                response.headers.add_vary_header(value)
            else:
                response.headers[name] = value
        return response


def setup_cors(app: FastAPI, router: ResourceRouter) -> None:
    """
    Install the CORS router middleware.

    Add it last so it runs outermost, before routing.
    """
    app.add_middleware(CORSRouterMiddleware, router=router)
