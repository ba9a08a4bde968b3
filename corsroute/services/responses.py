"""CORS response header generation."""

from __future__ import annotations

from structlog import get_logger

from corsroute.models.policy import WILDCARD, ResourcePolicy
from corsroute.models.request import RequestContext
from corsroute.models.routing import Terminal
from corsroute.services.origins import origin_allowed

logger = get_logger()

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
EXPOSE_HEADERS = "Access-Control-Expose-Headers"
MAX_AGE = "Access-Control-Max-Age"
ALLOW_PRIVATE_NETWORK = "Access-Control-Allow-Private-Network"
VARY = "Vary"

PREFLIGHT_STATUS = 200


def _origin_headers(ctx: RequestContext, policy: ResourcePolicy) -> dict[str, str] | None:
    """Allow-Origin/Allow-Credentials for an allowed origin, None if rejected."""
    if not origin_allowed(policy.origin_policy, ctx.origin):
        logger.debug("cors_origin_rejected", origin=ctx.origin, method=ctx.method)
        return None

    headers: dict[str, str] = {}
    # "*" is never paired with Allow-Credentials
    if policy.any_origin and not policy.allow_credentials:
        headers[ALLOW_ORIGIN] = WILDCARD
    else:
        headers[ALLOW_ORIGIN] = ctx.origin or ""
        headers[VARY] = "Origin"

    if policy.allow_credentials:
        headers[ALLOW_CREDENTIALS] = "true"

    return headers


def build_simple_headers(ctx: RequestContext, policy: ResourcePolicy) -> dict[str, str] | None:
    """
    Headers for a simple (actual) cross-origin request.

    Args:
        ctx: Request context with an Origin
        policy: Resolved policy of the matched resource

    Returns:
        Headers to merge into the response, or None to pass the request
        through without CORS headers
    """
    headers = _origin_headers(ctx, policy)
    if headers is None:
        return None

    if policy.exposed_headers:
        headers[EXPOSE_HEADERS] = ", ".join(policy.exposed_headers)

    return headers


def build_preflight_response(ctx: RequestContext, policy: ResourcePolicy) -> Terminal:
    """
    Answer a preflight request.

    The response is always terminal with a success status and empty body.
    A rejected origin gets no CORS headers at all; a rejected method or
    header list only loses the matching grant header. The browser enforces
    the outcome.

    Args:
        ctx: Preflight request context
        policy: Resolved policy of the matched resource

    Returns:
        Terminal response
    """
    headers = _origin_headers(ctx, policy)
    if headers is None:
        return Terminal(status_code=PREFLIGHT_STATUS)

    request_method = (ctx.request_method or "").upper()
    if policy.allows_method(request_method):
        if policy.allowed_methods == WILDCARD:
            headers[ALLOW_METHODS] = request_method
        else:
            headers[ALLOW_METHODS] = ", ".join(policy.allowed_methods)
    else:
        logger.debug(
            "cors_preflight_method_rejected",
            origin=ctx.origin,
            request_method=request_method,
        )

    requested = ctx.requested_headers
    if policy.allows_headers(requested):
        if policy.allowed_headers == WILDCARD:
            if requested:
                headers[ALLOW_HEADERS] = ", ".join(requested)
        elif policy.allowed_headers:
            headers[ALLOW_HEADERS] = ", ".join(policy.allowed_headers)
    else:
        logger.debug(
            "cors_preflight_headers_rejected",
            origin=ctx.origin,
            request_headers=requested,
        )

    if policy.max_age is not None:
        headers[MAX_AGE] = str(policy.max_age)

    if policy.allow_private_network and ctx.request_private_network:
        headers[ALLOW_PRIVATE_NETWORK] = "true"

    return Terminal(status_code=PREFLIGHT_STATUS, headers=headers)
