"""Request classification."""

from corsroute.models.request import Classification, RequestContext


def classify(ctx: RequestContext) -> Classification:
    """
    Classify a request for CORS handling.

    An OPTIONS request without Access-Control-Request-Method is an ordinary
    cross-origin call, so it is SIMPLE rather than PREFLIGHT.
    """
    if not ctx.origin:
        return Classification.NOT_CORS
    if ctx.method == "OPTIONS" and ctx.request_method:
        return Classification.PREFLIGHT
    return Classification.SIMPLE
