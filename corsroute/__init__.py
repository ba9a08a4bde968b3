"""Per-resource CORS decisions for ASGI applications."""

from corsroute.core.errors import ConfigurationError
from corsroute.models.policy import CORSOptions, ResourcePolicy
from corsroute.models.request import Classification, RequestContext
from corsroute.models.routing import Forwarded, ResourcePattern, Terminal
from corsroute.services.router import ResourceRouter

__all__ = [
    "CORSOptions",
    "Classification",
    "ConfigurationError",
    "Forwarded",
    "RequestContext",
    "ResourcePattern",
    "ResourcePolicy",
    "ResourceRouter",
    "Terminal",
]
