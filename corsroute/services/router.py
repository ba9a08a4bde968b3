"""Resource router: path patterns to CORS policies."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from structlog import get_logger

from corsroute.core.errors import ConfigurationError
from corsroute.models.policy import CORSOptions, ResourcePolicy
from corsroute.models.request import Classification, RequestContext
from corsroute.models.routing import Forwarded, ResourcePattern, RouterOutcome
from corsroute.services.classifier import classify
from corsroute.services.resolver import load_options, resolve
from corsroute.services.responses import build_preflight_response, build_simple_headers

logger = get_logger()


class ResourceRouter:
    """
    Static table of CORS-enabled resources.

    Resources are registered at startup and matched in registration order
    (first match wins). The table is sealed on the first dispatch and is
    read-only afterwards.

    Usage:
        router = ResourceRouter(defaults=settings.cors_defaults)
        router.resource("/public/*", origins="*")
        router.resource("/*", origins=["http://foo.com"], allow_credentials=True)
    """

    def __init__(self, defaults: CORSOptions | Mapping[str, Any] | None = None):
        self.defaults = load_options(defaults) if defaults is not None else CORSOptions()
        self._routes: list[tuple[ResourcePattern, ResourcePolicy]] = []
        self._sealed = False

    def register(
        self, pattern: str, options: CORSOptions | Mapping[str, Any] | None = None, **opts: Any
    ) -> ResourcePolicy:
        """
        Register a CORS-enabled resource.

        Args:
            pattern: Path template ("/foo", "/users/:id", "/public/*")
            options: Declared options, merged with keyword options
            **opts: Declared options as keywords

        Returns:
            Resolved policy for the resource

        Raises:
            ConfigurationError: On a malformed pattern, unknown option, bad
                value, or registration after dispatching has started
        """
        if self._sealed:
            raise ConfigurationError(
                "Cannot register resources after the router started dispatching",
                context={"pattern": pattern},
            )

        if isinstance(options, CORSOptions):
            base = {name: getattr(options, name) for name in options.model_fields_set}
        else:
            base = dict(options or {})
        declared = {**base, **opts}

        resource_pattern = ResourcePattern.parse(pattern)
        policy = resolve(declared, self.defaults)
        self._routes.append((resource_pattern, policy))

        logger.info(
            "cors_resource_registered",
            pattern=resource_pattern.template,
            origin_policy=policy.origin_policy.kind,
            allow_credentials=policy.allow_credentials,
        )
        return policy

    resource = register

    @property
    def routes(self) -> tuple[tuple[ResourcePattern, ResourcePolicy], ...]:
        return tuple(self._routes)

    def match(self, path: str) -> tuple[ResourcePattern, ResourcePolicy] | None:
        """Return the first registered resource matching path."""
        for resource_pattern, policy in self._routes:
            if resource_pattern.matches(path):
                return resource_pattern, policy
        return None

    def dispatch(self, ctx: RequestContext, path: str) -> RouterOutcome:
        """
        Decide the CORS outcome for a request.

        Args:
            ctx: Request context
            path: Request URL path

        Returns:
            Terminal for preflight requests on a registered resource,
            Forwarded (possibly with headers) otherwise
        """
        self._sealed = True

        matched = self.match(path)
        if matched is None:
            return Forwarded(classification=classify(ctx))

        resource_pattern, policy = matched
        classification = classify(ctx)

        if classification is Classification.PREFLIGHT:
            response = build_preflight_response(ctx, policy)
            return response.model_copy(update={"pattern": resource_pattern.template})

        if classification is Classification.SIMPLE:
            headers = build_simple_headers(ctx, policy)
            return Forwarded(
                classification=classification,
                headers=headers or {},
                pattern=resource_pattern.template,
            )

        return Forwarded(classification=classification, pattern=resource_pattern.template)
