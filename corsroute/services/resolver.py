"""Merge declared resource options with defaults into a canonical policy."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from corsroute.core.errors import ConfigurationError
from corsroute.models.policy import (
    WILDCARD,
    AnyOrigin,
    CORSOptions,
    ExactOrigins,
    OriginPolicy,
    PredicateOrigins,
    ResourcePolicy,
)


def load_options(options: CORSOptions | Mapping[str, Any]) -> CORSOptions:
    """
    Validate raw options.

    Raises:
        ConfigurationError: On unknown keys or malformed values
    """
    if isinstance(options, CORSOptions):
        return options
    try:
        return CORSOptions.model_validate(dict(options))
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid CORS options",
            context={
                "options": sorted(options),
                "errors": e.errors(include_url=False, include_context=False, include_input=False),
            },
        ) from e


def merge_options(declared: CORSOptions, defaults: CORSOptions) -> CORSOptions:
    """Overlay fields explicitly set in declared onto defaults."""
    merged = {
        name: getattr(declared if name in declared.model_fields_set else defaults, name)
        for name in CORSOptions.model_fields
    }
    return CORSOptions.model_validate(merged)


def build_origin_policy(origins: Any) -> OriginPolicy:
    if origins == WILDCARD:
        return AnyOrigin()
    if isinstance(origins, re.Pattern):
        return PredicateOrigins(pattern=origins)
    if callable(origins):
        return PredicateOrigins(predicate=origins)
    return ExactOrigins(origins=frozenset(origins))


def resolve(
    declared: CORSOptions | Mapping[str, Any], defaults: CORSOptions | None = None
) -> ResourcePolicy:
    """
    Resolve a resource's declared options into a ResourcePolicy.

    Each option set in declared overrides the default; the rest are inherited.

    Args:
        declared: Options given at registration
        defaults: Process-wide defaults, built-in defaults if omitted

    Returns:
        Immutable, fully merged policy

    Raises:
        ConfigurationError: On unknown keys or malformed values
    """
    options = merge_options(load_options(declared), defaults or CORSOptions())

    def _tuple_or_wildcard(values: list[str] | str) -> tuple[str, ...] | str:
        return WILDCARD if values == WILDCARD else tuple(values)

    return ResourcePolicy(
        origin_policy=build_origin_policy(options.origins),
        allow_credentials=options.allow_credentials,
        allowed_methods=_tuple_or_wildcard(options.allow_methods),
        allowed_headers=_tuple_or_wildcard(options.allow_headers),
        exposed_headers=tuple(options.expose_headers),
        max_age=options.max_age,
        allow_private_network=options.allow_private_network,
    )
