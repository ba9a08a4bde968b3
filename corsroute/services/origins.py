"""Origin matching against a resolved origin policy."""

from __future__ import annotations

from structlog import get_logger

from corsroute.models.policy import (
    AnyOrigin,
    ExactOrigins,
    OriginPolicy,
    PredicateOrigins,
    is_well_formed_origin,
)

logger = get_logger()


def origin_allowed(origin_policy: OriginPolicy, origin: str | None) -> bool:
    """
    Decide whether a request origin is allowed.

    Fails closed: a missing or malformed origin never matches, and a
    predicate that raises is logged and counted as a non-match.

    Args:
        origin_policy: Resolved origin policy
        origin: Value of the request's Origin header

    Returns:
        True if the origin may be granted access
    """
    if origin is None or not is_well_formed_origin(origin):
        return False

    if isinstance(origin_policy, AnyOrigin):
        return True

    if isinstance(origin_policy, ExactOrigins):
        return origin in origin_policy.origins

    if isinstance(origin_policy, PredicateOrigins):
        if origin_policy.pattern is not None:
            return origin_policy.pattern.fullmatch(origin) is not None
        if origin_policy.predicate is not None:
            try:
                return bool(origin_policy.predicate(origin))
            except Exception:
                logger.exception("origin_predicate_failed", origin=origin)
                return False

    return False
