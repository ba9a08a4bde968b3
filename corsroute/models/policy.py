"""Pydantic models for declared CORS options and resolved policies."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

WILDCARD = "*"
DEFAULT_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE")

# scheme://host[:port], host may be a bracketed IPv6 literal
ORIGIN_RE = re.compile(
    r"^[A-Za-z][A-Za-z0-9+.\-]*://"
    r"(?:[A-Za-z0-9\-._~%!$&'()+,;=]+|\[[0-9A-Fa-f:.]+\])"
    r"(?::[0-9]{1,5})?$"
)
OPAQUE_ORIGIN = "null"


def is_well_formed_origin(origin: str | None) -> bool:
    """Return True for a serialized origin or the opaque "null" origin."""
    if not origin:
        return False
    return origin == OPAQUE_ORIGIN or ORIGIN_RE.match(origin) is not None


def _clean_names(values: list[str], field: str) -> list[str]:
    names = []
    for value in values:
        name = value.strip()
        if not name or any(c.isspace() or c == "," for c in name):
            raise ValueError(f"{field} contains an invalid name: {value!r}")
        names.append(name)
    return names


# ============================================
# Declared options (registration input)
# ============================================


class CORSOptions(BaseModel):
    """
    Options declared for a resource, or process-wide defaults.

    Unknown keys are rejected so typos fail at startup.
    Only fields explicitly set (model_fields_set) override defaults
    when merged by the resolver.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    origins: Any = WILDCARD
    allow_credentials: bool = False
    allow_methods: list[str] | Literal["*"] = Field(default_factory=lambda: list(DEFAULT_METHODS))
    allow_headers: list[str] | Literal["*"] = Field(default_factory=list)
    expose_headers: list[str] = Field(default_factory=list)
    max_age: int | None = Field(default=None, ge=0)
    allow_private_network: bool = False

    @field_validator("origins")
    @classmethod
    def validate_origins(cls, v: Any) -> Any:
        """Accept "*", an origin, a list of origins, a compiled regex or a callable."""
        if isinstance(v, re.Pattern):
            return v
        if isinstance(v, str):
            if v == WILDCARD:
                return v
            v = [v]
        elif callable(v):
            return v

        if not isinstance(v, list | tuple | set | frozenset):
            raise ValueError(
                "origins must be '*', an origin string, a list of origins, "
                f"a compiled regex or a callable, got {type(v).__name__}"
            )

        origins = list(v)
        for origin in origins:
            if origin == WILDCARD:
                raise ValueError("'*' cannot be combined with other origins")
            if not isinstance(origin, str) or not is_well_formed_origin(origin):
                raise ValueError(f"malformed origin: {origin!r} (expected scheme://host[:port])")
        return origins

    @field_validator("allow_methods")
    @classmethod
    def normalize_methods(cls, v: list[str] | str) -> list[str] | str:
        """Uppercase declared HTTP verbs."""
        if v == WILDCARD:
            return v
        return [m.upper() for m in _clean_names(list(v), "allow_methods")]

    @field_validator("allow_headers", "expose_headers")
    @classmethod
    def clean_header_names(cls, v: list[str] | str, info: ValidationInfo) -> list[str] | str:
        """Strip header names; casing is kept for output."""
        if v == WILDCARD:
            return v
        return _clean_names(list(v), info.field_name)


# ============================================
# Resolved policy
# ============================================


class AnyOrigin(BaseModel):
    """Every well-formed origin is allowed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["any"] = "any"


class ExactOrigins(BaseModel):
    """Origins allowed by exact, case-sensitive comparison."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["exact"] = "exact"
    origins: frozenset[str]


class PredicateOrigins(BaseModel):
    """Origins allowed by a regex (full match) or a callable."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["predicate"] = "predicate"
    pattern: re.Pattern[str] | None = None
    predicate: Callable[[str], bool] | None = None


OriginPolicy = Annotated[AnyOrigin | ExactOrigins | PredicateOrigins, Field(discriminator="kind")]


class ResourcePolicy(BaseModel):
    """Canonical, fully merged CORS policy for one resource pattern."""

    model_config = ConfigDict(frozen=True)

    origin_policy: OriginPolicy
    allow_credentials: bool = False
    allowed_methods: tuple[str, ...] | Literal["*"] = ()
    allowed_headers: tuple[str, ...] | Literal["*"] = ()
    exposed_headers: tuple[str, ...] = ()
    max_age: int | None = None
    allow_private_network: bool = False

    @property
    def any_origin(self) -> bool:
        return isinstance(self.origin_policy, AnyOrigin)

    def allows_method(self, method: str) -> bool:
        if self.allowed_methods == WILDCARD:
            return True
        return method.upper() in self.allowed_methods

    def allows_headers(self, names: Iterable[str]) -> bool:
        """Check every name against the allow-list, case-insensitively."""
        if self.allowed_headers == WILDCARD:
            return True
        allowed = {h.lower() for h in self.allowed_headers}
        return all(name.lower() in allowed for name in names)
