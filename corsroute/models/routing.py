"""Resource patterns and router outcomes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from corsroute.core.errors import ConfigurationError
from corsroute.models.request import Classification


def _split_path(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


class ResourcePattern(BaseModel):
    """
    Path template a CORS policy applies to.

    Supported forms:
    - "/exact/path" matches only that path
    - "/users/:id" where ":name" matches any single segment
    - "/public/*" (or "/public/*rest") matches "/public" and anything below it

    Empty segments are ignored, so "/a//b/" matches "/a/b".
    """

    model_config = ConfigDict(frozen=True)

    template: str
    segments: tuple[str, ...]
    wildcard: bool = False

    @classmethod
    def parse(cls, template: str) -> ResourcePattern:
        """
        Parse a path template.

        Raises:
            ConfigurationError: If the template is not absolute or misplaces "*"
        """
        if not isinstance(template, str) or not template.startswith("/"):
            raise ConfigurationError(
                "Resource pattern must be an absolute path", context={"pattern": template}
            )

        segments = _split_path(template)
        wildcard = bool(segments) and segments[-1].startswith("*")
        if wildcard:
            segments = segments[:-1]

        for segment in segments:
            if "*" in segment:
                raise ConfigurationError(
                    "Wildcard is only allowed as the final segment",
                    context={"pattern": template},
                )
            if segment == ":":
                raise ConfigurationError(
                    "Path parameter needs a name", context={"pattern": template}
                )

        return cls(template=template, segments=tuple(segments), wildcard=wildcard)

    def matches(self, path: str) -> bool:
        parts = _split_path(path)
        if self.wildcard:
            if len(parts) < len(self.segments):
                return False
        elif len(parts) != len(self.segments):
            return False

        return all(
            segment.startswith(":") or segment == part
            for segment, part in zip(self.segments, parts, strict=False)
        )

    def __str__(self) -> str:
        return self.template


class Forwarded(BaseModel):
    """Request continues down the pipeline; headers go on its response."""

    model_config = ConfigDict(frozen=True)

    classification: Classification
    headers: dict[str, str] = Field(default_factory=dict)
    pattern: str | None = None


class Terminal(BaseModel):
    """Complete response sent in place of the pipeline (preflight)."""

    model_config = ConfigDict(frozen=True)

    status_code: int = 200
    headers: dict[str, str] = Field(default_factory=dict)
    pattern: str | None = None
    classification: Classification = Classification.PREFLIGHT


RouterOutcome = Forwarded | Terminal
