"""Application configuration."""

import re

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from corsroute.core.errors import ConfigurationError
from corsroute.models.policy import CORSOptions

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Process-wide CORS defaults, merged under every registered resource
    cors_origins: str = "*"
    cors_origin_regex: str | None = None
    cors_allow_credentials: bool = False
    cors_allow_methods: str = "GET,HEAD,POST,PUT,PATCH,DELETE"
    cors_allow_headers: str = ""
    cors_expose_headers: str = ""
    cors_max_age: int | None = None
    cors_allow_private_network: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard level name."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(LOG_LEVELS)}, got {v!r}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log renderer name."""
        fmt = v.strip().lower()
        if fmt not in ("json", "console"):
            raise ValueError(f"LOG_FORMAT must be 'json' or 'console', got {v!r}")
        return fmt

    @property
    def cors_defaults(self) -> CORSOptions:
        """
        Build the default CORS options from environment values.

        CORS_ORIGIN_REGEX takes precedence over CORS_ORIGINS when set.
        CORS_ALLOW_METHODS and CORS_ALLOW_HEADERS accept "*".

        Raises:
            ConfigurationError: If any value is malformed
        """
        origins: object
        if self.cors_origin_regex:
            try:
                origins = re.compile(self.cors_origin_regex)
            except re.error as e:
                raise ConfigurationError(
                    f"CORS_ORIGIN_REGEX is not a valid regular expression: {e}",
                    context={"pattern": self.cors_origin_regex},
                ) from e
        elif self.cors_origins.strip() == "*":
            origins = "*"
        else:
            origins = _split_csv(self.cors_origins)

        methods = self.cors_allow_methods.strip()
        headers = self.cors_allow_headers.strip()

        try:
            return CORSOptions(
                origins=origins,
                allow_credentials=self.cors_allow_credentials,
                allow_methods="*" if methods == "*" else _split_csv(methods),
                allow_headers="*" if headers == "*" else _split_csv(headers),
                expose_headers=_split_csv(self.cors_expose_headers),
                max_age=self.cors_max_age,
                allow_private_network=self.cors_allow_private_network,
            )
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid CORS defaults in environment",
                context={"errors": e.errors(include_url=False, include_context=False)},
            ) from e


settings = Settings()
