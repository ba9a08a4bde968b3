"""Domain exceptions."""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base exception for all domain errors."""

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(DomainError):
    """CORS resource or default options are invalid.

    Raised at registration/startup, never while serving requests.
    """

    code = "CONFIGURATION_ERROR"
