"""Pytest configuration for tests."""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env.test file if it exists
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path)

# Set test environment variables before any imports (only if not already set)
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("LOG_FORMAT", "console")
os.environ.setdefault("CORS_ORIGINS", "http://foo.com,http://bar.com")
os.environ.setdefault("CORS_ALLOW_CREDENTIALS", "true")
os.environ.setdefault("CORS_MAX_AGE", "600")


@pytest.fixture
def defaults():
    """Process-wide defaults used by router tests."""
    from corsroute.models.policy import CORSOptions

    return CORSOptions(
        origins=["http://foo.com", "http://bar.com"],
        allow_credentials=True,
        max_age=600,
    )


@pytest.fixture
def make_ctx():
    """Factory for RequestContext from keyword headers."""
    from corsroute.models.request import RequestContext

    def _make(method: str = "GET", **headers: str) -> RequestContext:
        return RequestContext.from_headers(
            method, {name.replace("_", "-"): value for name, value in headers.items()}
        )

    return _make


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast)")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (medium speed)"
    )
