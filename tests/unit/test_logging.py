"""Tests for logging setup and log events."""

from unittest.mock import patch

import structlog

from corsroute.core.logging import setup_logging
from corsroute.services.resolver import resolve
from corsroute.services.responses import build_simple_headers
from corsroute.services.router import ResourceRouter


def test_setup_logging_configures_structlog():
    """setup_logging installs a filtering logger and renderer."""
    setup_logging(level="warning", fmt="json")

    config = structlog.get_config()
    assert isinstance(config["processors"][-1], structlog.processors.JSONRenderer)

    setup_logging(level="DEBUG", fmt="console")

    config = structlog.get_config()
    assert isinstance(config["processors"][-1], structlog.dev.ConsoleRenderer)


def test_registration_is_logged():
    """Each registered resource emits cors_resource_registered."""
    with patch("corsroute.services.router.logger") as mock_logger:
        ResourceRouter().resource("/api/*", origins=["http://foo.com"])

    mock_logger.info.assert_called_once_with(
        "cors_resource_registered",
        pattern="/api/*",
        origin_policy="exact",
        allow_credentials=False,
    )


def test_rejected_origin_is_logged_at_debug(make_ctx):
    """Origin rejections are debug events, not errors."""
    policy = resolve({"origins": ["http://foo.com"]})

    with patch("corsroute.services.responses.logger") as mock_logger:
        build_simple_headers(make_ctx("GET", Origin="http://bar.com"), policy)

    mock_logger.debug.assert_called_once_with(
        "cors_origin_rejected", origin="http://bar.com", method="GET"
    )
    mock_logger.error.assert_not_called()
