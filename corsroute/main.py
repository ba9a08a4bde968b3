"""FastAPI application entry point."""

from typing import Any

from fastapi import FastAPI, Request

from corsroute.core.config import settings
from corsroute.core.logging import logger, setup_logging
from corsroute.middleware.cors import setup_cors
from corsroute.services.router import ResourceRouter

# Configure logging
setup_logging()


def build_router() -> ResourceRouter:
    """
    Build the CORS resource table.

    /public/* is open to any origin without credentials; everything else
    follows the environment defaults.
    """
    router = ResourceRouter(defaults=settings.cors_defaults)
    router.resource("/public/*", origins="*", allow_credentials=False)
    router.resource("/*")
    return router


app = FastAPI(
    title="corsroute",
    description="Per-resource CORS policies",
    version="1.0.0",
)

setup_cors(app, build_router())
logger.info("application_ready", log_level=settings.log_level)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/public/{name}")
async def public_resource(name: str) -> dict[str, str]:
    """Publicly shared resource."""
    return {"name": name}


@app.get("/api/items")
async def list_items(request: Request) -> dict[str, Any]:
    """List items, echoing how the request was classified."""
    return {
        "items": [],
        "cors": str(getattr(request.state, "cors_classification", "")),
    }
