"""FastAPI application for the CLMM router.

Note: Rate limiting is not implemented at the application level; it belongs
to the reverse proxy / load balancer in front of the service.
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from clmm_router import __version__
from clmm_router.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("CLMM_ROUTER_HOST", "0.0.0.0")
PORT = int(os.environ.get("CLMM_ROUTER_PORT", "8000"))
DEBUG = os.environ.get("CLMM_ROUTER_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (default 10 MB)
MAX_REQUEST_SIZE = int(os.environ.get("CLMM_ROUTER_MAX_REQUEST_SIZE", str(10 * 1024 * 1024)))


def configure_logging(debug: bool = DEBUG) -> None:
    """Configure structlog for the server process."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
    )


configure_logging()

app = FastAPI(
    title="CLMM Router",
    description="Routes swaps across concentrated-liquidity pools",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - CLMM_ROUTER_HOST: Host to bind to (default: 0.0.0.0)
    - CLMM_ROUTER_PORT: Port to bind to (default: 8000)
    - CLMM_ROUTER_DEBUG: Enable debug logging and reload (default: false)
    - CLMM_ROUTER_MAX_REQUEST_SIZE: Maximum body size in bytes (default: 10 MB)
    """
    uvicorn.run(
        "clmm_router.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
