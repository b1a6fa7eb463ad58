"""FastAPI application serving pool snapshots and quotes.

The API is read-only: it never builds or submits transactions.
"""

import os

import uvicorn
from fastapi import FastAPI

from poolquote.api.endpoints import router
from poolquote.log_config import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("POOLQUOTE_HOST", "127.0.0.1")
PORT = int(os.environ.get("POOLQUOTE_PORT", "8000"))
DEBUG = os.environ.get("POOLQUOTE_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("POOLQUOTE_LOG_LEVEL", "INFO")

app = FastAPI(
    title="poolquote",
    description="Pool snapshots and swap quotes from an on-chain AMM registry",
    version="0.1.0",
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - POOLQUOTE_HOST: Host to bind to (default: 127.0.0.1)
    - POOLQUOTE_PORT: Port to bind to (default: 8000)
    - POOLQUOTE_DEBUG: Enable debug/reload mode (default: false)
    - POOLQUOTE_LOG_LEVEL: Log level (default: INFO)
    """
    configure_logging(LOG_LEVEL)
    uvicorn.run(
        "poolquote.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
