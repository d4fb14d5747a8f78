"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import get_reserve_service
from api.routes import health, merkle
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    reserve_error_handler,
)
from core.reserve.service import ProofOfReserveService
from core.schemas.errors import ReserveException


# Log level from POR_LOG_LEVEL, else por.json, else INFO
def _resolve_log_level() -> int:
    """Resolve log level from env var or por.json, defaulting to INFO."""
    raw = os.getenv("POR_LOG_LEVEL")
    if raw is None:
        cfg_path = Path.cwd() / "por.json"
        if cfg_path.exists():
            try:
                with open(cfg_path) as f:
                    raw = json.load(f).get("log_level")
            except (OSError, ValueError, AttributeError):
                raw = None
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app(service: Optional[ProofOfReserveService] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        service: Serve this ProofOfReserveService instead of the one
            built from runtime configuration on first request
    """

    app = FastAPI(
        title="Proof of Reserve API",
        description="""
HTTP API exposing a tagged-hash Merkle commitment over customer balances.

## Endpoints

- **GET /api/merkle/root** - Current Merkle root (null when empty)
- **GET /api/merkle/proof/{user_id}** - Inclusion proof for an account
- **GET /api/merkle/users** - All committed accounts
- **POST /api/merkle/verify** - Check a proof against a root
- **GET /health** - Health check

## Proof Directions

Each proof element carries a sibling hash and a direction:
- `0` - sibling is on the left: `H(sibling || current)`
- `1` - sibling is on the right: `H(current || sibling)`
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(ReserveException, reserve_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(merkle.router)

    if service is not None:
        app.dependency_overrides[get_reserve_service] = lambda: service

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    from core.config.runtime import load_runtime_config

    server = load_runtime_config().server
    uvicorn.run(app, host=server.host, port=server.port)
