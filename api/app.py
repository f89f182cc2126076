"""
Module 10 - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import _load_runtime_config, build_service
from api.errors import (
    APIError,
    anchor_error_handler,
    api_error_handler,
    generic_error_handler,
)
from api.routes import admin, health, ranges, receipts, snapshots
from core.schemas.errors import AnchorException
from core.service import ReceiptAnchorService


def _resolve_log_level() -> int:
    """Resolve log level from ANCHOR_LOG_LEVEL or the config file, defaulting to INFO."""
    raw = os.getenv("ANCHOR_LOG_LEVEL")
    if raw is None:
        raw = _load_runtime_config().log_level
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app(service: Optional[ReceiptAnchorService] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        service: Anchor service to expose; built from config when omitted
    """

    app = FastAPI(
        title="Receipt Anchor API",
        description="""
HTTP API for Merkle commitments over an append-only receipt ledger.

## Endpoints

- **GET /ranges/{start}/{end}** - Ad-hoc tree over a receipt range (plus `/root`, `/proof/{id}`)
- **GET /snapshots/{tree_index}** - Committed snapshot (plus `/root`)
- **GET /snapshots/by-total/{n}** - Live batch holding the n-th receipt
- **GET /receipts/{receipt_id}/proof** - Proof against the committed snapshot
- **POST /snapshots/commit** - Commit pending receipts (operator)
- **GET/PUT /capacity** - Batch capacity (PUT is operator-only)
- **GET /health** - Health check

Operator calls identify the caller with the `X-Operator` header.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.service = service if service is not None else build_service()

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
    app.add_exception_handler(AnchorException, anchor_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(admin.router)
    app.include_router(ranges.router)
    app.include_router(snapshots.router)
    app.include_router(receipts.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
