"""
Module 10 - API Dependencies

Dependency injection for the API. The service instance lives on
``app.state.service``; routes receive it through ``get_service``.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import Header, Request

from api.errors import ServiceUnavailableError
from core.config.runtime import RuntimeConfig, load_runtime_config
from core.service import ReceiptAnchorService

logger = logging.getLogger(__name__)


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from ANCHOR_CONFIG or the default search paths.

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    return load_runtime_config(os.getenv("ANCHOR_CONFIG"))


def build_service(config: RuntimeConfig | None = None) -> ReceiptAnchorService:
    """Create the service from config (loaded from disk/env when omitted)."""
    if config is None:
        config = _load_runtime_config()
    return ReceiptAnchorService.from_config(config)


def get_service(request: Request) -> ReceiptAnchorService:
    """FastAPI dependency returning the app's anchor service."""
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise ServiceUnavailableError()
    return service


def get_caller(x_operator: Optional[str] = Header(default=None)) -> str:
    """Caller identity from the X-Operator header; empty when absent."""
    return x_operator or ""
