"""API route handlers."""

from api.routes import health, ranges, snapshots, receipts, admin

__all__ = ["health", "ranges", "snapshots", "receipts", "admin"]
