"""
Module 10 - Minimal API (FastAPI)

HTTP API for the receipt anchor:
- GET /ranges/... - Ad-hoc range trees, roots and proofs
- GET /snapshots/... - Committed snapshots
- GET /receipts/{id}/proof - Proof against the committed snapshot
- POST /snapshots/commit, PUT /capacity - Operator actions
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
