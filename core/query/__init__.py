"""
Query Module

Read-only range and snapshot queries.
"""

from .router import QueryRouter

__all__ = [
    "QueryRouter",
]
