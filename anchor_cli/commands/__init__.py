"""
CLI command modules.
"""

from anchor_cli.commands import operator, query, verify

__all__ = ["operator", "query", "verify"]
