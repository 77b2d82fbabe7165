"""
Utilities package for the transaction query engine.

Exports shared cross-cutting helpers. Keep this package free of domain logic.
"""

from txn_queries.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_logger",
]
