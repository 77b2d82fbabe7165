"""
Domain package for the transaction query engine.

Exports the transaction record model shared by the engine, loader and reporter.
Keep this package focused on data definitions.
"""

from txn_queries.domain.models import Transaction

__all__ = [
    "Transaction",
]
