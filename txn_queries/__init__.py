"""
txn-queries - analytical queries over in-memory financial transaction records.

The package answers a fixed set of questions about a transactions export:

- Totals over unique transactions (overall and per sender)
- Maximum amount and top transactions by amount
- Distinct client counts and the top sender
- Compliance-issue lookups (open issues per client, unsolved ids, solved messages)
- First transaction per beneficiary

Records are loaded from JSON, held immutably by `TransactionQueryEngine`, and the
named queries can be run and reported from the `txn-queries` CLI.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from txn_queries.config import Settings, get_settings
from txn_queries.domain.models import Transaction
from txn_queries.engine import TransactionQueryEngine
from txn_queries.loader import TransactionLoadError, load_transactions, parse_transactions
from txn_queries.queries import QueryResult, available_queries, run_queries
from txn_queries.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain and engine
    "Transaction",
    "TransactionQueryEngine",
    # Loading
    "TransactionLoadError",
    "load_transactions",
    "parse_transactions",
    # Query runner
    "QueryResult",
    "available_queries",
    "run_queries",
    # Logging
    "configure_logging",
    "get_logger",
]
