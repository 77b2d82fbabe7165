"""
Pytest configuration for the transaction query engine.

Provides fixtures for:
- The sample transactions export and the engine built from it
- A factory for hand-crafted transactions
- Settings isolation between tests
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterator, List

import pytest

from txn_queries.config import get_settings
from txn_queries.domain.models import Transaction
from txn_queries.engine import TransactionQueryEngine
from txn_queries.loader import load_transactions

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def transactions_path() -> Path:
    """
    Path to the sample export.

    Thirteen records; mtn 1284564 and 32612651 each appear twice.
    """
    return FIXTURES_DIR / "transactions.json"


@pytest.fixture(scope="session")
def transactions(transactions_path: Path) -> List[Transaction]:
    return load_transactions(transactions_path)


@pytest.fixture(scope="session")
def engine(transactions: List[Transaction]) -> TransactionQueryEngine:
    return TransactionQueryEngine(transactions)


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """
    Factory for transactions with sensible defaults; override any field by name.
    """

    def _make(id: str = "1", amount: float = 100.0, **overrides: Any) -> Transaction:
        fields: dict[str, Any] = {
            "id": id,
            "amount": amount,
            "sender_name": "X",
            "sender_age": 30,
            "beneficiary_name": "Z",
            "beneficiary_age": 40,
            "issue_id": 1,
            "issue_solved": False,
            "issue_message": "open",
        }
        fields.update(overrides)
        return Transaction(**fields)

    return _make


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
