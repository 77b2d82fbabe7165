"""
Query engine over an in-memory collection of transactions.

The engine wraps an immutable tuple of records and answers a fixed set of
analytical queries. Every query is a pure read of that tuple.

Two deduplication policies coexist:

- Financial totals (`total_amount`, `total_amount_sent_by`) count each transaction
  id once, keeping the first record seen for that id.
- Every other query (`max_amount`, `top_by_amount`, `top_sender`, issue lookups,
  client counts, beneficiary index) works over the raw record sequence, so
  duplicate-id records each take part.

Usage:
    from txn_queries.engine import TransactionQueryEngine

    engine = TransactionQueryEngine.from_json("transactions.json")
    engine.total_amount()
    engine.top_sender()
"""

from __future__ import annotations

import math
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from txn_queries.domain.models import Transaction
from txn_queries.loader import load_transactions
from txn_queries.utils.logging import get_logger

log = get_logger(__name__)

TOP_TRANSACTIONS = 3


def _require_name(name: object, param: str) -> str:
    if name is None or not isinstance(name, str):
        raise ValueError(f"'{param}' must be a client name string, got {name!r}")
    return name


def _unique_by_id(transactions: Iterable[Transaction]) -> Iterator[Transaction]:
    """Yield the first record for each transaction id, in sequence order."""
    seen: Set[str] = set()
    for transaction in transactions:
        if transaction.id in seen:
            continue
        seen.add(transaction.id)
        yield transaction


class TransactionQueryEngine:
    """
    Read-only analytical queries over a fixed sequence of transactions.
    """

    __slots__ = ("_transactions",)

    def __init__(self, transactions: Iterable[Transaction]) -> None:
        self._transactions: Tuple[Transaction, ...] = tuple(transactions)
        log.debug(
            "Query engine initialised",
            extra={"transactions": len(self._transactions)},
        )

    @classmethod
    def from_json(cls, path: Path | str) -> "TransactionQueryEngine":
        """Build an engine from a JSON export on disk."""
        return cls(load_transactions(path))

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    def __len__(self) -> int:
        return len(self._transactions)

    def __repr__(self) -> str:
        return f"TransactionQueryEngine(transactions={len(self._transactions)})"

    # Financial totals: deduplicated by transaction id.

    def total_amount(self) -> float:
        """
        Sum of amounts over unique transactions.

        Records sharing an id are counted once; the first one in sequence order is
        the representative. Returns 0.0 when there are no transactions.
        """
        return math.fsum(t.amount for t in _unique_by_id(self._transactions))

    def total_amount_sent_by(self, sender_name: str) -> float:
        """
        Sum of amounts over unique transactions sent by `sender_name`.

        The id filter is applied after the sender filter, over a single seen-set for
        the whole stream. Raises ValueError when `sender_name` is None.
        """
        name = _require_name(sender_name, "sender_name")
        sent = (t for t in self._transactions if t.sender_name == name)
        return math.fsum(t.amount for t in _unique_by_id(sent))

    # Raw-sequence queries: duplicates included.

    def max_amount(self) -> float:
        """Highest amount across all records, or 0.0 when there are none."""
        return max((t.amount for t in self._transactions), default=0.0)

    def count_unique_clients(self) -> int:
        """Number of distinct names seen as sender or beneficiary."""
        names: Set[str] = set()
        for transaction in self._transactions:
            names.add(transaction.sender_name)
            names.add(transaction.beneficiary_name)
        return len(names)

    def has_open_compliance_issue(self, client_name: str) -> bool:
        """
        Whether `client_name` is party to at least one transaction whose compliance
        issue is not solved.
        """
        name = _require_name(client_name, "client_name")
        return any(
            not t.issue_solved and name in (t.sender_name, t.beneficiary_name)
            for t in self._transactions
        )

    def transactions_by_beneficiary(self) -> Dict[str, Transaction]:
        """
        Index transactions by beneficiary name.

        When several records share a beneficiary, the first one in sequence order is
        kept and later ones are ignored.
        """
        index: Dict[str, Transaction] = {}
        for transaction in self._transactions:
            if transaction.beneficiary_name not in index:
                index[transaction.beneficiary_name] = transaction
        return index

    def unsolved_issue_ids(self) -> Set[int]:
        """Distinct issue ids of transactions whose issue is still open."""
        return {t.issue_id for t in self._transactions if not t.issue_solved}

    def solved_issue_messages(self) -> List[Optional[str]]:
        """Issue messages of solved transactions, in order, repeats included."""
        return [t.issue_message for t in self._transactions if t.issue_solved]

    def top_by_amount(self, limit: int) -> List[Transaction]:
        """
        The `limit` records with the largest amounts, sorted descending.

        Sorting is stable: records with equal amounts keep their original relative
        order. Duplicate-id records are ranked individually.
        """
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        ranked = sorted(self._transactions, key=lambda t: t.amount, reverse=True)
        return ranked[:limit]

    def top3_by_amount(self) -> List[Transaction]:
        """The three largest transactions by amount (fewer if fewer exist)."""
        return self.top_by_amount(TOP_TRANSACTIONS)

    def top_sender(self) -> Optional[str]:
        """
        Sender with the largest total amount sent, or None when there are no records.

        Totals are summed over raw records, so a duplicated transaction adds to its
        sender twice. On a tie the sender seen first in the sequence wins.
        """
        totals: Dict[str, float] = defaultdict(float)
        for transaction in self._transactions:
            totals[transaction.sender_name] += transaction.amount
        if not totals:
            return None
        return max(totals, key=totals.__getitem__)


__all__ = ["TransactionQueryEngine", "TOP_TRANSACTIONS"]
