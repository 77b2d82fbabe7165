"""
Loading of transaction records from JSON exports.

The export is a JSON array of objects keyed by the camelCase field names of
`Transaction` (`mtn`, `amount`, `senderFullName`, ...).
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter, ValidationError

from txn_queries.domain.models import Transaction
from txn_queries.utils.logging import get_logger

log = get_logger(__name__)

_TRANSACTIONS = TypeAdapter(List[Transaction])


class TransactionLoadError(Exception):
    """Raised when a transactions export cannot be read or validated."""


def parse_transactions(payload: Union[str, bytes], source: str = "<payload>") -> List[Transaction]:
    """
    Validate a JSON array into transaction records.

    Raises
    ------
    TransactionLoadError
        If the payload is not valid JSON or a record does not match the schema.
    """
    try:
        transactions = _TRANSACTIONS.validate_json(payload)
    except ValidationError as exc:
        raise TransactionLoadError(
            f"Invalid transactions data in {source}: {exc.error_count()} error(s)\n{exc}"
        ) from exc
    return transactions


def load_transactions(path: Path | str) -> List[Transaction]:
    """Read and validate the transactions export at `path`."""
    file_path = Path(path)
    try:
        payload = file_path.read_bytes()
    except OSError as exc:
        raise TransactionLoadError(f"Cannot read transactions file {file_path}: {exc}") from exc

    transactions = parse_transactions(payload, source=str(file_path))
    log.info(
        "Transactions loaded",
        extra={"path": str(file_path), "rows": len(transactions)},
    )
    return transactions


__all__ = ["TransactionLoadError", "load_transactions", "parse_transactions"]
