"""
Registry and runner for the named engine queries.

Each registered query maps a stable name to an engine call. The runner executes a
selection of them, times each one, records failures instead of aborting, and can
persist the results as JSON.

Usage (example from CLI):
    from txn_queries.queries import run_queries

    results = run_queries(engine, ["total_amount", "top_sender"])

Persisted outputs go to `results/` by default:
- `results/latest.json` (last run)
- `results/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, TypedDict

from txn_queries.domain.models import Transaction
from txn_queries.engine import TransactionQueryEngine
from txn_queries.utils.logging import get_logger

log = get_logger(__name__)


class QueryResult(TypedDict, total=False):
    """
    Outcome of a single named query.

    `value` is absent when the query failed; `error` is set instead.
    """

    query: str
    description: str
    value: Any
    duration_seconds: float
    error: Optional[str]


@dataclass(frozen=True)
class QueryDefinition:
    name: str
    description: str
    run: Callable[[TransactionQueryEngine, Optional[str]], Any]
    needs_client: bool = False


def _query_definitions() -> Dict[str, QueryDefinition]:
    """Registry of available queries."""
    definitions = [
        QueryDefinition(
            "total_amount",
            "Sum of amounts over unique transactions",
            lambda engine, _: engine.total_amount(),
        ),
        QueryDefinition(
            "total_amount_sent_by",
            "Sum of unique transactions sent by the client",
            lambda engine, client: engine.total_amount_sent_by(client),
            needs_client=True,
        ),
        QueryDefinition(
            "max_amount",
            "Highest transaction amount",
            lambda engine, _: engine.max_amount(),
        ),
        QueryDefinition(
            "count_unique_clients",
            "Distinct senders and beneficiaries",
            lambda engine, _: engine.count_unique_clients(),
        ),
        QueryDefinition(
            "has_open_compliance_issue",
            "Whether the client has an unsolved compliance issue",
            lambda engine, client: engine.has_open_compliance_issue(client),
            needs_client=True,
        ),
        QueryDefinition(
            "transactions_by_beneficiary",
            "First transaction per beneficiary name",
            lambda engine, _: engine.transactions_by_beneficiary(),
        ),
        QueryDefinition(
            "unsolved_issue_ids",
            "Identifiers of open compliance issues",
            lambda engine, _: engine.unsolved_issue_ids(),
        ),
        QueryDefinition(
            "solved_issue_messages",
            "Messages of solved compliance issues",
            lambda engine, _: engine.solved_issue_messages(),
        ),
        QueryDefinition(
            "top3_by_amount",
            "Three largest transactions by amount",
            lambda engine, _: engine.top3_by_amount(),
        ),
        QueryDefinition(
            "top_sender",
            "Sender with the highest total sent amount",
            lambda engine, _: engine.top_sender(),
        ),
    ]
    return {definition.name: definition for definition in definitions}


def available_queries() -> List[str]:
    """List available query names."""
    return sorted(_query_definitions().keys())


def describe_queries() -> Dict[str, str]:
    """Map query names to their descriptions, in registry order."""
    return {
        name: f"{d.description} (needs client)" if d.needs_client else d.description
        for name, d in _query_definitions().items()
    }


def _resolve_query(name: str) -> QueryDefinition:
    definitions = _query_definitions()
    if name not in definitions:
        raise ValueError(f"Unknown query '{name}'. Available: {', '.join(definitions)}")
    return definitions[name]


def to_jsonable(value: Any) -> Any:
    """Convert a query value into plain JSON types."""
    if isinstance(value, Transaction):
        return value.model_dump(by_alias=True)
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(to_jsonable(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def results_to_jsonable(results: Iterable[QueryResult]) -> List[dict]:
    """JSON-ready copies of `results`, with values converted by `to_jsonable`."""
    return [
        {**r, "value": to_jsonable(r["value"])} if "value" in r else dict(r) for r in results
    ]


def _persist_results(payload: dict, results_dir: Path) -> Path:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})
    return latest_path


def _timed_execute(
    definition: QueryDefinition,
    engine: TransactionQueryEngine,
    client_name: Optional[str],
) -> QueryResult:
    log.debug(f"[QUERY START] {definition.name}", extra={"query": definition.name})
    result = QueryResult(query=definition.name, description=definition.description)
    start = time.perf_counter()
    try:
        result["value"] = definition.run(engine, client_name)
    except Exception as exc:  # noqa: BLE001 - one failing query must not abort the run
        log.exception(f"[QUERY FAILED] {definition.name}", extra={"query": definition.name})
        result["error"] = str(exc)
    result["duration_seconds"] = time.perf_counter() - start
    if "error" not in result:
        log.debug(
            f"[QUERY SUCCESS] {definition.name}",
            extra={"query": definition.name, "duration_seconds": result["duration_seconds"]},
        )
    return result


def run_queries(
    engine: TransactionQueryEngine,
    query_names: Optional[Iterable[str]] = None,
    client_name: Optional[str] = None,
    results_dir: Path | str = "results",
    persist: bool = False,
) -> List[QueryResult]:
    """
    Run one or more named queries against `engine`.

    Parameters
    ----------
    engine : TransactionQueryEngine
        Engine holding the working set of transactions.
    query_names : iterable[str] | None
        Query names to execute. If None or ["all"], executes every registered query
        in registry order.
    client_name : str | None
        Client used by the by-name queries. When None, those queries record an error.
    results_dir : Path | str
        Directory to store JSON artifacts.
    persist : bool
        Whether to write results to disk.

    Returns
    -------
    List[QueryResult]
        One entry per query, in execution order.
    """
    names = list(query_names) if query_names is not None else ["all"]
    if len(names) == 1 and names[0] == "all":
        names = list(_query_definitions())
    definitions = [_resolve_query(name) for name in names]

    log.info(
        "Running queries",
        extra={"queries": names, "transactions": len(engine), "client": client_name},
    )
    results = [_timed_execute(d, engine, client_name) for d in definitions]
    failed = [r["query"] for r in results if r.get("error")]

    if persist:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "client": client_name,
            "transactions": len(engine),
            "results": results_to_jsonable(results),
        }
        _persist_results(payload, Path(results_dir))

    log.info(
        f"[RUN COMPLETE] {len(results) - len(failed)}/{len(results)} queries succeeded",
        extra={"failed": failed},
    )
    return results


__all__ = [
    "QueryDefinition",
    "QueryResult",
    "available_queries",
    "describe_queries",
    "results_to_jsonable",
    "run_queries",
    "to_jsonable",
]
