"""
Synthetic transactions generator for the transaction query engine.

Writes a deterministic pseudo-random JSON export in the same shape the loader
reads (camelCase keys, numeric `mtn`), re-emitting a share of records with an
already-used `mtn` so the dedup behaviour of the totals can be exercised.
"""

from __future__ import annotations

import json
import random
import sys
import time
from pathlib import Path
from typing import Any, Dict, List

import typer

app = typer.Typer(help="Generate a synthetic transactions JSON export.")

CLIENTS = [
    "Tom Shelby",
    "Arthur Shelby",
    "Aunt Polly",
    "Grace Burgess",
    "Billy Kimber",
    "Alfie Solomons",
    "Michael Gray",
    "Ada Thorne",
    "Luca Changretta",
    "Aberama Gold",
    "Johnny Dogs",
    "May Carleton",
]
UNSOLVED_MESSAGES = [
    "Looks like money laundering",
    "Something's fishy",
    "Something ain't right",
    "Don't let this transaction happen",
]
SOLVED_MESSAGES = [
    "Never gonna give you up",
    "Never gonna let you down",
    "Never gonna run around and desert you",
    "Never gonna make you cry",
]


def _generate_transactions(rows: int, seed: int, duplicate_rate: float) -> List[Dict[str, Any]]:
    if not 0.0 <= duplicate_rate < 1.0:
        raise ValueError(f"duplicate_rate must be in [0, 1), got {duplicate_rate}")

    rng = random.Random(seed)
    ages = {name: rng.randint(18, 80) for name in CLIENTS}
    records: List[Dict[str, Any]] = []
    next_mtn = 100_000
    next_issue = 1

    for _ in range(rows):
        if records and rng.random() < duplicate_rate:
            # Same mtn and amount, new compliance issue.
            record = dict(rng.choice(records))
        else:
            sender, beneficiary = rng.sample(CLIENTS, 2)
            record = {
                "mtn": next_mtn,
                "amount": round(rng.uniform(1, 1_000), 2),
                "senderFullName": sender,
                "senderAge": ages[sender],
                "beneficiaryFullName": beneficiary,
                "beneficiaryAge": ages[beneficiary],
            }
            next_mtn += rng.randint(1, 9_999)

        solved = rng.random() < 0.6
        if solved and rng.random() < 0.3:
            record.update(issueId=None, issueSolved=True, issueMessage=None)
        else:
            messages = SOLVED_MESSAGES if solved else UNSOLVED_MESSAGES
            record.update(
                issueId=next_issue,
                issueSolved=solved,
                issueMessage=rng.choice(messages),
            )
            next_issue += 1
        records.append(record)

    return records


def _write_json(path: Path, records: List[Dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(records, f, indent=2)


@app.command()
def main(
    rows: int = typer.Option(
        1_000,
        "--rows",
        "-r",
        help="Number of records to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    duplicate_rate: float = typer.Option(
        0.1,
        "--duplicate-rate",
        "-d",
        help="Share of records that repeat an earlier mtn.",
    ),
    output: Path = typer.Option(
        Path("transactions.json"),
        "--output",
        "-o",
        help="JSON output path.",
    ),
) -> None:
    """
    Generate synthetic transactions and write them as a JSON array.
    """
    start = time.perf_counter()
    typer.echo(
        f"Generating {rows:,} transactions -> {output} "
        f"(seed={seed}, duplicate_rate={duplicate_rate})"
    )
    records = _generate_transactions(rows, seed=seed, duplicate_rate=duplicate_rate)
    _write_json(output, records)
    duration = time.perf_counter() - start
    unique = len({r["mtn"] for r in records})
    typer.echo(f"Wrote {len(records):,} records ({unique:,} unique mtn) in {duration:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
