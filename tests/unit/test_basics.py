import json
from pathlib import Path

import pytest

from txn_queries import config
from txn_queries.engine import TransactionQueryEngine
from scripts import generate_data


def test_get_settings_defaults(monkeypatch):
    for var in ("TRANSACTIONS_PATH", "CLIENT_NAME", "RESULTS_DIR", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(var, raising=False)
    settings = config.Settings(_env_file=None)
    assert settings.transactions_path == Path("transactions.json")
    assert settings.client_name is None
    assert settings.results_dir == Path("results")
    assert settings.log_level == "INFO"
    assert settings.log_json is False


def test_get_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("CLIENT_NAME", "Grace Burgess")
    monkeypatch.setenv("LOG_JSON", "true")
    settings = config.get_settings()
    assert settings.client_name == "Grace Burgess"
    assert settings.log_json is True
    assert config.get_settings() is settings


def test_generate_data_writes_json(tmp_path: Path):
    json_path = tmp_path / "transactions.json"
    records = generate_data._generate_transactions(50, seed=123, duplicate_rate=0.3)
    generate_data._write_json(json_path, records)

    loaded = json.loads(json_path.read_text(encoding="utf-8"))
    assert len(loaded) == 50
    assert set(loaded[0]) == {
        "mtn",
        "amount",
        "senderFullName",
        "senderAge",
        "beneficiaryFullName",
        "beneficiaryAge",
        "issueId",
        "issueSolved",
        "issueMessage",
    }
    # Generated exports are loadable and contain duplicate mtn values.
    engine = TransactionQueryEngine.from_json(json_path)
    assert len({t.id for t in engine.transactions}) < len(engine)
    assert engine.total_amount() < sum(t.amount for t in engine.transactions)


def test_generate_data_is_deterministic():
    first = generate_data._generate_transactions(20, seed=7, duplicate_rate=0.2)
    second = generate_data._generate_transactions(20, seed=7, duplicate_rate=0.2)
    assert first == second


def test_generate_data_rejects_bad_duplicate_rate():
    with pytest.raises(ValueError):
        generate_data._generate_transactions(5, seed=1, duplicate_rate=1.0)
