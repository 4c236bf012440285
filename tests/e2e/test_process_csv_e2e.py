from __future__ import annotations

import io
from pathlib import Path

import pytest

from payments_engine.engine import ErrorPolicy, TransactionEngine
from payments_engine.errors import LockedAccountError
from payments_engine.ingest.utils import iter_mutations_from_csv
from payments_engine.present import write_accounts_csv

_DATA = Path(__file__).resolve().parents[1] / "data"


def _run(csv_path: Path, policy: ErrorPolicy) -> tuple[TransactionEngine, str]:
    engine = TransactionEngine(policy=policy)
    on_invalid = engine.record_parse_error if policy is ErrorPolicy.SKIP else None
    engine.process(iter_mutations_from_csv(csv_path, on_invalid=on_invalid))
    buf = io.StringIO()
    write_accounts_csv(engine.accounts(), buf)
    return engine, buf.getvalue()


def _sorted_rows(text: str) -> list[str]:
    # Account order is not part of the output contract.
    header, *rows = text.splitlines()
    return [header, *sorted(rows)]


@pytest.mark.parametrize("policy", list(ErrorPolicy))
def test_clean_input_is_policy_independent(policy):
    _, out = _run(_DATA / "transactions_sample.csv", policy)
    expected = (_DATA / "accounts_sample.csv").read_text(encoding="utf-8")
    assert _sorted_rows(out) == _sorted_rows(expected)


def test_dispute_lifecycle_with_skip_policy():
    engine, out = _run(_DATA / "transactions_disputes.csv", ErrorPolicy.SKIP)

    expected = (_DATA / "accounts_disputes.csv").read_text(encoding="utf-8")
    assert _sorted_rows(out) == _sorted_rows(expected)
    # The second resolve and the final deposit hit the locked account.
    assert [s.tx_id for s in engine.summary.skipped] == [2, 5]
    assert engine.summary.applied == 9


def test_dispute_lifecycle_with_abort_policy_stops_at_locked_account():
    engine = TransactionEngine(policy=ErrorPolicy.ABORT)

    with pytest.raises(LockedAccountError) as excinfo:
        engine.process(iter_mutations_from_csv(_DATA / "transactions_disputes.csv"))

    assert excinfo.value.tx_id == 2
    assert engine.summary.applied == 9
    locked = engine.registry.get(1)
    assert locked is not None and locked.locked
