import pytest

from payments_engine.errors import DuplicateTransactionError
from payments_engine.ledger import Ledger
from payments_engine.models import Transaction, TransactionKind, TransactionStatus


def _entry(tx: int, amount: int = 50_000, kind: TransactionKind = TransactionKind.DEPOSIT):
    return Transaction(id=tx, kind=kind, client_id=1, amount=amount)


def test_insert_and_find():
    ledger = Ledger()
    entry = _entry(1)

    ledger.insert(entry)

    assert ledger.find(1) is entry
    assert 1 in ledger
    assert len(ledger) == 1
    assert list(ledger) == [entry]


def test_find_missing_returns_none():
    assert Ledger().find(42) is None
    assert 42 not in Ledger()


def test_find_returns_live_entry_for_status_updates():
    ledger = Ledger()
    ledger.insert(_entry(1))

    ledger.find(1).status = TransactionStatus.DISPUTED

    assert ledger.find(1).status is TransactionStatus.DISPUTED


def test_duplicate_id_is_rejected_and_original_kept():
    ledger = Ledger()
    original = _entry(1)
    ledger.insert(original)

    with pytest.raises(DuplicateTransactionError) as excinfo:
        ledger.insert(_entry(1, amount=1, kind=TransactionKind.WITHDRAWAL))

    assert excinfo.value.tx_id == 1
    assert ledger.find(1) is original
    assert len(ledger) == 1


def test_new_entries_must_start_ok():
    entry = _entry(1)
    entry.status = TransactionStatus.RESOLVED

    with pytest.raises(ValueError, match="status OK"):
        Ledger().insert(entry)
