"""Transaction history store.

Disputes, resolves and chargebacks carry no amount of their own, so every
applied deposit and withdrawal is kept here for the whole run and looked up by
transaction id. There is no eviction: any later record may reference any past
transaction.
"""

from __future__ import annotations

from collections.abc import Iterator

from .errors import DuplicateTransactionError
from .models import Transaction, TransactionStatus


class Ledger:
    """Transactions keyed by id, shared by all accounts within one run."""

    def __init__(self) -> None:
        self._entries: dict[int, Transaction] = {}

    def insert(self, entry: Transaction) -> None:
        """Add a newly applied transaction.

        Raises :class:`DuplicateTransactionError` when the id is already
        present; the existing entry is left untouched.
        """

        if entry.id in self._entries:
            raise DuplicateTransactionError(tx_id=entry.id, client_id=entry.client_id)
        if entry.status is not TransactionStatus.OK:
            raise ValueError(f"new ledger entries must have status OK, got {entry.status.value}")
        self._entries[entry.id] = entry

    def find(self, tx_id: int) -> Transaction | None:
        """Return the live entry for ``tx_id`` (mutations to it are kept)."""

        return self._entries.get(tx_id)

    def __contains__(self, tx_id: object) -> bool:
        return tx_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._entries.values())


__all__ = ["Ledger"]
