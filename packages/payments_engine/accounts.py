"""Client accounts and the mutation state machine.

Each account tracks ``available`` and ``held`` funds plus their sum ``total``.
Mutations are applied one at a time, in input order, against a shared
:class:`~payments_engine.ledger.Ledger`:

- deposit / withdrawal move funds and record a ledger entry;
- dispute moves a deposit's amount from available to held;
- resolve moves it back from held to available;
- chargeback removes it from available and total and locks the account.

Dispute-family records that reference an unknown transaction or one in the
wrong lifecycle stage are ignored. The referenced entry is looked up by id
alone and acts on the account the record names. Arithmetic violations raise
a :class:`~payments_engine.errors.MutationError` subclass and leave the
account unchanged. A locked account rejects every further mutation.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .errors import (
    AmountOverflowError,
    AmountPresenceError,
    AmountUnderflowError,
    DuplicateTransactionError,
    InsufficientFundsError,
    LockedAccountError,
    OnlyDepositsDisputableError,
)
from .ledger import Ledger
from .logging_setup import get_logger
from .models import AMOUNT_MAX, Mutation, Transaction, TransactionKind, TransactionStatus

_logger = get_logger("payments_engine.accounts")


@dataclass(slots=True)
class Account:
    client_id: int
    available: int = 0
    held: int = 0
    total: int = 0
    locked: bool = False

    def mutate(self, mutation: Mutation, ledger: Ledger) -> None:
        """Apply ``mutation`` to this account.

        Raises a :class:`~payments_engine.errors.MutationError` subclass when
        the mutation is rejected; the account and ledger are then unchanged.
        """

        if self.locked:
            raise LockedAccountError(tx_id=mutation.id, client_id=self.client_id)
        if mutation.kind.carries_amount != (mutation.amount is not None):
            raise AmountPresenceError(
                tx_id=mutation.id,
                client_id=self.client_id,
                kind=mutation.kind.value,
                expected=mutation.kind.carries_amount,
            )

        match mutation:
            case Mutation(kind=TransactionKind.DEPOSIT, amount=int(amount)):
                self._deposit(mutation, amount, ledger)
            case Mutation(kind=TransactionKind.WITHDRAWAL, amount=int(amount)):
                self._withdraw(mutation, amount, ledger)
            case Mutation(kind=TransactionKind.DISPUTE):
                self._dispute(mutation, ledger)
            case Mutation(kind=TransactionKind.RESOLVE):
                self._resolve(mutation, ledger)
            case Mutation(kind=TransactionKind.CHARGEBACK):
                self._chargeback(mutation, ledger)

    # ---- amount-carrying mutations ------------------------------------------

    def _new_entry(self, mutation: Mutation, amount: int, ledger: Ledger) -> Transaction:
        if mutation.id in ledger:
            raise DuplicateTransactionError(tx_id=mutation.id, client_id=self.client_id)
        return Transaction(
            id=mutation.id,
            kind=mutation.kind,
            client_id=self.client_id,
            amount=amount,
        )

    def _deposit(self, mutation: Mutation, amount: int, ledger: Ledger) -> None:
        entry = self._new_entry(mutation, amount, ledger)
        available = self._add(self.available, entry)
        total = self._add(self.total, entry)
        self.available, self.total = available, total
        ledger.insert(entry)

    def _withdraw(self, mutation: Mutation, amount: int, ledger: Ledger) -> None:
        entry = self._new_entry(mutation, amount, ledger)
        if entry.amount > self.available or entry.amount > self.total:
            raise InsufficientFundsError(
                tx_id=entry.id, client_id=self.client_id, amount=entry.amount
            )
        self.available -= entry.amount
        self.total -= entry.amount
        ledger.insert(entry)

    # ---- dispute family -----------------------------------------------------

    def _referenced(
        self, mutation: Mutation, ledger: Ledger, expected: TransactionStatus
    ) -> Transaction | None:
        """Return the ledger entry ``mutation`` may act on, or ``None`` to ignore it."""

        entry = ledger.find(mutation.id)
        if entry is None:
            _logger.debug(
                "accounts:ignored kind=%s tx=%d client=%d reason=unknown_transaction",
                mutation.kind.value,
                mutation.id,
                self.client_id,
            )
            return None
        if mutation.kind is TransactionKind.DISPUTE and entry.kind is not TransactionKind.DEPOSIT:
            raise OnlyDepositsDisputableError(tx_id=mutation.id, client_id=self.client_id)
        if entry.status is not expected:
            _logger.debug(
                "accounts:ignored kind=%s tx=%d client=%d reason=status_%s",
                mutation.kind.value,
                mutation.id,
                self.client_id,
                entry.status.value,
            )
            return None
        return entry

    def _dispute(self, mutation: Mutation, ledger: Ledger) -> None:
        entry = self._referenced(mutation, ledger, TransactionStatus.OK)
        if entry is None:
            return
        available = self._sub(self.available, entry, "dispute")
        held = self._add(self.held, entry)
        self.available, self.held = available, held
        entry.status = TransactionStatus.DISPUTED

    def _resolve(self, mutation: Mutation, ledger: Ledger) -> None:
        entry = self._referenced(mutation, ledger, TransactionStatus.DISPUTED)
        if entry is None:
            return
        held = self._sub(self.held, entry, "resolve")
        available = self._add(self.available, entry)
        self.available, self.held = available, held
        entry.status = TransactionStatus.RESOLVED

    def _chargeback(self, mutation: Mutation, ledger: Ledger) -> None:
        entry = self._referenced(mutation, ledger, TransactionStatus.RESOLVED)
        if entry is None:
            return
        available = self._sub(self.available, entry, "chargeback")
        total = self._sub(self.total, entry, "chargeback")
        self.available, self.total = available, total
        self.locked = True
        entry.status = TransactionStatus.REFUNDED

    # ---- checked arithmetic -------------------------------------------------

    def _add(self, balance: int, entry: Transaction) -> int:
        result = balance + entry.amount
        if result > AMOUNT_MAX:
            raise AmountOverflowError(tx_id=entry.id, client_id=self.client_id, amount=entry.amount)
        return result

    def _sub(self, balance: int, entry: Transaction, operation: str) -> int:
        if entry.amount > balance:
            raise AmountUnderflowError(
                tx_id=entry.id,
                client_id=self.client_id,
                amount=entry.amount,
                operation=operation,
            )
        return balance - entry.amount


class AccountRegistry:
    """Accounts keyed by client id, created lazily on first reference."""

    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}

    def get_or_create(self, client_id: int) -> Account:
        account = self._accounts.get(client_id)
        if account is None:
            account = self._accounts[client_id] = Account(client_id)
        return account

    def get(self, client_id: int) -> Account | None:
        return self._accounts.get(client_id)

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        # Enumeration order is not part of the contract.
        return iter(self._accounts.values())


__all__ = ["Account", "AccountRegistry"]
