"""Error types raised while applying mutations to accounts.

Ignorable inconsistencies (a dispute, resolve or chargeback referencing an
unknown or wrong-status transaction) are not errors and never raise. Everything
here is a reportable failure of a single record; whether it aborts the run is
decided by the engine's error policy.
"""

from __future__ import annotations

from .amounts import format_amount


class MutationError(Exception):
    """Base class for a mutation that could not be applied."""

    def __init__(self, message: str, *, tx_id: int, client_id: int | None = None) -> None:
        super().__init__(message)
        self.tx_id = tx_id
        self.client_id = client_id


class LockedAccountError(MutationError):
    def __init__(self, *, tx_id: int, client_id: int) -> None:
        super().__init__(
            f"Attempt to mutate account {client_id} with tx {tx_id}, which is locked",
            tx_id=tx_id,
            client_id=client_id,
        )


class InsufficientFundsError(MutationError):
    def __init__(self, *, tx_id: int, client_id: int, amount: int) -> None:
        super().__init__(
            f"Error on tx {tx_id}: can't withdraw {format_amount(amount)}",
            tx_id=tx_id,
            client_id=client_id,
        )
        self.amount = amount


class OnlyDepositsDisputableError(MutationError):
    def __init__(self, *, tx_id: int, client_id: int) -> None:
        super().__init__(
            f"Cannot dispute tx {tx_id}, only deposits can be disputed",
            tx_id=tx_id,
            client_id=client_id,
        )


class AmountUnderflowError(MutationError):
    """A dispute, resolve or chargeback would drive a balance below zero."""

    def __init__(self, *, tx_id: int, client_id: int, amount: int, operation: str) -> None:
        super().__init__(
            f"Error on tx {tx_id}: can't {operation} {format_amount(amount)}",
            tx_id=tx_id,
            client_id=client_id,
        )
        self.amount = amount
        self.operation = operation


class AmountOverflowError(MutationError):
    def __init__(self, *, tx_id: int, client_id: int, amount: int) -> None:
        super().__init__(
            f"Error on tx {tx_id}: adding {format_amount(amount)} overflows the balance",
            tx_id=tx_id,
            client_id=client_id,
        )
        self.amount = amount


class AmountPresenceError(MutationError):
    """A mutation whose amount presence does not match its kind."""

    def __init__(self, *, tx_id: int, client_id: int, kind: str, expected: bool) -> None:
        rule = "requires an amount" if expected else "must not carry an amount"
        super().__init__(
            f"Error on tx {tx_id}: {kind} {rule}",
            tx_id=tx_id,
            client_id=client_id,
        )


class DuplicateTransactionError(MutationError):
    def __init__(self, *, tx_id: int, client_id: int | None = None) -> None:
        super().__init__(
            f"Transaction {tx_id} already exists in the ledger",
            tx_id=tx_id,
            client_id=client_id,
        )


class MutationParseError(ValueError):
    """A malformed input row, rejected before it reaches the core."""

    def __init__(self, reason: str, *, row: int, tx_id: int | None = None) -> None:
        where = f"row {row}" if tx_id is None else f"row {row} (tx {tx_id})"
        super().__init__(f"Error parsing {where}: {reason}")
        self.reason = reason
        self.row = row
        self.tx_id = tx_id


class AccountInvariantError(RuntimeError):
    """An account whose total no longer equals available plus held."""

    def __init__(self, *, client_id: int, available: int, held: int, total: int) -> None:
        super().__init__(
            f"account {client_id}: total {total} != available {available} + held {held}"
        )
        self.client_id = client_id


__all__ = [
    "MutationError",
    "LockedAccountError",
    "InsufficientFundsError",
    "OnlyDepositsDisputableError",
    "AmountUnderflowError",
    "AmountOverflowError",
    "AmountPresenceError",
    "DuplicateTransactionError",
    "MutationParseError",
    "AccountInvariantError",
]
