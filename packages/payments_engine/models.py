"""Data models for ``payments_engine``.

Amounts are fixed-point integers counting 1/10,000ths of a currency unit.
Floating point never appears in stored state; conversion to and from text
happens only at the I/O boundary (see :mod:`payments_engine.amounts`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Fixed-point bounds
# ---------------------------------------------------------------------------

AMOUNT_SCALE = 10_000
"""Units per currency unit (four decimal places)."""

AMOUNT_MAX = 2**64 - 1
"""Largest representable balance or transaction amount, in units."""

CLIENT_ID_MAX = 2**16 - 1
TX_ID_MAX = 2**32 - 1


class TransactionKind(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        """Deposits and withdrawals carry an amount; the dispute family does not."""

        return self in (TransactionKind.DEPOSIT, TransactionKind.WITHDRAWAL)


class TransactionStatus(str, Enum):
    """Lifecycle of a ledger entry: ``OK -> DISPUTED -> RESOLVED -> REFUNDED``."""

    OK = "ok"
    DISPUTED = "disputed"
    RESOLVED = "resolved"
    REFUNDED = "refunded"


@dataclass(frozen=True, slots=True)
class Mutation:
    """A single validated input instruction applied to one account.

    ``amount`` is present iff ``kind`` is a deposit or withdrawal. The ingest
    layer enforces this; the core re-checks it before touching balances.
    """

    id: int
    kind: TransactionKind
    client_id: int
    amount: int | None = None


@dataclass(slots=True)
class Transaction:
    """A ledger entry for an applied deposit or withdrawal.

    Only ``status`` changes after creation.
    """

    id: int
    kind: TransactionKind
    client_id: int
    amount: int
    status: TransactionStatus = TransactionStatus.OK


__all__ = [
    "AMOUNT_SCALE",
    "AMOUNT_MAX",
    "CLIENT_ID_MAX",
    "TX_ID_MAX",
    "TransactionKind",
    "TransactionStatus",
    "Mutation",
    "Transaction",
]
