"""Public interface for the ``payments_engine`` package.

This module exposes the engine, the account state machine and the public
models/errors as the stable import surface. There is no runtime logic
here, only symbol re-exports.
"""

from .accounts import Account, AccountRegistry
from .amounts import format_amount, parse_amount
from .engine import EngineSummary, ErrorPolicy, TransactionEngine, process_mutations
from .errors import (
    AccountInvariantError,
    AmountOverflowError,
    AmountPresenceError,
    AmountUnderflowError,
    DuplicateTransactionError,
    InsufficientFundsError,
    LockedAccountError,
    MutationError,
    MutationParseError,
    OnlyDepositsDisputableError,
)
from .ledger import Ledger
from .models import (
    AMOUNT_MAX,
    AMOUNT_SCALE,
    Mutation,
    Transaction,
    TransactionKind,
    TransactionStatus,
)
from .present import AccountRow, write_accounts_csv

__all__ = [
    # Engine
    "TransactionEngine",
    "EngineSummary",
    "ErrorPolicy",
    "process_mutations",
    # State
    "Account",
    "AccountRegistry",
    "Ledger",
    # Models / types
    "AMOUNT_MAX",
    "AMOUNT_SCALE",
    "Mutation",
    "Transaction",
    "TransactionKind",
    "TransactionStatus",
    # Amounts / output
    "parse_amount",
    "format_amount",
    "AccountRow",
    "write_accounts_csv",
    # Errors
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
