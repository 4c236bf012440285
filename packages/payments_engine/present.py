"""Output view of final account states.

``AccountRow`` is a frozen, string-typed view of an :class:`Account` so the
fixed-point amounts are rendered exactly once, at the output boundary.

Column order (exact): ``client, available, held, total, locked``
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from dataclasses import asdict, dataclass, fields
from typing import IO

from .accounts import Account
from .amounts import format_amount
from .errors import AccountInvariantError


@dataclass(frozen=True, slots=True)
class AccountRow:
    client: int
    available: str
    held: str
    total: str
    locked: str

    @classmethod
    def from_account(cls, account: Account) -> AccountRow:
        if account.total != account.available + account.held:
            raise AccountInvariantError(
                client_id=account.client_id,
                available=account.available,
                held=account.held,
                total=account.total,
            )
        return cls(
            client=account.client_id,
            available=format_amount(account.available),
            held=format_amount(account.held),
            total=format_amount(account.total),
            locked="true" if account.locked else "false",
        )


FIELDNAMES: tuple[str, ...] = tuple(f.name for f in fields(AccountRow))


def write_accounts_csv(accounts: Iterable[Account], stream: IO[str]) -> int:
    """Write one CSV row per account to ``stream`` and return the row count."""

    writer = csv.DictWriter(stream, fieldnames=FIELDNAMES, lineterminator="\n")
    writer.writeheader()
    count = 0
    for account in accounts:
        writer.writerow(asdict(AccountRow.from_account(account)))
        count += 1
    return count


__all__ = ["AccountRow", "FIELDNAMES", "write_accounts_csv"]
