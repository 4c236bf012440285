"""Ingest utilities shared by CLI commands and the engine.

Exposes a single helper that streams :class:`Mutation` records from a
transaction CSV on disk, after checking the header row.
"""

from __future__ import annotations

import csv
from collections.abc import Callable, Iterator
from os import PathLike
from pathlib import Path

from ..errors import MutationParseError
from ..models import Mutation
from .adapters.transactions_csv import to_mutations

REQUIRED_HEADERS = frozenset({"type", "client", "tx"})


def iter_mutations_from_csv(
    csv_path: str | PathLike[str],
    *,
    on_invalid: Callable[[MutationParseError], None] | None = None,
) -> Iterator[Mutation]:
    """Read a transaction CSV and yield mutations in file order.

    The file is opened on first iteration and read row by row. Header names
    are matched after trimming and lower-casing; the ``amount`` column may be
    omitted when no row carries an amount.

    Raises ``csv.Error`` when the header row is missing or lacks required
    columns, and :class:`MutationParseError` for malformed rows unless
    ``on_invalid`` is given.
    """

    p = Path(csv_path)
    # utf-8-sig tolerates a leading BOM from spreadsheet exports.
    with p.open(encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f, skipinitialspace=True)
        if not reader.fieldnames:
            raise csv.Error(f"CSV appears to have no header row: {csv_path}")
        reader.fieldnames = [h.strip().lower() for h in reader.fieldnames]
        missing = sorted(REQUIRED_HEADERS.difference(reader.fieldnames))
        if missing:
            raise csv.Error("CSV header mismatch. Missing columns: " + ", ".join(missing))
        yield from to_mutations(reader, on_invalid=on_invalid)


__all__ = ["REQUIRED_HEADERS", "iter_mutations_from_csv"]
