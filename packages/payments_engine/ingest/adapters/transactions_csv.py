"""Adapter for mapping transaction CSV rows to :class:`Mutation` records.

CSV header (keys expected after trimming and lower-casing):
``type, client, tx, amount``

Validation rules:
- ``type``: one of ``deposit, withdrawal, dispute, resolve, chargeback``
  (case-insensitive)
- ``client``: integer in ``[0, 65535]``
- ``tx``: integer in ``[0, 4294967295]``
- ``amount``: decimal text, truncated to four decimal places; required for
  deposits and withdrawals, empty or absent for disputes, resolves and
  chargebacks
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ...amounts import parse_amount
from ...errors import MutationParseError
from ...models import CLIENT_ID_MAX, TX_ID_MAX, Mutation, TransactionKind


class TransactionRow(BaseModel):
    """Typed, validated model of one input row."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, frozen=True)

    kind: TransactionKind = Field(alias="type")
    client: int = Field(ge=0, le=CLIENT_ID_MAX)
    tx: int = Field(ge=0, le=TX_ID_MAX)
    amount: int | None = None

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_amount(v)
        return v

    @model_validator(mode="after")
    def _amount_matches_kind(self) -> TransactionRow:
        if self.kind.carries_amount and self.amount is None:
            raise ValueError(f"{self.kind.value} must have an amount")
        if not self.kind.carries_amount and self.amount is not None:
            raise ValueError(f"{self.kind.value} may not have an amount")
        return self

    def to_mutation(self) -> Mutation:
        return Mutation(id=self.tx, kind=self.kind, client_id=self.client, amount=self.amount)


def _best_effort_tx(row: Mapping[str, Any]) -> int | None:
    raw = row.get("tx")
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def _clean_row(row: Mapping[Any, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in row.items():
        if key is None:
            # ``csv.DictReader`` collects surplus cells under a ``None`` key.
            raise ValueError("row has more fields than the header")
        cleaned[str(key).strip().lower()] = value.strip() if isinstance(value, str) else value
    return cleaned


def parse_row(row: Mapping[Any, Any], *, row_number: int) -> Mutation:
    """Validate one CSV row and convert it to a :class:`Mutation`.

    Raises :class:`MutationParseError` naming ``row_number`` (1-based, header
    excluded) and the transaction id when it could be read.
    """

    try:
        cleaned = _clean_row(row)
    except ValueError as e:
        raise MutationParseError(str(e), row=row_number) from e
    try:
        return TransactionRow.model_validate(cleaned).to_mutation()
    except ValidationError as e:
        raise MutationParseError(
            _describe(e), row=row_number, tx_id=_best_effort_tx(cleaned)
        ) from e


def to_mutations(
    rows: Iterable[Mapping[Any, Any]],
    *,
    on_invalid: Callable[[MutationParseError], None] | None = None,
) -> Iterator[Mutation]:
    """Convert CSV rows to mutations lazily, in input order.

    When ``on_invalid`` is given, malformed rows are passed to it and skipped;
    otherwise the first malformed row raises :class:`MutationParseError`.
    """

    for row_number, row in enumerate(rows, start=1):
        try:
            mutation = parse_row(row, row_number=row_number)
        except MutationParseError as e:
            if on_invalid is None:
                raise
            on_invalid(e)
            continue
        yield mutation


__all__ = ["TransactionRow", "parse_row", "to_mutations"]
