"""Sequential driver feeding mutations into accounts and the ledger.

The engine owns the single :class:`AccountRegistry` and :class:`Ledger` of a
run and applies mutations strictly in input order: balances are
path-dependent and dispute-family records depend on the status accumulated
by earlier ones.

Error policy
------------
- ``abort`` (default): the first rejected mutation propagates and ends the run.
- ``skip``: rejected mutations are logged, recorded in the summary and
  skipped; processing continues with the next record. Final balances then
  differ from an aborted run by construction.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from .accounts import Account, AccountRegistry
from .errors import MutationError, MutationParseError
from .ledger import Ledger
from .logging_setup import get_logger
from .models import Mutation

_logger = get_logger("payments_engine.engine")


class ErrorPolicy(str, Enum):
    ABORT = "abort"
    SKIP = "skip"


@dataclass(frozen=True, slots=True)
class SkippedRecord:
    tx_id: int | None
    reason: str


@dataclass(slots=True)
class EngineSummary:
    """Counters for one run; ``skipped`` is only populated under ``skip``."""

    processed: int = 0
    applied: int = 0
    skipped: list[SkippedRecord] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class TransactionEngine:
    def __init__(self, *, policy: ErrorPolicy = ErrorPolicy.ABORT) -> None:
        self.policy = policy
        self.registry = AccountRegistry()
        self.ledger = Ledger()
        self.summary = EngineSummary()

    def apply(self, mutation: Mutation) -> None:
        """Apply one mutation to its client's account, raising on rejection."""

        self.registry.get_or_create(mutation.client_id).mutate(mutation, self.ledger)

    def process(self, mutations: Iterable[Mutation]) -> EngineSummary:
        """Apply ``mutations`` in order according to the engine's error policy.

        The iterable is consumed lazily. Malformed rows never reach this loop;
        the ingest layer either raises them or hands them to
        :meth:`record_parse_error`.
        """

        summary = self.summary
        for mutation in mutations:
            summary.processed += 1
            try:
                self.apply(mutation)
            except MutationError as e:
                if self.policy is ErrorPolicy.ABORT:
                    raise
                _logger.warning(
                    "engine:mutation_skipped tx=%d client=%d kind=%s error=%s",
                    mutation.id,
                    mutation.client_id,
                    mutation.kind.value,
                    e.__class__.__name__,
                )
                summary.skipped.append(SkippedRecord(tx_id=mutation.id, reason=str(e)))
                continue
            summary.applied += 1

        _logger.info(
            "engine:done processed=%d applied=%d skipped=%d accounts=%d transactions=%d",
            summary.processed,
            summary.applied,
            summary.skipped_count,
            len(self.registry),
            len(self.ledger),
        )
        return summary

    def record_parse_error(self, error: MutationParseError) -> None:
        """Count a malformed input row that was skipped before reaching the core."""

        _logger.warning("engine:row_skipped row=%d error=%s", error.row, error.reason)
        self.summary.processed += 1
        self.summary.skipped.append(SkippedRecord(tx_id=error.tx_id, reason=str(error)))

    def accounts(self) -> Iterator[Account]:
        return iter(self.registry)


def process_mutations(
    mutations: Iterable[Mutation], *, policy: ErrorPolicy = ErrorPolicy.ABORT
) -> TransactionEngine:
    """Run ``mutations`` through a fresh engine and return it for inspection."""

    engine = TransactionEngine(policy=policy)
    engine.process(mutations)
    return engine


__all__ = [
    "ErrorPolicy",
    "SkippedRecord",
    "EngineSummary",
    "TransactionEngine",
    "process_mutations",
]
