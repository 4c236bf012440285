# ruff: noqa: I001
"""CLI for the ``payments_engine`` package.

This module exposes a callable command handler (``cmd_process``) and a
Typer-based console interface. Environment variables (``PAYMENTS_ENGINE_*``)
are loaded from a local ``.env`` using ``python-dotenv`` before delegating to
command logic. Business logic lives in ``payments_engine.engine`` and related
modules.

Usage::

    payments-engine process transactions.csv > accounts.csv
"""

from __future__ import annotations

import csv
import os
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import ArgumentInfo, OptionInfo

from .engine import ErrorPolicy, TransactionEngine
from .errors import MutationError, MutationParseError
from .ingest.utils import iter_mutations_from_csv
from .logging_setup import configure_logging, get_logger
from .present import write_accounts_csv

_logger = get_logger("payments_engine.cli")

_ON_ERROR_ENV_VAR = "PAYMENTS_ENGINE_ON_ERROR"


# ---- Small module-level helpers used by CLI commands -------------------------


def _resolve_error_policy(value: str | None) -> ErrorPolicy:
    """Resolve the error policy from the CLI option, then the env, then the default.

    Raises ``ValueError`` for values other than ``abort`` or ``skip``.
    """

    raw = value if value is not None else os.getenv(_ON_ERROR_ENV_VAR)
    if raw is None or not raw.strip():
        return ErrorPolicy.ABORT
    try:
        return ErrorPolicy(raw.strip().lower())
    except ValueError:
        raise ValueError(
            f"unsupported error policy {raw!r}; expected one of: "
            + ", ".join(p.value for p in ErrorPolicy)
        ) from None


def cmd_process(
    csv_path: str | os.PathLike[str],
    *,
    policy: ErrorPolicy = ErrorPolicy.ABORT,
    output: str | os.PathLike[str] | None = None,
) -> int:
    """Run a transaction CSV through the engine and write the account table.

    Behavior
    --------
    - Streams ``csv_path`` row by row into a :class:`TransactionEngine`.
    - On success writes ``client,available,held,total,locked`` rows to
      ``output`` (or stdout) and returns ``0``.
    - Under the ``abort`` policy the first malformed row or rejected mutation
      is reported on stderr, no table is written, and ``1`` is returned.
    - Under the ``skip`` policy offending records are skipped and a one-line
      summary is written to stderr when any were skipped.
    """

    engine = TransactionEngine(policy=policy)
    on_invalid = engine.record_parse_error if policy is ErrorPolicy.SKIP else None

    try:
        summary = engine.process(iter_mutations_from_csv(csv_path, on_invalid=on_invalid))
    except FileNotFoundError:
        print(f"Error: File not found: {csv_path}", file=sys.stderr)
        return 1
    except PermissionError:
        print(f"Error: Permission denied: {csv_path}", file=sys.stderr)
        return 1
    except csv.Error as e:
        print(f"Error: Failed to parse CSV: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: Failed to decode CSV as UTF-8: {csv_path}: {e}", file=sys.stderr)
        return 1
    except MutationParseError as e:
        print(f"Error: The transaction engine failed: {e}", file=sys.stderr)
        return 1
    except MutationError as e:
        _logger.error(
            "cli:aborted tx=%d client=%s error=%s",
            e.tx_id,
            e.client_id,
            e.__class__.__name__,
        )
        print(f"Error: The transaction engine failed: {e}", file=sys.stderr)
        return 1

    try:
        if output is None:
            rows = write_accounts_csv(engine.accounts(), sys.stdout)
        else:
            with open(output, "w", encoding="utf-8", newline="") as f:
                rows = write_accounts_csv(engine.accounts(), f)
    except OSError as e:
        print(f"Error: Failed to write output: {e}", file=sys.stderr)
        return 1

    _logger.info("cli:written accounts=%d", rows)
    if summary.skipped:
        print(
            f"Skipped {summary.skipped_count} of {summary.processed} records "
            f"(first: {summary.skipped[0].reason})",
            file=sys.stderr,
        )
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Apply a CSV of deposits, withdrawals, disputes, resolves and chargebacks "
        "and print the final state of every client account as CSV."
    ),
)

# Module-level argument/option objects to satisfy ruff B008 (no calls in
# parameter defaults).
CSV_PATH_ARGUMENT: ArgumentInfo = typer.Argument(
    ...,
    help="Path to the transaction CSV (columns: type, client, tx, amount).",
    dir_okay=False,
    file_okay=True,
    exists=False,  # allow non-existent here; the handler will report nice errors
)
ON_ERROR_OPTION: OptionInfo = typer.Option(
    None,
    "--on-error",
    help=(
        "What to do with a rejected record: 'abort' the run (default) or 'skip' it. "
        f"Falls back to env {_ON_ERROR_ENV_VAR}."
    ),
)
OUTPUT_OPTION: OptionInfo = typer.Option(
    None,
    "--output",
    "-o",
    help="Write the account table to this file instead of stdout.",
    dir_okay=False,
)
LOG_LEVEL_OPTION: OptionInfo = typer.Option(
    None,
    "--log-level",
    help="Level for stderr diagnostics. Falls back to env PAYMENTS_ENGINE_LOG_LEVEL.",
)


@app.command("process")
def process_cmd(
    csv_path: Annotated[Path, CSV_PATH_ARGUMENT],
    *,
    on_error: str | None = ON_ERROR_OPTION,
    output: Path | None = OUTPUT_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """Process a transaction CSV and print the resulting accounts."""

    try:
        configure_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e

    try:
        policy = _resolve_error_policy(on_error)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--on-error") from e

    code = cmd_process(csv_path, policy=policy, output=output)
    if code != 0:
        raise typer.Exit(code)


@app.callback()
def _root() -> None:
    """Load ``.env`` from the current working directory before any command runs.

    Variables already set in the environment win over the file.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    # Running as a module: `python -m payments_engine.cli`
    app()
