"""Pytest configuration for test isolation.

The CLI reads ``PAYMENTS_ENGINE_*`` variables from the environment and from a
``.env`` file in the current working directory, and configures the package
logger once per process. Any of these leaking between tests (or from the
developer's shell) would change error policy or log output, so every test
runs with a clean environment, a private working directory and an
unconfigured package logger.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from payments_engine.logging_setup import reset_logging

_ENV_VARS = ("PAYMENTS_ENGINE_ON_ERROR", "PAYMENTS_ENGINE_LOG_LEVEL")

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def write_csv(tmp_path: Path):
    """Write dedented CSV text to a temp file and return its path."""

    import textwrap

    def _write(text: str, name: str = "transactions.csv") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write
