from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Ensure the src/ directory is importable when tests run without an install.
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from fitroster.cli.deps import reset_container  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_cli_container() -> Iterator[None]:
    yield
    reset_container()
