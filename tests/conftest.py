"""
Shared pytest fixtures for the spot_check tests.

Log files go to a throwaway directory so test runs never write beside the
module.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable

import pytest

os.environ.setdefault("SPOTCHECK_LOG_DIR", tempfile.mkdtemp(prefix="spot-check-logs-"))
# A handler on the package logger stops SpotChecker from attaching its own
# stream and file handlers during tests.
logging.getLogger("spot_check").addHandler(logging.NullHandler())

from spot_check import SpotChecker  # noqa: E402

LARGE_SIZE = 10_000


def patterned_bytes(size: int) -> bytes:
    """Deterministic content where neighbouring bytes differ."""
    return bytes((index * 7 + 3) % 256 for index in range(size))


@pytest.fixture()
def checker() -> SpotChecker:
    return SpotChecker(logger=logging.getLogger("spot_check.tests"))


@pytest.fixture()
def make_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing ``content`` to ``tmp_path / name``."""

    def _make(name: str, content: bytes) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture()
def large_payload() -> bytes:
    return patterned_bytes(LARGE_SIZE)
