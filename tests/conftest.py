"""Pytest configuration helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_on_path() -> None:
    """Allow tests to import TREC and the tools/ scripts without installing."""
    repo_root = Path(__file__).resolve().parents[1]
    for path in (repo_root, repo_root / "tools"):
        path_str = str(path)
        if path_str not in sys.path:
            sys.path.insert(0, path_str)


_ensure_repo_on_path()

from TREC.FMM.dword import encode_uint32_le  # noqa: E402


def make_record(sec: int, usec: int, payload: bytes = b"") -> bytes:
    return (
        encode_uint32_le(sec)
        + encode_uint32_le(usec)
        + encode_uint32_le(len(payload))
        + payload
    )


@pytest.fixture
def record():
    return make_record


@pytest.fixture
def sample_stream():
    """Three frames: a clear-screen, a half-second pause, then 'hi'."""
    return (
        make_record(1_700_000_000, 250_000, b"\x1b[H\x1b[2J")
        + make_record(1_700_000_000, 750_000, b"")
        + make_record(1_700_000_001, 100_000, b"hi")
    )
