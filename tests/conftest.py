"""Shared pytest fixtures for test modules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

SAMPLE_DIRECTORY = """\
# name                 kind        phone          manager
"Charles Babbage"      employee    555-100-0001
"Ada Lovelace"         employee    (555) 100-0002 reports-to "Charles Babbage"
"Grace Hopper"         contractor  555.100.0003   reports-to "Ada Lovelace"

"Alan Turing"          customer    555-100-0004   reports-to "John von Neumann"
"""


@pytest.fixture
def directory_text() -> str:
    return SAMPLE_DIRECTORY


@pytest.fixture
def directory_file(tmp_path: Path) -> Path:
    path = tmp_path / "directory.txt"
    path.write_text(SAMPLE_DIRECTORY, encoding="utf-8")
    return path
