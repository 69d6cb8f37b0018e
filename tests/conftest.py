# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "nonogram" and "api_proto" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nonogram.grid.parser import grid_from_rows  # noqa: E402

RING_ROWS = ["#####", "#...#", "#...#", "#...#", "#####"]
RING_CLUES = ["5", "1 1", "1 1", "1 1", "5"]


@pytest.fixture
def ring_clues():
    return list(RING_CLUES), list(RING_CLUES)


@pytest.fixture
def ring_solution():
    return grid_from_rows(RING_ROWS)


@pytest.fixture
def ambiguous_clues():
    # 2x2 の対角パターン: 2通りの解がある
    return ["1", "1"], ["1", "1"]
