import sys, os

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from cubes.game import Board  # noqa: E402

from tests.helpers import fill_row, RecordingRenderer  # noqa: E402


@pytest.fixture
def board() -> Board:
    return Board()


__all__ = [
    "fill_row",
    "RecordingRenderer",
]
