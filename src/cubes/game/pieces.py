from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np

from .bbs import BlumBlumShub
from .board import BOARD_WIDTH

BOX_SIZE = 4
SPAWN_X = (BOARD_WIDTH - BOX_SIZE) // 2
SPAWN_Y = 0


class TetrominoType(IntEnum):
    I = 0
    O = 1
    T = 2
    S = 3
    Z = 4
    J = 5
    L = 6


Shape = np.ndarray
Color = Tuple[int, int, int]


def _mask_to_grid(mask: int) -> Shape:
    # bit i*4 + j <=> box row i, box column j
    grid = np.zeros((BOX_SIZE, BOX_SIZE), dtype=np.bool_)
    for i in range(BOX_SIZE):
        for j in range(BOX_SIZE):
            grid[i, j] = bool(mask & (1 << (i * BOX_SIZE + j)))
    grid.setflags(write=False)
    return grid


def _rgb(value: int) -> Color:
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


@dataclass(frozen=True, eq=False)
class TetrominoSpec:
    kind: TetrominoType
    masks: Tuple[int, int, int, int]
    color: Color
    grids: Tuple[Shape, ...]


def _spec(kind: TetrominoType, masks: Tuple[int, int, int, int], color: int) -> TetrominoSpec:
    return TetrominoSpec(kind, masks, _rgb(color), tuple(_mask_to_grid(m) for m in masks))


CATALOG: Tuple[TetrominoSpec, ...] = (
    _spec(TetrominoType.I, (0x0F00, 0x2222, 0x00F0, 0x4444), 0x00FFFF),
    _spec(TetrominoType.O, (0x6600, 0x6600, 0x6600, 0x6600), 0xFFFF00),
    _spec(TetrominoType.T, (0x4E00, 0x2320, 0x7200, 0x04C4), 0x800080),
    _spec(TetrominoType.S, (0x3600, 0x0231, 0x006C, 0x8C40), 0x00FF00),
    _spec(TetrominoType.Z, (0xC600, 0x1320, 0x0063, 0x04C8), 0xFF0000),
    _spec(TetrominoType.J, (0x8E00, 0x3220, 0x0071, 0x044C), 0x0000FF),
    _spec(TetrominoType.L, (0x2E00, 0x2230, 0x0074, 0x0C44), 0xFF7F00),
)


def rotation_grid(kind: int, rotation: int) -> Shape:
    """4x4 occupancy grid of ``kind`` at ``rotation`` (read-only)."""
    assert 0 <= kind < len(CATALOG), f"shape index out of range: {kind}"
    assert 0 <= rotation < 4, f"rotation index out of range: {rotation}"
    return CATALOG[kind].grids[rotation]


@dataclass(frozen=True)
class Tetromino:
    kind: TetrominoType
    rotation: int = 0  # 0..3
    x: int = SPAWN_X
    y: int = SPAWN_Y

    def __post_init__(self) -> None:
        assert 0 <= int(self.kind) < len(CATALOG), f"shape index out of range: {self.kind}"
        assert 0 <= self.rotation < 4, f"rotation index out of range: {self.rotation}"
        object.__setattr__(self, "kind", TetrominoType(self.kind))

    @property
    def spec(self) -> TetrominoSpec:
        return CATALOG[self.kind]

    @property
    def masks(self) -> Tuple[int, int, int, int]:
        return self.spec.masks

    @property
    def color(self) -> Color:
        return self.spec.color

    def shape(self, rotation: Optional[int] = None) -> Shape:
        if rotation is None:
            rotation = self.rotation
        return rotation_grid(self.kind, rotation)

    def moved(self, dx: int = 0, dy: int = 0, rotation: Optional[int] = None) -> "Tetromino":
        if rotation is None:
            rotation = self.rotation
        return replace(self, x=self.x + dx, y=self.y + dy, rotation=rotation)

    def cells_at(self, origin_x: int, origin_y: int, rotation: Optional[int] = None) -> List[Tuple[int, int]]:
        s = self.shape(rotation)
        cells: List[Tuple[int, int]] = []
        for dy in range(BOX_SIZE):
            for dx in range(BOX_SIZE):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.x, self.y)


def spawn(rng: BlumBlumShub) -> Tetromino:
    """Draw the next falling piece; the spawn cell is not checked for overlap."""
    index = rng.next_u32() % len(CATALOG)
    return Tetromino(kind=TetrominoType(index), rotation=0, x=SPAWN_X, y=SPAWN_Y)
