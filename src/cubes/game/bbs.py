from __future__ import annotations

"""
Blum Blum Shub pseudo-random generator.

The generator state is the current residue modulo N = P * Q. Every draw squares
the residue and hands out its low 32 bits. The state lives on a
``BlumBlumShub`` instance owned by whoever draws from it; there is no module
level seed.

The residue is never truncated to 32 bits between draws. A generator that
squares a 32-bit state agrees with this one for the first five draws from
seed 3 and then drifts (sixth draw 1482534958 there, 4056538462 here); that
variant also collapses to the zero state within a few dozen draws for most
seeds, which is why the full residue is kept.
"""

import logging
import os
import random
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

P = 4294967311
Q = 1062232319
N = P * Q

U32_MASK = 0xFFFFFFFF


def seed_init() -> int:
    """Return an unpredictable 32-bit seed.

    Reads the OS entropy source and falls back to the current time when the
    source is missing or hands back zero.
    """
    try:
        seed = int.from_bytes(os.urandom(4), "little")
    except NotImplementedError:
        seed = 0
    if seed != 0:
        return seed
    logger.warning("entropy source unavailable, seeding from the clock")
    return (int(time.time()) & U32_MASK) or 1


def bbs_step(state: int) -> int:
    """Advance the recurrence ``state' = state**2 mod N``."""
    return (state * state) % N


class BlumBlumShub:
    """Seeded BBS stream.

    ``seed=None`` defers seeding to the first draw. A zero state is degenerate
    (0**2 mod N == 0) so it is replaced from ``seed_source`` whenever it shows up.
    """

    def __init__(self, seed: Optional[int] = None, seed_source: Callable[[], int] = seed_init) -> None:
        self.seed_source = seed_source
        self.seed: Optional[int] = None if seed is None else int(seed) & U32_MASK
        self.state: Optional[int] = self.seed

    def reseed(self) -> int:
        self.seed = int(self.seed_source()) & U32_MASK
        self.state = self.seed
        logger.debug("bbs reseeded with %d", self.seed)
        return self.seed

    def next_u32(self) -> int:
        if not self.state:
            self.reseed()
        state = bbs_step(self.state)
        while state == 0:
            self.reseed()
            state = bbs_step(self.state)
        self.state = state
        return state & U32_MASK

    def next_unit_float(self) -> float:
        return self.next_u32() / float(U32_MASK)


def run_bbs_demo(iterations: int = 1_000_000) -> None:  # pragma: no cover
    rng = BlumBlumShub()
    start = time.perf_counter()
    for _ in range(iterations):
        rng.next_unit_float()
    bbs_time = time.perf_counter() - start
    print(f"BBS Time: {bbs_time:f} seconds")

    start = time.perf_counter()
    for _ in range(iterations):
        random.random()
    rand_time = time.perf_counter() - start
    print(f"random() Time: {rand_time:f} seconds")

    block_count = 7
    for _ in range(10):
        selected_block = int(rng.next_unit_float() * block_count)
        print(f"Generated Block Index: {selected_block}")


if __name__ == "__main__":  # pragma: no cover
    run_bbs_demo()
