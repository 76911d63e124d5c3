from __future__ import annotations

from enum import IntEnum
from typing import Any


class Action(IntEnum):
    NONE = 0
    ROTATE_CW = 1
    ROTATE_CCW = 2
    LEFT = 3
    RIGHT = 4
    SOFT_DROP = 5
    HARD_DROP = 6
    PAUSE = 7

    @classmethod
    def coerce(cls, value: Any) -> "Action":
        """Map arbitrary input to an Action; anything unrecognised is NONE."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.__members__.get(value.upper(), cls.NONE)
        try:
            return cls(int(value))
        except (TypeError, ValueError, OverflowError):
            return cls.NONE


# Everything the falling piece responds to; PAUSE belongs to the phase machine.
MOVE_ACTIONS = tuple(a for a in Action if a is not Action.PAUSE)
