"""Gymnasium environments for Cubes."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the falling-block environment (7 discrete actions)
register(
    id="Cubes-10x24-v0",
    entry_point="cubes.env.cubes_env:CubesEnv",
)

__all__ = ["Cubes-10x24-v0"]
