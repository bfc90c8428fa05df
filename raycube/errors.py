"""Error type and clock helper shared across the game."""

from __future__ import annotations

import time


class CubError(Exception):
    """A fatal problem with the map, the arguments or the game resources."""

    def __init__(self, context: str, message: str) -> None:
        super().__init__(context, message)
        self.context = context
        self.message = message

    def __str__(self) -> str:
        return f"cub3D: {self.context}: {self.message}"


def get_time() -> int:
    """Return the current wall-clock time in tenths of a second."""
    return time.time_ns() // 100_000_000