"""Grid coordinates."""

from __future__ import annotations

from typing import NamedTuple


class Location(NamedTuple):
    """
    Immutable (row, col) position in the field.

    Compared and hashed by value, so it can key dictionaries and sets.
    """
    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.row},{self.col}"
