"""
Memory tape for the Brainfuck engine.

A fixed number of integer cells held in a numpy int64 array, addressed
circularly through a single data pointer. Cell values are bounded to
[min_value, max_value]; an increment or decrement that would leave that
range is refused and the cell keeps its old value.
"""

from typing import Optional, Tuple

import numpy as np

DEFAULT_TAPE_SIZE = 30000
MAX_SAFE_INTEGER = 2 ** 53 - 1
MIN_SAFE_INTEGER = -MAX_SAFE_INTEGER

_INT64 = np.iinfo(np.int64)


class CellBoundsError(ArithmeticError):
    """A cell update would leave the configured value range."""

    def __init__(self, pointer: int, value: int, limit: int):
        super().__init__(f"cell[{pointer}] = {value} is outside the limit {limit}")
        self.pointer = pointer
        self.value = value
        self.limit = limit


class CellOverflow(CellBoundsError):
    pass


class CellUnderflow(CellBoundsError):
    pass


def check_tape_settings(size: int, min_value: int, max_value: int) -> None:
    """Raise ValueError if the tape could not be built with these settings."""
    if not isinstance(size, int) or size < 1:
        raise ValueError(f"tape size must be a positive integer, got {size!r}")
    if min_value > max_value:
        raise ValueError(f"min_value {min_value} is greater than max_value {max_value}")
    if min_value > 0 or max_value < 0:
        # Cells start at zero, so zero has to be a legal value
        raise ValueError(f"value range [{min_value}, {max_value}] must contain 0")
    if min_value < _INT64.min or max_value > _INT64.max:
        raise ValueError(f"value range [{min_value}, {max_value}] does not fit in 64-bit cells")


class Tape:
    def __init__(self, size: int = DEFAULT_TAPE_SIZE,
                 min_value: int = MIN_SAFE_INTEGER,
                 max_value: int = MAX_SAFE_INTEGER):
        check_tape_settings(size, min_value, max_value)
        self.size = size
        self.min_value = min_value
        self.max_value = max_value
        self.cells = np.zeros(size, dtype=np.int64)
        self.pointer = 0

    def __len__(self) -> int:
        return self.size

    def clear(self) -> None:
        self.cells.fill(0)
        self.pointer = 0

    def move_right(self) -> None:
        self.pointer = (self.pointer + 1) % self.size

    def move_left(self) -> None:
        self.pointer = (self.pointer - 1 + self.size) % self.size

    def read(self) -> int:
        return int(self.cells[self.pointer])

    def write(self, value: int) -> None:
        """Store value in the current cell, refusing values out of range."""
        if value > self.max_value:
            raise CellOverflow(self.pointer, value, self.max_value)
        if value < self.min_value:
            raise CellUnderflow(self.pointer, value, self.min_value)
        self.cells[self.pointer] = value

    def increment(self) -> None:
        self.write(self.read() + 1)

    def decrement(self) -> None:
        self.write(self.read() - 1)

    def window(self, radius: Optional[int] = None) -> Tuple[int, np.ndarray]:
        """Return (start, view) for the cells around the pointer.

        With no radius the view is the whole tape. Otherwise it covers
        [pointer - radius, pointer + radius], clamped to the tape ends
        (no wraparound). The view shares memory with the tape.
        """
        if radius is None:
            return 0, self.cells[:]
        if radius < 0:
            raise ValueError(f"window radius must be >= 0, got {radius}")
        start = max(0, self.pointer - radius)
        end = min(self.size, self.pointer + radius + 1)
        return start, self.cells[start:end]
