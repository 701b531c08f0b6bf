"""Counting of split elements per fragment."""

from __future__ import annotations

from dataclasses import dataclass

from xmlzip.config import validate_batch_size


@dataclass
class BatchCounter:
    """Counts split elements in the current fragment.

    Example with batch_size=2: the third register() call returns True and
    the counter restarts at 1, because the element that overflowed the
    batch opens the next fragment.
    """

    batch_size: int
    count: int = 0
    total: int = 0

    def __post_init__(self) -> None:
        validate_batch_size(self.batch_size)

    def register(self) -> bool:
        """Count one split element.

        Returns:
            True if this element crosses a fragment boundary
        """
        self.total += 1
        self.count += 1
        if self.count > self.batch_size:
            self.count = 1
            return True
        return False

    def reset(self) -> None:
        self.count = 0
        self.total = 0
