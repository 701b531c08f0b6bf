"""Tracking of open elements between the root and the current position."""

from __future__ import annotations

from xmlzip.errors import MalformedNestingError
from xmlzip.logging_config import logger
from xmlzip.models import MismatchPolicy


class NestingTracker:
    """Ordered stack of open element names.

    After every event the stack equals the path from the document root to
    the current position. Fragment boundaries never mutate it: closing tags
    for a sealed fragment are rendered from a copy.
    """

    def __init__(self, on_mismatch: MismatchPolicy = MismatchPolicy.STRICT) -> None:
        """Initialize an empty tracker.

        Args:
            on_mismatch: Policy for end events that do not match the top of stack
        """
        self._stack: list[str] = []
        self._on_mismatch = MismatchPolicy(on_mismatch)

    def push(self, name: str) -> None:
        self._stack.append(name)

    def pop(self, name: str) -> bool:
        """Close the innermost element.

        Args:
            name: Local name carried by the end event

        Returns:
            True if the element was popped, False if the mismatch was skipped

        Raises:
            MalformedNestingError: On a mismatch under the strict policy
        """
        top = self.peek()
        if top == name:
            self._stack.pop()
            return True

        if self._on_mismatch is MismatchPolicy.STRICT:
            raise MalformedNestingError(top, name)

        logger.warning(
            f"Skipping end of <{name}>: innermost open element is <{top}>"
        )
        return False

    def peek(self) -> str | None:
        """Return the innermost open element, or None when nothing is open."""
        return self._stack[-1] if self._stack else None

    def close_all_open(self) -> str:
        """Render closing tags for every open element, innermost first.

        The stack itself is left untouched so the same path can be
        resumed in the next fragment.
        """
        return "".join(f"</{name}>" for name in reversed(self._stack))

    def clear(self) -> None:
        self._stack.clear()

    @property
    def path(self) -> tuple[str, ...]:
        """Open elements from the root down."""
        return tuple(self._stack)

    @property
    def depth(self) -> int:
        return len(self._stack)

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)
