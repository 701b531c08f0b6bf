"""Exception hierarchy for xmlzip."""

from __future__ import annotations


class XmlZipError(Exception):
    """Base class for all xmlzip errors."""


class ConfigError(XmlZipError, ValueError):
    """Raised when a split configuration value is invalid."""


class SinkError(XmlZipError):
    """Raised when the output archive cannot be created, written or closed."""


class MalformedStreamError(XmlZipError):
    """Raised when document events arrive out of lifecycle order."""


class MalformedNestingError(MalformedStreamError):
    """Raised when an end event does not match the innermost open element."""

    def __init__(self, expected: str | None, actual: str) -> None:
        """Initialize the error.

        Args:
            expected: Name on top of the nesting stack (None if empty)
            actual: Name carried by the end event
        """
        self.expected = expected
        self.actual = actual
        if expected is None:
            msg = f"End of <{actual}> with no open element"
        else:
            msg = f"End of <{actual}> while <{expected}> is open"
        super().__init__(msg)


class UnclosedElementsError(MalformedStreamError):
    """Raised at document end when elements are still open."""

    def __init__(self, open_path: tuple[str, ...]) -> None:
        self.open_path = open_path
        super().__init__(
            f"Document ended with unclosed elements: {'/'.join(open_path)}"
        )


class FragmentNameOverflowError(XmlZipError):
    """Raised when a fragment index no longer fits the configured name width."""

    def __init__(self, index: int, width: int) -> None:
        self.index = index
        self.width = width
        super().__init__(
            f"Fragment index {index} does not fit in {width} digits; "
            "increase the name width"
        )
