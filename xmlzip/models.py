"""Data models for xmlzip."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from xml.sax.saxutils import escape

from xmlzip.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_NAME_WIDTH,
    DEFAULT_STEM,
    validate_batch_size,
    validate_element_name,
    validate_name_width,
    validate_stem,
)


class MismatchPolicy(str, Enum):
    """What to do with an end event that does not close the innermost element."""

    STRICT = "strict"
    SKIP = "skip"


class UnclosedPolicy(str, Enum):
    """What to do when the document ends with elements still open."""

    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class ElementName:
    """Name of an XML element as delivered by the event source."""

    local_name: str
    namespace: str | None = None

    def opening_tag(self, with_namespace: bool = False) -> str:
        """Render the opening tag, declaring the namespace when asked."""
        if with_namespace and self.namespace:
            namespace = escape(self.namespace, {'"': "&quot;"})
            return f'<{self.local_name} xmlns="{namespace}">'
        return f"<{self.local_name}>"


@dataclass
class SplitConfig:
    """Settings for one split run."""

    split_element: str
    batch_size: int = DEFAULT_BATCH_SIZE
    stem: str = DEFAULT_STEM
    name_width: int = DEFAULT_NAME_WIDTH
    on_mismatch: MismatchPolicy = MismatchPolicy.STRICT
    on_unclosed: UnclosedPolicy = UnclosedPolicy.WARN

    def __post_init__(self) -> None:
        validate_element_name(self.split_element)
        validate_batch_size(self.batch_size)
        validate_stem(self.stem)
        validate_name_width(self.name_width)
        self.on_mismatch = MismatchPolicy(self.on_mismatch)
        self.on_unclosed = UnclosedPolicy(self.on_unclosed)


@dataclass
class FragmentRecord:
    """A sealed fragment in the output archive."""

    name: str
    index: int
    split_count: int


@dataclass
class SplitReport:
    """Summary of a completed split run."""

    split_element: str
    batch_size: int
    fragments: list[FragmentRecord] = field(default_factory=list)

    @property
    def total_split_elements(self) -> int:
        return sum(fragment.split_count for fragment in self.fragments)

    @property
    def fragment_names(self) -> list[str]:
        return [fragment.name for fragment in self.fragments]
