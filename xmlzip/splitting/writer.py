"""Writer for the sequentially named fragment entries."""

from __future__ import annotations

from typing import Any

from xmlzip.config import DEFAULT_NAME_WIDTH, validate_name_width, validate_stem
from xmlzip.errors import FragmentNameOverflowError, SinkError
from xmlzip.logging_config import logger
from xmlzip.models import FragmentRecord
from xmlzip.splitting.protocols import FragmentSink

ENCODING = "utf-8"


def format_fragment_name(stem: str, index: int, width: int = DEFAULT_NAME_WIDTH) -> str:
    """Build the entry name for a fragment.

    Args:
        stem: Leading part of the name (e.g., "Part")
        index: 1-based fragment number
        width: Number of digits the index is zero-padded to

    Returns:
        Name like "Part-0001.xml"

    Raises:
        FragmentNameOverflowError: If index needs more than width digits
    """
    if index >= 10**width:
        raise FragmentNameOverflowError(index, width)
    return f"{stem}-{index:0{width}d}.xml"


class FragmentWriter:
    """Owns the single open entry of the output archive.

    Opening a fragment seals the previous one first, so entries are
    never interleaved.
    """

    def __init__(
        self,
        sink: FragmentSink,
        stem: str,
        width: int = DEFAULT_NAME_WIDTH,
    ) -> None:
        """Initialize the writer.

        Args:
            sink: Archive receiving the entries
            stem: Leading part of every entry name
            width: Zero-padding width of the fragment index
        """
        validate_stem(stem)
        validate_name_width(width)
        self._sink = sink
        self._stem = stem
        self._width = width
        self._handle: Any = None
        self._name: str | None = None
        self._split_count = 0
        self.index = 0
        self.records: list[FragmentRecord] = []

    @property
    def is_open(self) -> bool:
        return self._name is not None

    @property
    def current_name(self) -> str | None:
        return self._name

    def open_fragment(self) -> str:
        """Seal the open fragment, if any, and start the next one.

        Returns:
            Name of the new entry
        """
        if self.is_open:
            self.seal()

        name = format_fragment_name(self._stem, self.index + 1, self._width)
        self.index += 1
        try:
            self._handle = self._sink.open_entry(name)
        except OSError as e:
            raise SinkError(f"Error opening entry {name}: {e}") from e
        self._name = name
        self._split_count = 0
        logger.debug(f"Opened {name}")
        return name

    def write(self, text: str) -> None:
        """Append text to the open fragment."""
        if not self.is_open:
            raise SinkError("No fragment is open for writing")
        if not text:
            return
        try:
            self._sink.write_bytes(self._handle, text.encode(ENCODING))
        except OSError as e:
            raise SinkError(f"Error writing to entry {self._name}: {e}") from e

    def mark_split(self) -> None:
        """Count a split element written to the open fragment."""
        self._split_count += 1

    def seal(self) -> FragmentRecord:
        """Finalize the open fragment.

        Returns:
            Record describing the sealed fragment
        """
        if not self.is_open:
            raise SinkError("No fragment is open to seal")
        name = self._name
        try:
            self._sink.close_entry(self._handle)
        except OSError as e:
            raise SinkError(f"Error closing entry {name}: {e}") from e
        record = FragmentRecord(name=name, index=self.index, split_count=self._split_count)
        self.records.append(record)
        self._handle = None
        self._name = None
        logger.debug(f"Sealed {name} ({record.split_count} split elements)")
        return record
