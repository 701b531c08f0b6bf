"""Zip archive sink for fragment entries."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import IO

from xmlzip.errors import SinkError
from xmlzip.logging_config import logger

# Failures raised by zipfile while creating, writing or closing an archive
ZIP_ERRORS = (OSError, ValueError, zipfile.BadZipFile, zipfile.LargeZipFile)


class ZipArchiveSink:
    """Writes each fragment as one entry of a zip archive.

    Entries are streamed through ZipFile.open(name, "w"), so no fragment
    is held in memory as a whole.
    """

    def __init__(
        self,
        target: Path | str | IO[bytes],
        compression: int = zipfile.ZIP_DEFLATED,
    ) -> None:
        """Initialize the sink.

        Args:
            target: Path of the zip file to create, or a writable binary file object
            compression: zipfile compression method
        """
        self._target = Path(target) if isinstance(target, str) else target
        self._compression = compression
        self._zip: zipfile.ZipFile | None = None
        self._handle: IO[bytes] | None = None

    @property
    def path(self) -> Path | None:
        return self._target if isinstance(self._target, Path) else None

    def open_container(self) -> None:
        if self._zip is not None:
            raise SinkError("Archive is already open")
        try:
            self._zip = zipfile.ZipFile(self._target, mode="w", compression=self._compression)
        except ZIP_ERRORS as e:
            raise SinkError(f"Error creating the zip file {self._target}: {e}") from e

    def open_entry(self, name: str) -> IO[bytes]:
        if self._zip is None:
            raise SinkError(f"Cannot open entry {name}: archive is not open")
        if self._handle is not None:
            raise SinkError(f"Cannot open entry {name}: another entry is still open")
        try:
            self._handle = self._zip.open(name, mode="w")
        except ZIP_ERRORS as e:
            raise SinkError(f"Error opening zip entry {name}: {e}") from e
        return self._handle

    def write_bytes(self, handle: IO[bytes], data: bytes) -> None:
        if handle is not self._handle or handle is None:
            raise SinkError("Write to an entry that is not open")
        try:
            handle.write(data)
        except ZIP_ERRORS as e:
            raise SinkError(f"Error writing to zip entry: {e}") from e

    def close_entry(self, handle: IO[bytes]) -> None:
        if handle is not self._handle or handle is None:
            raise SinkError("Close of an entry that is not open")
        self._handle = None
        try:
            handle.close()
        except ZIP_ERRORS as e:
            raise SinkError(f"Error closing zip entry: {e}") from e

    def close_container(self) -> None:
        if self._zip is None:
            raise SinkError("Archive is not open")
        if self._handle is not None:
            raise SinkError("Cannot close the archive while an entry is open")
        archive, self._zip = self._zip, None
        try:
            archive.close()
        except ZIP_ERRORS as e:
            raise SinkError(f"Error closing the zip file {self._target}: {e}") from e

    def abort(self) -> None:
        """Close everything and remove the partial archive file."""
        handle, self._handle = self._handle, None
        archive, self._zip = self._zip, None
        try:
            if handle is not None:
                handle.close()
            if archive is not None:
                archive.close()
        except ZIP_ERRORS as e:
            logger.warning(f"Error closing the partial zip file: {e}")

        if self.path is not None and self.path.exists():
            try:
                self.path.unlink()
            except OSError as e:
                raise SinkError(f"Error removing partial zip file {self.path}: {e}") from e
            logger.debug(f"Removed partial zip file {self.path}")
