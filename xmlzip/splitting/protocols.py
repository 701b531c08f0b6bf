"""Protocols for the collaborators around the splitter."""

from __future__ import annotations

from typing import Any, Protocol


class DocumentEventHandler(Protocol):
    """Receiver of structural document events.

    Event sources call these methods synchronously, in document order.
    """

    def on_document_start(self) -> None:
        """Called once before any element event."""
        ...

    def on_element_start(self, local_name: str, namespace: str | None = None) -> None:
        """Called for every opening tag.

        Args:
            local_name: Element name without namespace prefix
            namespace: Namespace URI, or None when the element has none
        """
        ...

    def on_element_end(self, local_name: str) -> None:
        """Called for every closing tag."""
        ...

    def on_text(self, chars: str) -> None:
        """Called for character data.

        Args:
            chars: Text already escaped for verbatim output
        """
        ...

    def on_document_end(self) -> Any:
        """Called once after the last event; returns the handler's result."""
        ...

    def abort(self) -> None:
        """Called when the source fails; discards partial output."""
        ...


class FragmentSink(Protocol):
    """Archive that receives the named fragment entries.

    At most one entry is open at a time.
    """

    def open_container(self) -> None:
        """Create the archive. Must be called before any entry is opened."""
        ...

    def open_entry(self, name: str) -> Any:
        """Start a new entry and return a handle for writing to it."""
        ...

    def write_bytes(self, handle: Any, data: bytes) -> None:
        """Append data to the entry behind handle."""
        ...

    def close_entry(self, handle: Any) -> None:
        """Finalize the entry behind handle."""
        ...

    def close_container(self) -> None:
        """Finalize the archive."""
        ...

    def abort(self) -> None:
        """Release resources and discard the partial archive."""
        ...
