"""Recorder for the content that precedes the first split element."""

from __future__ import annotations

from xmlzip.errors import MalformedStreamError


class FrontMatterRecorder:
    """Verbatim replica of the events between the root and the first split element.

    The recorder starts recording when the root is opened and is frozen
    exactly once, when the first split element begins. The frozen text is
    replayed unmodified after the root opening tag of every later fragment.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._open: list[str] = []
        self._recording = False
        self._frozen = False
        self._text: str | None = None

    def start(self) -> None:
        """Begin recording. Called once the root element has been opened."""
        if self._frozen:
            raise MalformedStreamError("Front matter is frozen and cannot restart")
        self._recording = True

    def record_start(self, name: str) -> None:
        self._check_recording()
        self._parts.append(f"<{name}>")
        self._open.append(name)

    def record_end(self, name: str) -> None:
        self._check_recording()
        self._parts.append(f"</{name}>")
        if self._open and self._open[-1] == name:
            self._open.pop()

    def record_text(self, chars: str) -> None:
        self._check_recording()
        self._parts.append(chars)

    def freeze(self) -> None:
        """Stop recording for good."""
        self._recording = False
        self._frozen = True
        self._text = "".join(self._parts)
        self._parts = [self._text]

    @property
    def recording(self) -> bool:
        return self._recording

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def text(self) -> str:
        """The recorded front matter."""
        if self._text is not None:
            return self._text
        return "".join(self._parts)

    @property
    def open_path(self) -> tuple[str, ...]:
        """Elements the front matter leaves open, outermost first.

        These are the ancestors of the first split element below the root.
        """
        return tuple(self._open)

    def _check_recording(self) -> None:
        if not self._recording:
            raise MalformedStreamError("Front matter is not being recorded")
