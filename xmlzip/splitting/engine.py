"""State machine that splits a stream of document events into fragments."""

from __future__ import annotations

import functools
from enum import Enum, auto

from xmlzip.config import XML_PROLOG
from xmlzip.errors import MalformedStreamError, SinkError, UnclosedElementsError
from xmlzip.logging_config import logger
from xmlzip.models import ElementName, SplitConfig, SplitReport, UnclosedPolicy
from xmlzip.splitting.batch import BatchCounter
from xmlzip.splitting.front_matter import FrontMatterRecorder
from xmlzip.splitting.nesting import NestingTracker
from xmlzip.splitting.protocols import FragmentSink
from xmlzip.splitting.writer import FragmentWriter


class SplitterState(Enum):
    """Lifecycle of a SplitterStateMachine."""

    READY = auto()  # Constructed, no document yet
    BEFORE_ROOT = auto()  # Document started, root not seen
    IN_FRONT_MATTER = auto()  # Root seen, no split element yet
    IN_BATCH = auto()  # Writing split elements
    CLOSED = auto()  # Archive finalized
    ABORTED = auto()  # Fatal error, partial archive discarded


def _abort_on_error(method):
    """Abort the run when an event handler raises."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except Exception as e:
            self._abort(e)
            raise

    return wrapper


class SplitterStateMachine:
    """Splits a document into fragments of at most batch_size split elements.

    Receives document events in order and writes fragments through a
    FragmentWriter. Each fragment starts with the XML prolog, the root
    opening tag and the front matter (everything between the root and the
    first split element), followed by up to batch_size split elements, and
    ends with closing tags for every element still open.

    The nesting tracker holds the logical document path and is only changed
    by begin and end events. At a boundary the open elements of the sealed
    fragment are closed from that path; the new fragment re-opens them by
    replaying the front matter.
    """

    def __init__(self, config: SplitConfig, sink: FragmentSink) -> None:
        """Initialize the state machine.

        Args:
            config: Split settings
            sink: Archive that receives the fragments
        """
        self._config = config
        self._sink = sink
        self.state = SplitterState.READY
        self._reset()

    def _reset(self) -> None:
        config = self._config
        self._path = NestingTracker(config.on_mismatch)
        self._front_matter = FrontMatterRecorder()
        self._counter = BatchCounter(config.batch_size)
        self._writer = FragmentWriter(self._sink, config.stem, config.name_width)
        self._root: ElementName | None = None
        self._root_declaration = ""
        self._root_closed = False

    @property
    def path(self) -> tuple[str, ...]:
        """Logical path from the root to the current position."""
        return self._path.path

    @property
    def front_matter(self) -> str:
        return self._front_matter.text

    @property
    def fragment_index(self) -> int:
        return self._writer.index

    @property
    def report(self) -> SplitReport:
        """Summary of the fragments sealed so far."""
        return SplitReport(
            split_element=self._config.split_element,
            batch_size=self._config.batch_size,
            fragments=list(self._writer.records),
        )

    # Document events

    @_abort_on_error
    def on_document_start(self) -> None:
        """Reset all state and create the output archive."""
        if self.state not in (
            SplitterState.READY,
            SplitterState.CLOSED,
            SplitterState.ABORTED,
        ):
            raise MalformedStreamError("Document started twice")

        self._reset()
        try:
            self._sink.open_container()
        except OSError as e:
            raise SinkError(f"Error creating the archive: {e}") from e
        self.state = SplitterState.BEFORE_ROOT
        logger.debug(
            f"Splitting on <{self._config.split_element}>, "
            f"{self._config.batch_size} per fragment"
        )

    @_abort_on_error
    def on_element_start(self, local_name: str, namespace: str | None = None) -> None:
        self._check_in_document("element start")

        if self.state is SplitterState.BEFORE_ROOT:
            self._start_root(ElementName(local_name, namespace))
            return

        if self._root_closed:
            raise MalformedStreamError(
                f"Element <{local_name}> after the root element was closed"
            )

        if local_name == self._config.split_element:
            self._start_split_element(local_name)
        else:
            self._writer.write(f"<{local_name}>")
            if self._front_matter.recording:
                self._front_matter.record_start(local_name)

        self._path.push(local_name)

    @_abort_on_error
    def on_element_end(self, local_name: str) -> None:
        self._check_in_document("element end")
        if self.state is SplitterState.BEFORE_ROOT:
            raise MalformedStreamError(f"End of <{local_name}> before the root element")

        if not self._path.pop(local_name):
            # Skipped mismatch: the element stays open in the fragment too
            return

        if not self._path:
            self._root_closed = True
        elif self._front_matter.recording:
            self._front_matter.record_end(local_name)

        self._writer.write(f"</{local_name}>")

    @_abort_on_error
    def on_text(self, chars: str) -> None:
        self._check_in_document("text")

        if self.state is SplitterState.BEFORE_ROOT or self._root_closed:
            # Only whitespace may surround the root element
            if chars.strip():
                raise MalformedStreamError(
                    f"Text outside the root element: {chars.strip()[:40]!r}"
                )
            return

        if self._front_matter.recording:
            self._front_matter.record_text(chars)
        self._writer.write(chars)

    @_abort_on_error
    def on_document_end(self) -> SplitReport:
        """Seal the last fragment and finalize the archive.

        Returns:
            Report of all fragments written
        """
        self._check_in_document("document end")
        if self.state is SplitterState.BEFORE_ROOT:
            raise MalformedStreamError("Document has no root element")

        if self._path:
            open_path = self._path.path
            if self._config.on_unclosed is UnclosedPolicy.ERROR:
                raise UnclosedElementsError(open_path)
            logger.warning(
                f"Document ended with unclosed elements: {'/'.join(open_path)}"
            )
            self._writer.write(self._path.close_all_open())
            self._path.clear()

        self._writer.seal()
        try:
            self._sink.close_container()
        except OSError as e:
            raise SinkError(f"Error closing the archive: {e}") from e

        self.state = SplitterState.CLOSED
        report = self.report
        logger.info(
            f"Wrote {len(report.fragments)} fragments with "
            f"{report.total_split_elements} <{report.split_element}> elements"
        )
        return report

    def abort(self) -> None:
        """Discard the partial archive after a failure in the event source."""
        self._abort(None)

    # Transitions

    def _start_root(self, root: ElementName) -> None:
        self._root = root
        self._root_declaration = XML_PROLOG + root.opening_tag(with_namespace=True)
        self._path.push(root.local_name)

        self._writer.open_fragment()
        self._writer.write(self._root_declaration)

        self._front_matter.start()
        self.state = SplitterState.IN_FRONT_MATTER

    def _start_split_element(self, local_name: str) -> None:
        if self._counter.register():
            self._cross_boundary()

        if self._front_matter.recording:
            self._front_matter.freeze()
            self.state = SplitterState.IN_BATCH
            logger.debug(
                f"Front matter captured ({len(self._front_matter.text)} characters)"
            )

        self._writer.write(f"<{local_name}>")
        self._writer.mark_split()

    def _cross_boundary(self) -> None:
        """Seal the current fragment and open the next one."""
        sealed = self._writer.current_name
        with logger.indent_block(f"Batch limit reached in {sealed}"):
            self._writer.write(self._path.close_all_open())
            self._writer.seal()

            self._writer.open_fragment()
            self._writer.write(self._root_declaration)
            self._writer.write(self._front_matter.text)
            self._resume_path()

    def _resume_path(self) -> None:
        """Bring the new fragment's open elements in line with the document path.

        The front matter re-opens the ancestors of the first split element.
        When the current split element lives elsewhere, the diverging part is
        closed and the current path opened instead.
        """
        reopened = [self._root.local_name, *self._front_matter.open_path]
        target = list(self._path.path)

        common = 0
        for have, want in zip(reopened, target):
            if have != want:
                break
            common += 1

        if common == len(reopened) == len(target):
            return

        closing = "".join(f"</{name}>" for name in reversed(reopened[common:]))
        opening = "".join(f"<{name}>" for name in target[common:])
        logger.debug(f"Re-opening path {'/'.join(target)}")
        self._writer.write(closing + opening)

    def _check_in_document(self, event: str) -> None:
        if self.state is SplitterState.READY:
            raise MalformedStreamError(f"Received {event} before document start")
        if self.state in (SplitterState.CLOSED, SplitterState.ABORTED):
            raise MalformedStreamError(
                f"Received {event} after the document was {self.state.name.lower()}"
            )

    def _abort(self, error: BaseException | None) -> None:
        if self.state in (SplitterState.CLOSED, SplitterState.ABORTED):
            return
        self.state = SplitterState.ABORTED
        if error is not None:
            logger.error(f"Split aborted: {error}")
        else:
            logger.error("Split aborted by the event source")
        try:
            self._sink.abort()
        except (OSError, SinkError) as abort_error:
            logger.error(f"Error discarding the partial archive: {abort_error}")
