"""Splitting of document event streams into standalone fragments.

The state machine tracks open elements, captures the front matter that
precedes the first split element and starts a new fragment whenever the
configured number of split elements has been written.
"""

from xmlzip.splitting.batch import BatchCounter
from xmlzip.splitting.engine import SplitterState, SplitterStateMachine
from xmlzip.splitting.front_matter import FrontMatterRecorder
from xmlzip.splitting.nesting import NestingTracker
from xmlzip.splitting.protocols import DocumentEventHandler, FragmentSink
from xmlzip.splitting.writer import FragmentWriter, format_fragment_name

__all__ = [
    "BatchCounter",
    "DocumentEventHandler",
    "FragmentSink",
    "FragmentWriter",
    "FrontMatterRecorder",
    "NestingTracker",
    "SplitterState",
    "SplitterStateMachine",
    "format_fragment_name",
]
