"""Shared test fixtures for xmlzip tests."""

import logging
import zipfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from xmlzip.models import SplitConfig
from xmlzip.sources.event_source import feed_chunks
from xmlzip.splitting.engine import SplitterStateMachine


# Shared fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


class RecordingSink:
    """In-memory FragmentSink that keeps every entry and call.

    Set fail_on to a method name ("open_container", "open_entry",
    "write_bytes", "close_entry", "close_container") to make that call
    raise OSError.
    """

    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.entries: dict[str, bytes] = {}
        self.calls: list[str] = []
        self.container_open = False
        self.container_closed = False
        self.aborted = False
        self._current: str | None = None
        self._buffer = bytearray()

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_on == name:
            raise OSError(f"simulated failure in {name}")

    def open_container(self) -> None:
        self._call("open_container")
        self.entries = {}
        self.container_open = True
        self.container_closed = False
        self.aborted = False

    def open_entry(self, name: str) -> str:
        self._call("open_entry")
        assert self._current is None, "two entries open at once"
        self._current = name
        self._buffer = bytearray()
        return name

    def write_bytes(self, handle: str, data: bytes) -> None:
        self._call("write_bytes")
        assert handle == self._current
        self._buffer.extend(data)

    def close_entry(self, handle: str) -> None:
        self._call("close_entry")
        assert handle == self._current
        self.entries[handle] = bytes(self._buffer)
        self._current = None

    def close_container(self) -> None:
        self._call("close_container")
        self.container_closed = True

    def abort(self) -> None:
        self.calls.append("abort")
        self.aborted = True
        self._current = None

    def text(self, name: str) -> str:
        return self.entries[name].decode("utf-8")


def make_records_xml(
    count: int,
    split_element: str = "record",
    namespace: str | None = None,
) -> bytes:
    """Build a document with front matter and count split elements."""
    root_open = f'<records xmlns="{namespace}">' if namespace else "<records>"
    records = "".join(
        f"<{split_element}><id>{i}</id></{split_element}>" for i in range(1, count + 1)
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f"{root_open}<frontMatter><title>Test</title></frontMatter>"
        f"<nested>{records}</nested></records>"
    ).encode("utf-8")


def read_zip(path: Path) -> dict[str, bytes]:
    """Return all entries of a zip file in archive order."""
    with zipfile.ZipFile(path) as archive:
        return {name: archive.read(name) for name in archive.namelist()}


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def records_xml():
    """Factory fixture returning make_records_xml."""
    return make_records_xml


@pytest.fixture
def zip_entries():
    """Factory fixture returning read_zip."""
    return read_zip


@pytest.fixture
def run_split():
    """Factory fixture that splits XML bytes into a RecordingSink.

    Usage:
        def test_example(run_split):
            sink, report = run_split(b"<root>...</root>", SplitConfig("record"))
    """

    def _run(xml: bytes, config: SplitConfig, sink: RecordingSink | None = None):
        sink = sink if sink is not None else RecordingSink()
        report = feed_chunks([xml], SplitterStateMachine(config, sink))
        return sink, report

    return _run


@pytest.fixture
def mock_http_response():
    """Factory fixture to create mock streaming HTTP responses.

    Usage:
        def test_example(mock_http_response):
            response = mock_http_response(b"<xml>content</xml>")
            # response.iter_content() yields the content
            # response.raise_for_status() does nothing
    """

    def _create_response(content: bytes, chunk_size: int = 16) -> Mock:
        response = Mock()
        response.content = content
        response.raise_for_status = Mock()
        response.iter_content = Mock(
            return_value=[
                content[i : i + chunk_size] for i in range(0, len(content), chunk_size)
            ]
        )
        return response

    return _create_response


@pytest.fixture(autouse=True)
def reset_xmlzip_logger():
    """Drop handlers installed by setup_logging during a test."""
    yield
    base_logger = logging.getLogger("xmlzip")
    base_logger.handlers = []
    base_logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_sink():
    """Factory fixture returning the RecordingSink class."""
    return RecordingSink
