"""Tests for FrontMatterRecorder."""

import pytest

from xmlzip.errors import MalformedStreamError
from xmlzip.splitting import FrontMatterRecorder


def make_recorder() -> FrontMatterRecorder:
    recorder = FrontMatterRecorder()
    recorder.start()
    return recorder


class TestFrontMatterRecording:
    """Verbatim capture of events before the first split element."""

    def test_records_events_in_order(self) -> None:
        recorder = make_recorder()
        recorder.record_text("\n  ")
        recorder.record_start("frontMatter")
        recorder.record_text("Title &amp; more")
        recorder.record_end("frontMatter")
        recorder.record_start("nested")

        assert recorder.text == "\n  <frontMatter>Title &amp; more</frontMatter><nested>"

    def test_open_path_lists_unclosed_ancestors(self) -> None:
        recorder = make_recorder()
        recorder.record_start("frontMatter")
        recorder.record_end("frontMatter")
        recorder.record_start("body")
        recorder.record_start("nested")

        assert recorder.open_path == ("body", "nested")

    def test_not_recording_before_start(self) -> None:
        recorder = FrontMatterRecorder()

        assert recorder.recording is False
        with pytest.raises(MalformedStreamError, match="not being recorded"):
            recorder.record_start("frontMatter")


class TestFrontMatterFreeze:
    """The recorder is frozen exactly once."""

    def test_freeze_keeps_text(self) -> None:
        recorder = make_recorder()
        recorder.record_start("nested")
        recorder.freeze()

        assert recorder.frozen is True
        assert recorder.recording is False
        assert recorder.text == "<nested>"

    def test_no_recording_after_freeze(self) -> None:
        recorder = make_recorder()
        recorder.freeze()

        with pytest.raises(MalformedStreamError):
            recorder.record_text("late")

    def test_cannot_restart_after_freeze(self) -> None:
        recorder = make_recorder()
        recorder.freeze()

        with pytest.raises(MalformedStreamError, match="frozen"):
            recorder.start()

    def test_empty_front_matter(self) -> None:
        recorder = make_recorder()
        recorder.freeze()

        assert recorder.text == ""
        assert recorder.open_path == ()
