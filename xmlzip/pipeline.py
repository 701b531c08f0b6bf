"""End-to-end split of an XML source into a zip archive."""

from __future__ import annotations

from pathlib import Path

from xmlzip.models import SplitConfig, SplitReport
from xmlzip.sources.event_source import is_url, split_file, split_url
from xmlzip.splitting.engine import SplitterStateMachine
from xmlzip.storage.zip_sink import ZipArchiveSink


def split_to_zip(source: str | Path, output: Path, config: SplitConfig) -> SplitReport:
    """Split an XML document into a zip of standalone fragments.

    Args:
        source: Path to an XML file, or an http(s) URL
        output: Zip file to create (overwritten if it exists)
        config: Split settings

    Returns:
        Report describing the fragments written
    """
    splitter = SplitterStateMachine(config, ZipArchiveSink(output))

    if isinstance(source, str) and is_url(source):
        return split_url(source, splitter)
    return split_file(Path(source), splitter)
