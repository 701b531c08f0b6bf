"""Event sources that turn XML bytes into document events."""

from xmlzip.sources.event_source import (
    ParserTarget,
    feed_chunks,
    is_url,
    split_file,
    split_stream,
    split_tag,
    split_url,
)

__all__ = [
    "ParserTarget",
    "feed_chunks",
    "is_url",
    "split_file",
    "split_stream",
    "split_tag",
    "split_url",
]
