"""Streaming event source built on lxml's parser target interface."""

from __future__ import annotations

import functools
from collections.abc import Iterable
from pathlib import Path
from typing import IO, Any
from xml.sax.saxutils import escape

import requests
from lxml import etree

from xmlzip.config import CHUNK_SIZE, HTTP_TIMEOUT
from xmlzip.logging_config import logger
from xmlzip.splitting.protocols import DocumentEventHandler


def split_tag(tag: str) -> tuple[str, str | None]:
    """Split a Clark-notation tag into local name and namespace.

    Args:
        tag: Tag like "{urn:x}record" or "record"

    Returns:
        Tuple of (local name, namespace URI or None)
    """
    if tag.startswith("{") and "}" in tag:
        namespace, local_name = tag[1:].split("}", 1)
        return local_name, namespace or None
    return tag, None


class ParserTarget:
    """lxml parser target that forwards parse events to a document handler.

    Character data is escaped before it is forwarded, so handlers can
    write it verbatim. Comments and processing instructions are dropped.
    """

    def __init__(self, handler: DocumentEventHandler) -> None:
        self._handler = handler

    def start(self, tag: str, attrib: Any) -> None:
        local_name, namespace = split_tag(tag)
        self._handler.on_element_start(local_name, namespace)

    def end(self, tag: str) -> None:
        local_name, _ = split_tag(tag)
        self._handler.on_element_end(local_name)

    def data(self, data: str) -> None:
        self._handler.on_text(escape(data))

    def close(self) -> None:
        # lxml calls close on failed parses too; feed_chunks ends the document
        return None


def _make_parser(handler: DocumentEventHandler) -> etree.XMLParser:
    return etree.XMLParser(
        target=ParserTarget(handler),
        huge_tree=True,
        resolve_entities=False,
    )


def feed_chunks(chunks: Iterable[bytes], handler: DocumentEventHandler) -> Any:
    """Parse a document delivered in byte chunks.

    Args:
        chunks: Consecutive pieces of the document
        handler: Receiver of the document events

    Returns:
        Whatever the handler returns from on_document_end

    Raises:
        lxml.etree.XMLSyntaxError: If the document is not well-formed
    """
    parser = _make_parser(handler)
    handler.on_document_start()
    try:
        for chunk in chunks:
            if chunk:
                parser.feed(chunk)
        parser.close()
        return handler.on_document_end()
    except Exception:
        handler.abort()
        raise


def split_stream(
    stream: IO[bytes],
    handler: DocumentEventHandler,
    chunk_size: int = CHUNK_SIZE,
) -> Any:
    """Parse a binary stream chunk by chunk."""
    return feed_chunks(iter(functools.partial(stream.read, chunk_size), b""), handler)


def split_file(path: Path, handler: DocumentEventHandler) -> Any:
    """Parse an XML file without loading it whole.

    Args:
        path: XML document on disk
        handler: Receiver of the document events

    Returns:
        Whatever the handler returns from on_document_end
    """
    with logger.indent_block(f"Reading {path}"):
        with open(path, "rb") as f:
            return split_stream(f, handler)


def split_url(url: str, handler: DocumentEventHandler) -> Any:
    """Download an XML document and parse it while it streams in.

    Args:
        url: http(s) location of the document
        handler: Receiver of the document events

    Returns:
        Whatever the handler returns from on_document_end

    Raises:
        requests.HTTPError: If download fails
    """
    response = requests.get(url, timeout=HTTP_TIMEOUT, stream=True)
    try:
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise requests.HTTPError(f"Failed to download {url}: {e}") from e

        with logger.indent_block(f"Downloading {url}"):
            return feed_chunks(response.iter_content(chunk_size=CHUNK_SIZE), handler)
    finally:
        response.close()


def is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")
