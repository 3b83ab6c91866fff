"""Streaming statement splitter that carries unterminated fragments across chunks."""

import codecs
from collections.abc import Iterable, Iterator

from sql_table_splitter.stream.types import COMMENT_PREFIXES, DELIMITER, Statement

# Keeps undecodable bytes intact so they are written back unchanged.
DECODE_ERRORS = "surrogateescape"

# Shift-state codecs can place the delimiter byte inside a multi-byte character.
STATEFUL_CODEC_PREFIXES = ("iso2022", "hz", "utf_7")


def is_valid_statement(text: str) -> bool:
    """
    Check whether a statement carries any SQL.

    A statement is valid if at least one of its lines is non-blank and does not
    start with a comment marker once trimmed.
    """
    for line in text.split("\n"):
        trimmed = line.strip()
        if trimmed and not trimmed.startswith(COMMENT_PREFIXES):
            return True
    return False


def check_encoding(encoding: str) -> None:
    """Raise ValueError unless the encoding is stateless and maps the delimiter to one byte."""
    try:
        codec_name = codecs.lookup(encoding).name.replace("-", "_")
        encoded = ";".encode(encoding)
    except LookupError:
        raise ValueError(f"unknown encoding {encoding!r}") from None
    if codec_name.startswith(STATEFUL_CODEC_PREFIXES):
        raise ValueError(f"encoding {encoding!r} is stateful and cannot be split on bytes")
    if encoded != DELIMITER:
        raise ValueError(f"encoding {encoding!r} is not ASCII-compatible")


class StatementSplitter:
    """
    Turn a stream of byte chunks into complete, trimmed statements.

    Pending bytes live in a single growable buffer. The scan cursor records how
    far that buffer has already been searched, so a fragment with no delimiter
    is never searched twice.

    Splitting happens on raw bytes; the encoding must map the delimiter to the
    same single byte (true for UTF-8, Latin-1 and other ASCII-compatible codecs).
    """

    def __init__(self, encoding: str = "utf-8"):
        check_encoding(encoding)
        self._encoding = encoding
        self._buffer = bytearray()
        self._scan_from = 0

    @property
    def carry(self) -> str:
        """Unterminated text waiting for more input."""
        return self._buffer.decode(self._encoding, DECODE_ERRORS)

    def _build(self, raw: bytes | bytearray, terminated: bool) -> Statement | None:
        text = raw.decode(self._encoding, DECODE_ERRORS).strip()
        if not is_valid_statement(text):
            return None
        return Statement(text, terminated)

    def feed(self, chunk: bytes) -> list[Statement]:
        """Append a chunk and return every statement it completes, in source order."""
        buffer = self._buffer
        buffer += chunk

        statements: list[Statement] = []
        start = 0
        end = buffer.find(DELIMITER, self._scan_from)
        while end != -1:
            statement = self._build(buffer[start:end], terminated=True)
            if statement is not None:
                statements.append(statement)
            start = end + 1
            end = buffer.find(DELIMITER, start)

        if start:
            del buffer[:start]
        self._scan_from = len(buffer)
        return statements

    def finish(self) -> list[Statement]:
        """Flush the carry at end of stream as an unterminated statement."""
        statement = self._build(self._buffer, terminated=False) if self._buffer else None
        self._buffer.clear()
        self._scan_from = 0
        return [statement] if statement is not None else []


def split_statements(chunks: Iterable[bytes], encoding: str = "utf-8") -> Iterator[Statement]:
    """Yield statements from an iterable of chunks, including the final fragment."""
    splitter = StatementSplitter(encoding)
    for chunk in chunks:
        yield from splitter.feed(chunk)
    yield from splitter.finish()
