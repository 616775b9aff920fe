"""Response body decoding - Imperative Shell.

This module reads a byte stream into a string. It performs stream I/O
but never closes the stream it is given; the caller owns it.
"""

import codecs
import json
from typing import BinaryIO, Iterable, Iterator, Union

from src.core.config import DecodeMode


ENCODING = "utf-8"

# Bytes requested per read from a file-like stream
CHUNK_SIZE = 8192

ByteSource = Union[BinaryIO, Iterable[bytes]]


def _iter_chunks(stream: ByteSource) -> Iterator[bytes]:
    if hasattr(stream, "read"):
        return iter(lambda: stream.read(CHUNK_SIZE), b"")
    return iter(stream)


def _iter_text(stream: ByteSource) -> Iterator[str]:
    """Decode chunks incrementally so multi-byte characters may span reads."""
    decoder = codecs.getincrementaldecoder(ENCODING)(errors="replace")
    for chunk in _iter_chunks(stream):
        if chunk:
            yield decoder.decode(chunk)
    yield decoder.decode(b"", final=True)


def _strip_line_breaks(text: str) -> str:
    # "\n", "\r" and "\r\n" each end a line
    return text.replace("\r", "").replace("\n", "")


def read_from_stream(
    stream: ByteSource | None,
    mode: DecodeMode = DecodeMode.JOIN_LINES,
) -> str:
    """Read a UTF-8 byte stream to completion.

    In JOIN_LINES mode the body is read as lines which are concatenated
    with no separator, so every line break is dropped from the result.
    This is harmless for JSON whose line breaks sit between tokens, but
    changes string values that contain raw line breaks.

    Args:
        stream: Binary file-like object or iterable of byte chunks, or None
        mode: JOIN_LINES or FULL_BLOCK

    Returns:
        Decoded text, "" for an empty or absent stream
    """
    if stream is None:
        return ""

    if mode == DecodeMode.FULL_BLOCK:
        return "".join(_iter_text(stream))

    return "".join(_strip_line_breaks(text) for text in _iter_text(stream))


def has_embedded_line_breaks(json_text: str) -> bool:
    """Check whether joining lines would alter a JSON document.

    Returns True if removing the line breaks changes the parsed value,
    which happens when a string literal contains a raw line break.
    Such documents are not strict JSON; JOIN_LINES decoding silently
    rewrites their string values.
    """
    try:
        original = json.loads(json_text, strict=False)
    except json.JSONDecodeError:
        return False

    try:
        joined = json.loads(_strip_line_breaks(json_text), strict=False)
    except json.JSONDecodeError:
        return True
    return joined != original
