"""Loading documents into lines and saving lines back out.

A document comes either from a file on disk, whose encoding is detected
with chardet, or from an injected reader/writer pair. Either way the editor
only ever sees an ordered list of lines.
"""

from __future__ import annotations

import codecs
import logging
import os
import re
import shutil
import tempfile
from dataclasses import dataclass
from typing import Callable, Optional, TextIO

import chardet

from .constants import EditorConstants

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\n|\r")


@dataclass
class Document:
    lines: list[str]
    encoding: str


def split_lines(text: str, trim: bool = True) -> list[str]:
    """Split text on CRLF, LF or CR boundaries.

    Args:
        text: Raw document content
        trim: Strip leading and trailing whitespace from every line

    Returns:
        List of lines; empty text yields a single empty line
    """
    lines = _LINE_BREAK.split(text)
    if trim:
        lines = [line.strip() for line in lines]
    return lines


def join_lines(lines: list[str], separator: str = os.linesep) -> str:
    return separator.join(lines)


def detect_encoding(raw: bytes) -> str:
    """Guess the encoding of raw file content.

    A UTF-8 byte order mark wins outright. Otherwise chardet's guess is used
    when it is confident enough, and UTF-8 is the fallback. Pure ASCII is
    reported as UTF-8 so that saving non-ASCII text later cannot fail.
    """
    if raw.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    if not raw:
        return EditorConstants.DEFAULT_ENCODING
    result = chardet.detect(raw[:EditorConstants.ENCODING_SAMPLE_SIZE])
    encoding = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet guessed {encoding!r} with confidence {confidence:.2f}")
    if not encoding or confidence < EditorConstants.ENCODING_MIN_CONFIDENCE:
        return EditorConstants.DEFAULT_ENCODING
    encoding = encoding.lower()
    if encoding == "ascii":
        return EditorConstants.DEFAULT_ENCODING
    return encoding


def decode(raw: bytes, encoding: str) -> tuple[str, str]:
    """Decode bytes, falling back to UTF-8 if the detected encoding fails.

    Returns:
        (text, encoding actually used)
    """
    for candidate in (encoding, EditorConstants.DEFAULT_ENCODING):
        try:
            return raw.decode(candidate), candidate
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Could not decode as {candidate}")
    logger.warning("Content is not valid in any tried encoding; replacing bad bytes")
    fallback = EditorConstants.DEFAULT_ENCODING
    return raw.decode(fallback, errors="replace"), fallback


class FileSource:
    """A document stored in a file on disk."""

    def __init__(self, filename: str, trim_whitespace: bool = True):
        self.filename = filename
        self.name = os.path.abspath(filename)
        self.trim_whitespace = trim_whitespace
        self.encoding = EditorConstants.DEFAULT_ENCODING

    def load(self) -> Document:
        with open(self.filename, 'rb') as f:
            raw = f.read()
        text, self.encoding = decode(raw, detect_encoding(raw))
        lines = split_lines(text, trim=self.trim_whitespace)
        logger.info(f"Loaded {self.name}: {len(lines)} lines, encoding {self.encoding}")
        return Document(lines, self.encoding)

    def save(self, lines: list[str]) -> None:
        """Write lines to the file atomically.

        Content goes to a temporary file in the same directory, which then
        replaces the original, so a failed save never truncates the document.
        The original permission bits are kept, and a symlinked path updates
        the file it points to.

        Raises:
            OSError: if the file cannot be written
        """
        content = join_lines(lines)
        # Write through symlinks to the real file
        target = os.path.realpath(self.filename)
        dir_name = os.path.dirname(target)
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding=self.encoding,
                                             dir=dir_name,
                                             prefix=EditorConstants.ATOMIC_SAVE_PREFIX,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             newline='', delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            if os.path.exists(target):
                shutil.copymode(target, temp_filename)
            os.replace(temp_filename, target)
        except (OSError, UnicodeEncodeError):
            if temp_filename and os.path.exists(temp_filename):
                os.remove(temp_filename)
            raise
        logger.info(f"Saved {len(lines)} lines to {self.name}")


class StreamSource:
    """A document read from an injected reader and written to injected writers.

    ``writer_factory`` is called once per save. The returned stream is
    flushed but not closed; its owner decides its lifetime.
    """

    def __init__(self, name: str, reader: TextIO, writer_factory: Callable[[], TextIO],
                 trim_whitespace: bool = True):
        self.name = name
        self.reader = reader
        self.writer_factory = writer_factory
        self.trim_whitespace = trim_whitespace
        self.encoding: Optional[str] = None

    def load(self) -> Document:
        text = self.reader.read()
        self.encoding = getattr(self.reader, 'encoding', None) or EditorConstants.DEFAULT_ENCODING
        lines = split_lines(text, trim=self.trim_whitespace)
        logger.info(f"Loaded {self.name}: {len(lines)} lines from stream")
        return Document(lines, self.encoding)

    def save(self, lines: list[str]) -> None:
        writer = self.writer_factory()
        writer.write(join_lines(lines))
        writer.flush()
        logger.info(f"Saved {len(lines)} lines to {self.name}")
