"""
Line reversal core.

Reads the input one line at a time into a reused buffer, reverses the
bytes of each line while keeping its trailing newline in place, and
appends the result to the output in the original line order.
"""

from __future__ import annotations

import hashlib
import logging
from contextlib import ExitStack
from typing import BinaryIO, Optional

from charset_normalizer import from_bytes

from .buffer import LineBuffer
from .errors import FileOpenError, IOFault, LineReverserError
from .models import EncodingReport, ReverseReport
from .rules import ENCODING_SAMPLE_SIZE, END_OF_INPUT

logger = logging.getLogger(__name__)


def reverse_in_place(buf: bytearray, length: int) -> None:
    """
    Reverse buf[0:length] in place, leaving a trailing newline where it is.

    Only the first `length` bytes are looked at; the rest of `buf` may be
    stale data from a longer line.
    """
    right = length - 1
    if right >= 0 and buf[right] == 0x0A:
        right -= 1

    left = 0
    while left < right:
        buf[left], buf[right] = buf[right], buf[left]
        left += 1
        right -= 1


def reverse_line(line: bytes) -> bytes:
    buf = bytearray(line)
    reverse_in_place(buf, len(buf))
    return bytes(buf)


def _sniff_encoding(sample: bytes) -> EncodingReport:
    if not sample:
        return EncodingReport()

    detected = None
    match = from_bytes(sample).best()
    if match is not None:
        detected = match.encoding

    return EncodingReport(
        detected=detected,
        multibyte=any(b >= 0x80 for b in sample),
    )


class LineReverser:
    """Owns an input/output stream pair and the line buffer between them."""

    def __init__(self, source: BinaryIO, sink: BinaryIO, buffer: Optional[LineBuffer] = None):
        self.source = source
        self.sink = sink
        self.buffer = buffer if buffer is not None else LineBuffer()

        self._digest = hashlib.sha256()
        self._sample = bytearray()
        self._lines = 0
        self._empty_lines = 0
        self._bytes_read = 0
        self._bytes_written = 0

    def read_line(self) -> int:
        """Load the next line into the buffer; END_OF_INPUT when exhausted."""
        try:
            chunk = self.source.readline()
        except OSError as e:
            raise IOFault(f"read failed: {e}") from e

        if not chunk:
            return END_OF_INPUT

        if len(self._sample) < ENCODING_SAMPLE_SIZE:
            self._sample += chunk[: ENCODING_SAMPLE_SIZE - len(self._sample)]

        self._bytes_read += len(chunk)
        return self.buffer.load(chunk)

    def reverse(self) -> None:
        reverse_in_place(self.buffer.raw(), self.buffer.length)

    def write_line(self) -> None:
        with self.buffer.view() as view:
            try:
                self.sink.write(view)
            except OSError as e:
                raise IOFault(f"write failed: {e}") from e
            self._digest.update(view)
        self._bytes_written += self.buffer.length

    def run(self) -> ReverseReport:
        trailing_newline = False

        while self.read_line() != END_OF_INPUT:
            self._lines += 1
            if self.buffer.content_length() == 0:
                self._empty_lines += 1
            trailing_newline = self.buffer.ends_with_newline()

            self.reverse()
            self.write_line()

        try:
            self.sink.flush()
        except OSError as e:
            raise IOFault(f"flush failed: {e}") from e

        return ReverseReport(
            lines=self._lines,
            empty_lines=self._empty_lines,
            bytes_read=self._bytes_read,
            bytes_written=self._bytes_written,
            trailing_newline=trailing_newline,
            output_sha256=self._digest.hexdigest(),
            encoding=_sniff_encoding(bytes(self._sample)),
        )


def _open(path: str, mode: str) -> BinaryIO:
    try:
        return open(path, mode)
    except OSError as e:
        raise FileOpenError(path, mode, e.strerror) from e


def reverse_file(src: str, dst: str) -> ReverseReport:
    """
    Reverse every line of `src` into `dst`.

    The input is opened first so a missing input never creates the output.
    Both files and the buffer are released on every exit path.
    """
    try:
        with ExitStack() as stack:
            source = stack.enter_context(_open(src, "rb"))
            logger.debug("opened input %s", src)
            sink = stack.enter_context(_open(dst, "wb"))
            logger.debug("opened output %s", dst)

            reverser = LineReverser(source, sink)
            stack.callback(reverser.buffer.release)

            report = reverser.run()
    except OSError as e:
        # Closing a sink flushes it again, so a failed write can resurface here.
        if isinstance(e.__context__, LineReverserError):
            raise e.__context__ from e
        raise IOFault(f"close failed: {e}") from e

    logger.debug(
        "reversed %d lines (%d bytes) from %s to %s",
        report.lines, report.bytes_written, src, dst,
    )
    if report.encoding.multibyte:
        logger.warning(
            "%s contains non-ASCII bytes (detected %s); reversal is byte-level",
            src, report.encoding.detected,
        )
    return report
