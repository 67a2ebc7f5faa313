"""
Character Source
================

Supplies source text to the scanner one character at a time. The source
owns its stream: it closes it exactly once, as soon as end of input (or a
read failure) is first observed, and never reads from it again.

Two kinds of stream are accepted:
- a text stream (e.g. io.StringIO), read with read(1)
- a binary stream plus an encoding, decoded one byte at a time so that a
  decoding error surfaces at the exact character where it occurs, after
  every valid character before it has been delivered
"""

from typing import BinaryIO, Optional, TextIO, Union
import codecs
import logging

from rpal_scan.errors import SourceReadError
from rpal_scan.options import IOErrorPolicy

# Logger for this module
logger = logging.getLogger(__name__)


class CharacterSource:
    """
    Lazily reads single characters from a text or binary stream.

    Usage:
        with CharacterSource(open("prog.rpal", "rb"), "prog.rpal", encoding="utf-8") as source:
            while (char := source.read()) is not None:
                ...

    Attributes:
        filename: Name of the stream, used in diagnostics
        io_errors: Policy applied when the stream raises while reading
        encoding: Encoding of a binary stream, None for a text stream
    """

    def __init__(
        self,
        stream: Union[TextIO, BinaryIO],
        filename: str = "<input>",
        io_errors: IOErrorPolicy = IOErrorPolicy.RAISE,
        encoding: Optional[str] = None,
    ):
        self._stream: Optional[Union[TextIO, BinaryIO]] = stream
        self.filename = filename
        self.io_errors = io_errors
        self.encoding = encoding

        # Incremental decoder for binary streams, plus any characters it
        # produced beyond the one handed out
        self._decoder = (
            codecs.getincrementaldecoder(encoding)() if encoding is not None else None
        )
        self._pending = ""

    @property
    def exhausted(self) -> bool:
        """True once end of input has been observed and nothing is pending."""
        return self._stream is None and not self._pending

    def read(self, line: Optional[int] = None) -> Optional[str]:
        """
        Read the next character.

        Args:
            line: Current line number, only used to locate read errors

        Returns:
            A one-character string, or None at end of input

        Raises:
            SourceReadError: If the stream fails and the policy is RAISE
        """
        if self._pending:
            char, self._pending = self._pending[0], self._pending[1:]
            return char

        if self._stream is None:
            return None

        try:
            if self._decoder is None:
                text = self._stream.read(1)
            else:
                text = self._decode_next()
        except (OSError, UnicodeDecodeError) as e:
            self.close()
            if self.io_errors is IOErrorPolicy.RAISE:
                raise SourceReadError(self.filename, e, line) from e
            logger.warning(f"Read error on {self.filename}, treating as end of input: {e}")
            return None

        if not text:
            logger.debug(f"End of input on {self.filename}")
            self.close()
            return None

        char, self._pending = text[0], text[1:]
        return char

    def _decode_next(self) -> str:
        """
        Feed bytes to the decoder until it yields text.

        Returns an empty string at end of input. A multi-byte sequence cut
        off by end of input raises UnicodeDecodeError.
        """
        while True:
            byte = self._stream.read(1)
            if not byte:
                return self._decoder.decode(b"", final=True)
            text = self._decoder.decode(byte)
            if text:
                return text

    def close(self) -> None:
        """Close the underlying stream if it is still open."""
        self._pending = ""
        if self._stream is None:
            return
        stream, self._stream = self._stream, None
        stream.close()

    def __enter__(self) -> "CharacterSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
