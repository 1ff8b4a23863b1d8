"""
Bencode decoder for BitTorrent metainfo files.

The input is attacker-controlled, so the decoder is strict: the whole
buffer must be exactly one value, integers and lengths must be canonical
decimal, dictionary keys must be unique and nesting depth is capped.
"""
import logging

from ..exceptions import BencodeDecodeError, DecodeErrorKind
from .structure import (
    INT64_MAX,
    INT64_MIN,
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
    BencodeType,
)

logger = logging.getLogger(__name__)

MAX_DEPTH = 64

_DIGITS = b"0123456789"
_MAX_INT_DIGITS = len(str(2 ** 63))


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into BencodeType values.
    """
    def __init__(self, data: bytes, max_depth: int = MAX_DEPTH):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeDecoder requires bytes.")
        self.data = bytes(data)
        self.max_depth = max_depth
        self.i = 0  # cursor index
        self.depth = 0

    def decode(self) -> BencodeType:
        """Main decode entry point. Decodes the entire Bencoded data."""
        result = self._parse_value()
        if self.i != len(self.data):
            raise BencodeDecodeError(
                DecodeErrorKind.TRAILING_DATA,
                self.i,
                f"{len(self.data) - self.i} byte(s) left over",
            )
        return result

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _fail(self, kind: DecodeErrorKind, detail: str = "", position=None):
        raise BencodeDecodeError(kind, self.i if position is None else position, detail)

    def _peek(self) -> bytes:
        if self.i >= len(self.data):
            self._fail(DecodeErrorKind.UNEXPECTED_EOF)
        return self.data[self.i:self.i+1]

    def _consume(self, n=1) -> bytes:
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        if self.i + n > len(self.data):
            self._fail(
                DecodeErrorKind.UNEXPECTED_EOF,
                f"needed {n} byte(s), {len(self.data) - self.i} available",
            )
        chunk = self.data[self.i:self.i+n]
        self.i += n
        return chunk

    def _read_until(self, terminator: bytes, kind: DecodeErrorKind) -> bytes:
        """Reads up to (not including) terminator and skips past it."""
        end = self.data.find(terminator, self.i)
        if end < 0:
            self._fail(DecodeErrorKind.UNEXPECTED_EOF, f"missing {terminator!r}")
        chunk = self.data[self.i:end]
        if not chunk:
            self._fail(kind, "no digits")
        self.i = end + 1
        return chunk

    def _enter(self):
        self.depth += 1
        if self.depth > self.max_depth:
            self._fail(DecodeErrorKind.NESTING_TOO_DEEP, f"limit is {self.max_depth}")

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self) -> BencodeType:
        ch = self._peek()

        if ch == b'i':
            return self._parse_int()

        # Bencode strings start with length; a sign here is a negative length
        if ch in _DIGITS or ch == b'-':
            return self._parse_string()

        if ch == b'l':
            return self._parse_list()

        if ch == b'd':
            return self._parse_dict()

        self._fail(DecodeErrorKind.INVALID_TOKEN, repr(ch))

    def _parse_int(self) -> BencodeInt:
        """Parses an integer from the Bencoded data."""
        start = self.i
        self._consume(1)  # skip 'i'
        number_bytes = self._read_until(b'e', DecodeErrorKind.INVALID_INTEGER)

        digits = number_bytes[1:] if number_bytes.startswith(b'-') else number_bytes
        if not digits or not digits.isdigit():
            self._fail(DecodeErrorKind.INVALID_INTEGER, repr(number_bytes), start)
        if digits.startswith(b'0') and number_bytes != b'0':
            # covers both leading zeros and negative zero
            self._fail(DecodeErrorKind.INVALID_INTEGER, repr(number_bytes), start)
        if len(digits) > _MAX_INT_DIGITS:
            self._fail(DecodeErrorKind.INVALID_INTEGER, "outside signed 64-bit range", start)

        num = int(number_bytes)
        if not INT64_MIN <= num <= INT64_MAX:
            self._fail(DecodeErrorKind.INVALID_INTEGER, "outside signed 64-bit range", start)
        return BencodeInt(num)

    def _parse_length(self) -> int:
        start = self.i
        # read length until ':'
        end = start
        while end < len(self.data) and self.data[end:end+1] in _DIGITS:
            end += 1
        if end == len(self.data):
            self._fail(DecodeErrorKind.UNEXPECTED_EOF, "missing b':'")
        if end == start or self.data[end:end+1] != b':':
            self._fail(DecodeErrorKind.INVALID_LENGTH, repr(self.data[start:end+1]), start)
        if len(self.data[start:end].lstrip(b'0')) > _MAX_INT_DIGITS:
            self._fail(DecodeErrorKind.UNEXPECTED_EOF, "declared length exceeds input", start)
        length = int(self.data[start:end])
        self.i = end + 1
        return length

    def _parse_string(self) -> BencodeString:
        """Parses a byte string from the Bencoded data."""
        length = self._parse_length()
        return BencodeString(self._consume(length))

    def _at_container_end(self, start: int) -> bool:
        if self.i >= len(self.data):
            self._fail(DecodeErrorKind.UNTERMINATED_CONTAINER, position=start)
        return self.data[self.i:self.i+1] == b'e'

    def _parse_list(self) -> BencodeList:
        """Parses a list from the Bencoded data."""
        start = self.i
        self._enter()
        self._consume(1)  # skip 'l'
        items = []

        while not self._at_container_end(start):
            items.append(self._parse_value())

        self._consume(1)  # skip 'e'
        self.depth -= 1
        return BencodeList(items)

    def _parse_dict(self) -> BencodeDict:
        """Parses a dictionary from the Bencoded data."""
        start = self.i
        self._enter()
        self._consume(1)  # skip 'd'
        obj = {}

        while not self._at_container_end(start):
            key_pos = self.i
            # keys MUST be strings
            if self._peek() not in _DIGITS and self._peek() != b'-':
                self._fail(DecodeErrorKind.INVALID_KEY)
            key = self._parse_string().value
            if key in obj:
                self._fail(DecodeErrorKind.DUPLICATE_KEY, repr(key), key_pos)
            if self.i >= len(self.data):
                self._fail(DecodeErrorKind.UNTERMINATED_CONTAINER, "key without value", start)
            obj[key] = self._parse_value()

        self._consume(1)  # skip 'e'
        self.depth -= 1
        return BencodeDict(obj)


def decode(data: bytes, max_depth: int = MAX_DEPTH) -> BencodeType:
    """
    Convenience function to decode Bencoded data.
    """
    try:
        return BencodeDecoder(data, max_depth).decode()
    except BencodeDecodeError as exc:
        logger.debug("bencode decode failed: %s", exc)
        raise
