"""
Exception hierarchy for torrentlens.

Every failure the metainfo pipeline can produce derives from
TorrentLensError, so callers that only care about "did it work" can catch
a single class.
"""
from enum import Enum
from typing import Any, Dict, Optional


class TorrentLensError(Exception):
    """Base exception for all torrentlens errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ConfigurationError(TorrentLensError):
    """Invalid settings value."""


# --------------------------
# Bencode syntax
# --------------------------

class DecodeErrorKind(Enum):
    UNEXPECTED_EOF = "unexpected end of input"
    INVALID_INTEGER = "invalid integer"
    INVALID_LENGTH = "invalid string length"
    INVALID_TOKEN = "invalid token"
    INVALID_KEY = "dictionary key is not a byte string"
    DUPLICATE_KEY = "duplicate dictionary key"
    UNTERMINATED_CONTAINER = "unterminated list or dictionary"
    TRAILING_DATA = "trailing data after value"
    NESTING_TOO_DEEP = "nesting too deep"


class BencodeDecodeError(TorrentLensError):
    """Raised when the input is not a single well-formed bencode value."""

    def __init__(self, kind: DecodeErrorKind, position: int, detail: str = ""):
        message = f"{kind.value} at offset {position}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.kind = kind
        self.position = position


# --------------------------
# Metainfo schema
# --------------------------

class MappingErrorKind(Enum):
    NOT_A_DICTIONARY = "metainfo root is not a dictionary"
    MISSING_FIELD = "missing required field"
    WRONG_TYPE = "field has the wrong type"
    INVALID_UTF8 = "field is not valid UTF-8"
    AMBIGUOUS_LAYOUT = "info must contain exactly one of 'length' and 'files'"
    MALFORMED_NODE = "node must be a [host, port] pair"


class MappingError(TorrentLensError):
    """Raised when a decoded value does not fit the metainfo schema."""

    def __init__(self, kind: MappingErrorKind, key: Optional[str] = None):
        message = kind.value if key is None else f"{kind.value}: '{key}'"
        super().__init__(message)
        self.kind = kind
        self.key = key


# --------------------------
# Semantic checks
# --------------------------

class ValidationCheck(Enum):
    PIECE_LENGTH = "piece length must be positive"
    PIECES_LENGTH = "pieces length must be a multiple of 20"
    FILE_LENGTH = "file length must not be negative"
    FILES_EMPTY = "files list must not be empty"
    PATH_EMPTY = "file path must have at least one segment"
    PATH_SEGMENT_EMPTY = "file path segments must not be empty"
    CREATION_DATE = "creation date must not be negative"


class ValidationError(TorrentLensError):
    """Raised for the first semantic invariant a mapped torrent breaks."""

    def __init__(self, check: ValidationCheck, details: Optional[Dict[str, Any]] = None):
        super().__init__(check.value, details)
        self.check = check
