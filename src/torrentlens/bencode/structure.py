"""
Data structures for representing Bencoded types.

The four classes below are the whole of the value tree: every consumer
dispatches on exactly these, and nothing else derives from BencodeType.
"""
from types import MappingProxyType

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "INT64_MIN",
    "INT64_MAX",
]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ("_value",)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value):
        if hasattr(self, "_value"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    __slots__ = ()

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        self._value = value

    def __hash__(self):
        return hash((BencodeInt, self._value))

    def __repr__(self):
        return f"BencodeInt({self._value})"


class BencodeString(BencodeType):
    """Represents a Bencoded byte string. The bytes are not assumed to be UTF-8."""
    __slots__ = ()

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("BencodeString requires bytes.")
        self._value = bytes(value)

    def __hash__(self):
        return hash((BencodeString, self._value))

    def __repr__(self):
        return f"BencodeString({self._value!r})"


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, (list, tuple)):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError("BencodeList items must be Bencode values.")
        self._value = tuple(value)

    def __repr__(self):
        return f"BencodeList({list(self._value)!r})"


class BencodeDict(BencodeType):
    """Represents a Bencoded dictionary. Keys keep their decoded order."""
    __slots__ = ()

    def __init__(self, value: dict):
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        # keys must be bytes (bencode requirement)
        for k, v in value.items():
            if not isinstance(k, (bytes, bytearray)):
                raise TypeError("BencodeDict keys must be bytes.")
            if not isinstance(v, BencodeType):
                raise TypeError("BencodeDict values must be Bencode values.")
        self._value = MappingProxyType({bytes(k): v for k, v in value.items()})

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return dict(self._value) == dict(other._value)

    def __repr__(self):
        return f"BencodeDict({dict(self._value)!r})"
