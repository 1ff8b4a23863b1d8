"""
Bencode encoder for BitTorrent metainfo files.

Output is canonical: dictionary keys are always written in ascending
byte order, whatever order the value was built or decoded in.
"""
from collections.abc import Mapping

from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""

    if isinstance(obj, bool):
        raise TypeError("Cannot bencode a bool")

    if isinstance(obj, (int, BencodeInt)):
        value = obj if isinstance(obj, int) else obj.value
        return encode_int(value)

    if isinstance(obj, (str, BencodeString)):
        if isinstance(obj, str):
            return encode_str(obj)
        # BencodeString wraps bytes
        return encode_bytes(obj.value)

    if isinstance(obj, (bytes, bytearray)):
        return encode_bytes(bytes(obj))

    if isinstance(obj, (list, tuple, BencodeList)):
        value = obj.value if isinstance(obj, BencodeList) else obj
        return encode_list(value)

    if isinstance(obj, (dict, BencodeDict)):
        value = obj.value if isinstance(obj, BencodeDict) else obj
        return encode_dict(value)

    raise TypeError(f"Cannot bencode object of type {type(obj)}")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return f"i{n}e".encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + b


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    b = s.encode()
    return encode_bytes(b)


def encode_list(lst) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    encoded_items = b''.join(encode(x) for x in lst)
    return b"l" + encoded_items + b"e"


def encode_dict(d: Mapping) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""
    parts = [b"d"]

    def key_to_bytes(k):
        if isinstance(k, (bytes, bytearray)):
            return bytes(k)
        if isinstance(k, str):
            return k.encode()
        raise TypeError(f"Cannot bencode dictionary key of type {type(k)}")

    keyed = {}
    for key, value in d.items():
        key_bytes = key_to_bytes(key)
        if key_bytes in keyed:
            raise ValueError(f"Duplicate dictionary key {key_bytes!r}")
        keyed[key_bytes] = value

    for key_bytes in sorted(keyed):
        parts.append(encode_bytes(key_bytes))
        parts.append(encode(keyed[key_bytes]))

    parts.append(b"e")
    return b"".join(parts)
