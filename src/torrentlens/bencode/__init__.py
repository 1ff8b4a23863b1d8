"""
Bencode package for encoding and decoding BitTorrent data.
"""
from ..exceptions import BencodeDecodeError, DecodeErrorKind
from .decoder import MAX_DEPTH, BencodeDecoder, decode
from .encoder import encode
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

__all__ = [
    'decode',
    'encode',
    'BencodeDecoder',
    'BencodeDecodeError',
    'DecodeErrorKind',
    'MAX_DEPTH',
    'BencodeType',
    'BencodeInt',
    'BencodeString',
    'BencodeList',
    'BencodeDict',
]
