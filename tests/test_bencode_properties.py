"""Property-based tests for bencode encoding/decoding.

Uses Hypothesis to generate arbitrary value trees and checks that the
encoder and decoder agree with each other.
"""

from hypothesis import given
from hypothesis import strategies as st

from torrentlens.bencode import BencodeDecodeError, decode, encode
from torrentlens.bencode.structure import (
    INT64_MAX,
    INT64_MIN,
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
)

leaves = st.one_of(
    st.integers(min_value=INT64_MIN, max_value=INT64_MAX).map(BencodeInt),
    st.binary(max_size=64).map(BencodeString),
)

trees = st.recursive(
    leaves,
    lambda children: st.one_of(
        st.lists(children, max_size=5).map(BencodeList),
        st.dictionaries(st.binary(max_size=8), children, max_size=5).map(BencodeDict),
    ),
    max_leaves=30,
)


class TestBencodeProperties:
    """Property-based tests for bencode operations."""

    @given(trees)
    def test_tree_roundtrip(self, tree):
        """decode(encode(x)) == x for any tree."""
        assert decode(encode(tree)) == tree

    @given(trees)
    def test_encoding_is_canonical(self, tree):
        """Re-encoding a decoded value reproduces the same bytes."""
        encoded = encode(tree)
        assert encode(decode(encoded)) == encoded

    @given(st.dictionaries(st.binary(max_size=8), st.integers(min_value=0, max_value=9), max_size=8))
    def test_dict_keys_emitted_sorted(self, dct):
        """Dictionary keys come out in ascending byte order whatever the input order."""
        reversed_dict = BencodeDict({k: BencodeInt(v) for k, v in reversed(list(dct.items()))})
        decoded = decode(encode(reversed_dict))
        assert list(decoded.value) == sorted(dct)

    @given(st.binary(max_size=256))
    def test_arbitrary_bytes_never_crash(self, data):
        """Random input either decodes or raises BencodeDecodeError."""
        try:
            decode(data)
        except BencodeDecodeError:
            pass
