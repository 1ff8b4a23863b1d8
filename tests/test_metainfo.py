import pytest

from torrentlens.bencode import decode, encode
from torrentlens.exceptions import MappingError, MappingErrorKind
from torrentlens.torrent import MultiFile, Node, SingleFile, map_torrent


def mapping_error(raw: bytes) -> MappingError:
    with pytest.raises(MappingError) as exc_info:
        map_torrent(decode(raw))
    return exc_info.value


def test_single_file_load(single_file_raw):
    meta = map_torrent(decode(single_file_raw))
    print("Parsed:", meta)

    assert meta.info.name == "a.txt"
    assert meta.info.piece_length == 16384
    assert meta.info.pieces == b"\x00" * 20
    assert meta.info.layout == SingleFile(length=100)
    assert meta.announce is None
    assert meta.announce_list == ()
    assert meta.nodes == ()
    assert meta.info.total_length == 100
    assert meta.info.num_pieces == 1
    assert [f.path for f in meta.info.files] == [("a.txt",)]


def test_multi_file_load(multi_file_raw):
    meta = map_torrent(decode(multi_file_raw))
    print("Parsed:", meta)

    assert isinstance(meta.info.layout, MultiFile)
    assert meta.info.is_multi_file
    files = meta.info.layout.files
    assert [f.path for f in files] == [("cd1", "01.flac"), ("cover.jpg",)]
    assert files[0].name == "01.flac"
    assert files[1].md5sum == "d41d8cd98f00b204e9800998ecf8427e"
    assert meta.info.total_length == 40123
    assert meta.info.num_pieces == 2
    assert meta.info.piece_hashes == (bytes(range(20)), bytes(range(20, 40)))
    assert meta.info.last_piece_length == 40123 - 32768
    assert meta.is_private

    assert meta.announce == "http://tracker.example/announce"
    assert meta.announce_list == (
        ("http://tracker.example/announce", "http://backup.example/announce"),
        (),
        ("udp://tracker.example:6969",),
    )
    assert meta.trackers() == (
        "http://tracker.example/announce",
        "http://backup.example/announce",
        "udp://tracker.example:6969",
    )
    assert meta.nodes == (Node("router.example", 6881), Node("10.0.0.2", 51413))
    assert meta.creation_date == 1700000000
    assert meta.comment == "two files"
    assert meta.created_by == "mktorrent 1.1"
    assert meta.encoding == "UTF-8"


def test_unknown_keys_are_ignored(make_metainfo):
    raw = make_metainfo({b"source": b"somewhere"}, **{"url-list": [b"http://seed.example/"]})
    assert map_torrent(decode(raw)).info.name == "a.txt"


def test_root_must_be_dictionary():
    assert mapping_error(b"l4:spame").kind is MappingErrorKind.NOT_A_DICTIONARY


def test_ambiguous_layout_both(make_metainfo):
    raw = make_metainfo({b"files": [{b"length": 1, b"path": [b"x"]}]})
    assert mapping_error(raw).kind is MappingErrorKind.AMBIGUOUS_LAYOUT


def test_ambiguous_layout_neither(make_metainfo):
    raw = make_metainfo(drop_info=[b"length"])
    assert mapping_error(raw).kind is MappingErrorKind.AMBIGUOUS_LAYOUT


@pytest.mark.parametrize("key", [b"name", b"piece length", b"pieces"])
def test_missing_required_info_field(make_metainfo, key):
    err = mapping_error(make_metainfo(drop_info=[key]))
    assert err.kind is MappingErrorKind.MISSING_FIELD
    assert err.key == key.decode()


def test_missing_info():
    err = mapping_error(encode({b"announce": b"http://t/"}))
    assert err.kind is MappingErrorKind.MISSING_FIELD
    assert err.key == "info"


@pytest.mark.parametrize(
    "overrides, top, key",
    [
        ({b"piece length": b"16384"}, {}, "piece length"),
        ({b"name": 5}, {}, "name"),
        ({b"pieces": 0}, {}, "pieces"),
        ({b"length": b"100"}, {}, "length"),
        ({b"private": b"1"}, {}, "private"),
        ({}, {"announce": 1}, "announce"),
        ({}, {"announce-list": b"http://t/"}, "announce-list"),
        ({}, {"announce-list": [b"http://t/"]}, "announce-list"),
        ({}, {"announce-list": [[1]]}, "announce-list"),
        ({}, {"creation_date": b"today"}, "creation date"),
        ({}, {"nodes": b"router:6881"}, "nodes"),
    ],
)
def test_wrong_type(make_metainfo, overrides, top, key):
    err = mapping_error(make_metainfo(overrides, **top))
    assert err.kind is MappingErrorKind.WRONG_TYPE
    assert err.key == key


def test_file_entry_errors(make_metainfo):
    def with_files(files):
        return make_metainfo({b"files": files}, drop_info=[b"length"])

    err = mapping_error(with_files([b"not a dict"]))
    assert (err.kind, err.key) == (MappingErrorKind.WRONG_TYPE, "files")

    err = mapping_error(with_files([{b"path": [b"x"]}]))
    assert (err.kind, err.key) == (MappingErrorKind.MISSING_FIELD, "length")

    err = mapping_error(with_files([{b"length": 1, b"path": b"x"}]))
    assert (err.kind, err.key) == (MappingErrorKind.WRONG_TYPE, "path")

    err = mapping_error(with_files([{b"length": 1, b"path": [b"ok", 2]}]))
    assert (err.kind, err.key) == (MappingErrorKind.WRONG_TYPE, "path")


def test_invalid_utf8_is_rejected(make_metainfo):
    err = mapping_error(make_metainfo({b"name": b"caf\xe9.txt"}))
    assert err.kind is MappingErrorKind.INVALID_UTF8
    assert err.key == "name"

    err = mapping_error(make_metainfo(comment=b"\xff"))
    assert (err.kind, err.key) == (MappingErrorKind.INVALID_UTF8, "comment")

    raw = make_metainfo({b"files": [{b"length": 1, b"path": [b"\xc3"]}]}, drop_info=[b"length"])
    assert mapping_error(raw).kind is MappingErrorKind.INVALID_UTF8


def test_utf8_text_is_decoded(make_metainfo):
    meta = map_torrent(decode(make_metainfo({b"name": "café ☕".encode()})))
    assert meta.info.name == "café ☕"


@pytest.mark.parametrize(
    "nodes",
    [
        [[b"host"]],
        [[b"host", 1, 2]],
        [[1, b"host"]],
        [[b"host", b"6881"]],
        [b"host:6881"],
    ],
)
def test_malformed_node(make_metainfo, nodes):
    assert mapping_error(make_metainfo(nodes=nodes)).kind is MappingErrorKind.MALFORMED_NODE


def test_empty_announce_list_is_valid(make_metainfo):
    meta = map_torrent(decode(make_metainfo(**{"announce-list": []})))
    assert meta.announce_list == ()
    assert meta.trackers() == ()


def test_pieces_stay_raw_bytes(make_metainfo):
    blob = bytes(range(256))[:40]
    meta = map_torrent(decode(make_metainfo({b"pieces": blob})))
    assert meta.info.pieces == blob


def test_info_level_path(make_metainfo):
    meta = map_torrent(decode(make_metainfo({b"path": [b"x", b"y"]})))
    assert meta.info.path == ("x", "y")
    assert map_torrent(decode(make_metainfo())).info.path is None

    err = mapping_error(make_metainfo({b"path": b"x/y"}))
    assert (err.kind, err.key) == (MappingErrorKind.WRONG_TYPE, "path")
