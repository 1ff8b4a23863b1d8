import pytest

from torrentlens.bencode import encode


def build_metainfo(info_overrides=None, drop_info=(), **top):
    """Bencoded single-file torrent; tweak with overrides, drop_info keys, or extra top-level keys."""
    info = {
        b"name": b"a.txt",
        b"piece length": 16384,
        b"pieces": b"\x00" * 20,
        b"length": 100,
    }
    info.update(info_overrides or {})
    for key in drop_info:
        info.pop(key, None)

    root = {b"info": info}
    for key, value in top.items():
        root[key.replace("_", " ").encode()] = value
    return encode(root)


@pytest.fixture
def make_metainfo():
    return build_metainfo


@pytest.fixture
def single_file_raw():
    return build_metainfo()


@pytest.fixture
def multi_file_raw():
    return encode({
        b"announce": b"http://tracker.example/announce",
        b"announce-list": [
            [b"http://tracker.example/announce", b"http://backup.example/announce"],
            [],
            [b"udp://tracker.example:6969"],
        ],
        b"nodes": [[b"router.example", 6881], [b"10.0.0.2", 51413]],
        b"creation date": 1700000000,
        b"comment": b"two files",
        b"created by": b"mktorrent 1.1",
        b"encoding": b"UTF-8",
        b"info": {
            b"name": b"album",
            b"piece length": 32768,
            b"pieces": bytes(range(40)),
            b"private": 1,
            b"files": [
                {b"length": 40000, b"path": [b"cd1", b"01.flac"]},
                {b"length": 123, b"path": [b"cover.jpg"], b"md5sum": b"d41d8cd98f00b204e9800998ecf8427e"},
            ],
        },
    })
