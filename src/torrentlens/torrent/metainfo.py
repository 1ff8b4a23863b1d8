"""
Maps a decoded bencode tree onto the metainfo schema.

Lookups are by exact byte-string key. Keys outside the schema are ignored;
keys inside it must have the right shape or mapping stops with a
MappingError naming the key.
"""
import logging
from typing import Optional, Tuple

from ..bencode.structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType
from ..exceptions import MappingError, MappingErrorKind
from .model import File, Info, Layout, MultiFile, Node, SingleFile, Torrent

logger = logging.getLogger(__name__)


def _key_name(key: bytes) -> str:
    return key.decode("utf-8", errors="replace")


class MetainfoMapper:
    """Turns the root BencodeDict of a .torrent file into a Torrent."""

    # ------------------ FIELD ACCESS ------------------

    @staticmethod
    def _get(d: BencodeDict, key: bytes, kind, required: bool = False):
        value = d.value.get(key)
        if value is None:
            if required:
                raise MappingError(MappingErrorKind.MISSING_FIELD, _key_name(key))
            return None
        if not isinstance(value, kind):
            raise MappingError(MappingErrorKind.WRONG_TYPE, _key_name(key))
        return value

    @staticmethod
    def _text(value: BencodeType, key: bytes) -> str:
        if not isinstance(value, BencodeString):
            raise MappingError(MappingErrorKind.WRONG_TYPE, _key_name(key))
        try:
            return value.value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MappingError(MappingErrorKind.INVALID_UTF8, _key_name(key)) from exc

    def _opt_text(self, d: BencodeDict, key: bytes) -> Optional[str]:
        value = self._get(d, key, BencodeString)
        return None if value is None else self._text(value, key)

    def _opt_int(self, d: BencodeDict, key: bytes) -> Optional[int]:
        value = self._get(d, key, BencodeInt)
        return None if value is None else value.value

    # ------------------ TOP LEVEL ------------------

    def map(self, root: BencodeType) -> Torrent:
        if not isinstance(root, BencodeDict):
            raise MappingError(MappingErrorKind.NOT_A_DICTIONARY)

        info = self._map_info(self._get(root, b"info", BencodeDict, required=True))

        torrent = Torrent(
            info=info,
            announce=self._opt_text(root, b"announce"),
            announce_list=self._map_announce_list(root),
            nodes=self._map_nodes(root),
            creation_date=self._opt_int(root, b"creation date"),
            comment=self._opt_text(root, b"comment"),
            created_by=self._opt_text(root, b"created by"),
            encoding=self._opt_text(root, b"encoding"),
        )
        logger.debug("mapped %r", torrent)
        return torrent

    def _map_announce_list(self, root: BencodeDict) -> Tuple[Tuple[str, ...], ...]:
        key = b"announce-list"
        tiers_b = self._get(root, key, BencodeList)
        if tiers_b is None:
            return ()

        tiers = []
        for tier in tiers_b.value:
            if not isinstance(tier, BencodeList):
                raise MappingError(MappingErrorKind.WRONG_TYPE, _key_name(key))
            # an empty tier is kept as-is and simply contributes no trackers
            tiers.append(tuple(self._text(u, key) for u in tier.value))
        return tuple(tiers)

    def _map_nodes(self, root: BencodeDict) -> Tuple[Node, ...]:
        nodes_b = self._get(root, b"nodes", BencodeList)
        if nodes_b is None:
            return ()

        nodes = []
        for entry in nodes_b.value:
            if not isinstance(entry, BencodeList) or len(entry.value) != 2:
                raise MappingError(MappingErrorKind.MALFORMED_NODE, "nodes")
            host_b, port_b = entry.value
            if not isinstance(host_b, BencodeString) or not isinstance(port_b, BencodeInt):
                raise MappingError(MappingErrorKind.MALFORMED_NODE, "nodes")
            nodes.append(Node(self._text(host_b, b"nodes"), port_b.value))
        return tuple(nodes)

    # ------------------ INFO ------------------

    def _map_info(self, info: BencodeDict) -> Info:
        name = self._text(self._get(info, b"name", BencodeString, required=True), b"name")
        piece_length = self._get(info, b"piece length", BencodeInt, required=True).value
        pieces = self._get(info, b"pieces", BencodeString, required=True).value

        return Info(
            name=name,
            piece_length=piece_length,
            pieces=pieces,
            layout=self._map_layout(info),
            private=self._opt_int(info, b"private"),
            md5sum=self._opt_text(info, b"md5sum"),
            root_hash=self._opt_text(info, b"root hash"),
            path=self._map_info_path(info),
        )

    def _map_info_path(self, info: BencodeDict) -> Optional[Tuple[str, ...]]:
        path_b = self._get(info, b"path", BencodeList)
        if path_b is None:
            return None
        return tuple(self._text(p, b"path") for p in path_b.value)

    def _map_layout(self, info: BencodeDict) -> Layout:
        has_length = b"length" in info.value
        has_files = b"files" in info.value
        if has_length == has_files:
            raise MappingError(MappingErrorKind.AMBIGUOUS_LAYOUT)

        if has_length:
            return SingleFile(length=self._get(info, b"length", BencodeInt).value)

        files_b = self._get(info, b"files", BencodeList)
        files = []
        for entry in files_b.value:
            if not isinstance(entry, BencodeDict):
                raise MappingError(MappingErrorKind.WRONG_TYPE, "files")
            files.append(self._map_file(entry))
        return MultiFile(files=tuple(files))

    def _map_file(self, entry: BencodeDict) -> File:
        length = self._get(entry, b"length", BencodeInt, required=True).value
        path_b = self._get(entry, b"path", BencodeList, required=True)
        path = tuple(self._text(p, b"path") for p in path_b.value)
        return File(length=length, path=path, md5sum=self._opt_text(entry, b"md5sum"))


def map_torrent(root: BencodeType) -> Torrent:
    """
    Convenience function to map a decoded metainfo tree.
    """
    return MetainfoMapper().map(root)
