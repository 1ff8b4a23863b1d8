"""
Boundary-facing result of the metainfo pipeline.

Whatever happened inside, the caller sees exactly one of two shapes:

    {"type": "success", "data": {...torrent...}}
    {"type": "fail",    "data": "diagnostic text"}

The error class is deliberately flattened into the diagnostic string.
"""
from dataclasses import dataclass
from typing import Any, Dict, Union

from ..exceptions import TorrentLensError
from .model import File, Info, MultiFile, SingleFile, Torrent

FAIL_PREFIX = "Failed to parse torrent"


# ------------------------------------------------------------
#   Torrent -> JSON-ready dict
# ------------------------------------------------------------

def _file_to_dict(f: File) -> Dict[str, Any]:
    return {
        "length": f.length,
        "md5sum": f.md5sum,
        "path": list(f.path),
    }


def _info_to_dict(info: Info) -> Dict[str, Any]:
    layout = info.layout
    return {
        "name": info.name,
        "length": layout.length if isinstance(layout, SingleFile) else None,
        "piece length": info.piece_length,
        # one integer per byte keeps the digests exact through JSON
        "pieces": list(info.pieces),
        "files": [_file_to_dict(f) for f in layout.files] if isinstance(layout, MultiFile) else None,
        "private": info.private,
        "md5sum": info.md5sum,
        "root hash": info.root_hash,
        "path": None if info.path is None else list(info.path),
    }


def torrent_to_dict(torrent: Torrent) -> Dict[str, Any]:
    """Re-encodes a Torrent using the original metainfo key names."""
    return {
        "announce": torrent.announce,
        "info": _info_to_dict(torrent.info),
        "announce-list": [list(tier) for tier in torrent.announce_list],
        "nodes": [[node.host, node.port] for node in torrent.nodes],
        "creation date": torrent.creation_date,
        "comment": torrent.comment,
        "created by": torrent.created_by,
        "encoding": torrent.encoding,
    }


# ------------------------------------------------------------
#   Result shapes
# ------------------------------------------------------------

@dataclass(frozen=True)
class Success:
    torrent: Torrent

    def as_dict(self) -> Dict[str, Any]:
        return {"type": "success", "data": torrent_to_dict(self.torrent)}


@dataclass(frozen=True)
class Fail:
    message: str

    def as_dict(self) -> Dict[str, Any]:
        return {"type": "fail", "data": self.message}


TorrentResponse = Union[Success, Fail]


def project(outcome: Union[Torrent, TorrentLensError]) -> TorrentResponse:
    """Collapses a pipeline outcome into Success or Fail."""
    if isinstance(outcome, Torrent):
        return Success(outcome)
    if isinstance(outcome, TorrentLensError):
        return Fail(f"{FAIL_PREFIX}: {outcome}")
    raise TypeError(f"Cannot project outcome of type {type(outcome)}")
