"""
torrentlens: decode and validate BitTorrent metainfo (.torrent) files.
"""
from .exceptions import (
    BencodeDecodeError,
    MappingError,
    TorrentLensError,
    ValidationError,
)
from .torrent import Fail, Success, Torrent, inspect_torrent, parse_torrent

__version__ = "0.1.0"

__all__ = [
    "parse_torrent",
    "inspect_torrent",
    "Torrent",
    "Success",
    "Fail",
    "TorrentLensError",
    "BencodeDecodeError",
    "MappingError",
    "ValidationError",
]
