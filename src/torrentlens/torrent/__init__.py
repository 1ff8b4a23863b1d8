"""
Torrent metainfo model, mapping, validation and response projection.
"""
from .metainfo import MetainfoMapper, map_torrent
from .model import File, Info, MultiFile, Node, SingleFile, Torrent
from .pipeline import inspect_torrent, parse_torrent
from .response import Fail, Success, TorrentResponse, project, torrent_to_dict
from .validator import validate_torrent

__all__ = [
    "Torrent",
    "Info",
    "File",
    "Node",
    "SingleFile",
    "MultiFile",
    "MetainfoMapper",
    "map_torrent",
    "validate_torrent",
    "Success",
    "Fail",
    "TorrentResponse",
    "project",
    "torrent_to_dict",
    "parse_torrent",
    "inspect_torrent",
]
