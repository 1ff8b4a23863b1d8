"""
bytes -> bencode tree -> Torrent -> validated Torrent -> response.

Every stage is a pure function of its input; the pipeline holds no state
and is safe to call from any number of threads at once.
"""
import logging

from ..bencode import decode
from ..exceptions import TorrentLensError
from .metainfo import map_torrent
from .model import Torrent
from .response import TorrentResponse, project
from .validator import validate_torrent

logger = logging.getLogger(__name__)


def parse_torrent(raw: bytes) -> Torrent:
    """
    Decodes, maps and validates a metainfo file.

    Raises BencodeDecodeError, MappingError or ValidationError at the first
    failure; no partially built Torrent is ever returned.
    """
    return validate_torrent(map_torrent(decode(raw)))


def inspect_torrent(raw: bytes) -> TorrentResponse:
    """Runs the whole pipeline and projects the outcome."""
    try:
        torrent = parse_torrent(raw)
    except TorrentLensError as exc:
        logger.info("rejected metainfo (%d bytes): %s", len(raw), exc)
        return project(exc)

    logger.info(
        "accepted metainfo %r: %d piece(s), %d file(s)",
        torrent.name,
        torrent.info.num_pieces,
        len(torrent.info.files),
    )
    return project(torrent)
