"""
Typed, immutable model of a BitTorrent v1 metainfo file.
"""
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple, Union

PIECE_HASH_SIZE = 20


class Node(NamedTuple):
    """DHT bootstrap node from a trackerless torrent."""
    host: str
    port: int


@dataclass(frozen=True)
class File:
    length: int
    path: Tuple[str, ...]
    md5sum: Optional[str] = None

    @property
    def name(self) -> str:
        return self.path[-1]


@dataclass(frozen=True)
class SingleFile:
    length: int


@dataclass(frozen=True)
class MultiFile:
    files: Tuple[File, ...]


Layout = Union[SingleFile, MultiFile]


@dataclass(frozen=True)
class Info:
    name: str
    piece_length: int
    pieces: bytes
    layout: Layout
    private: Optional[int] = None
    md5sum: Optional[str] = None
    root_hash: Optional[str] = None
    path: Optional[Tuple[str, ...]] = None

    @property
    def piece_hashes(self) -> Tuple[bytes, ...]:
        """The 20-byte SHA-1 digests, one per piece."""
        return tuple(
            self.pieces[i:i + PIECE_HASH_SIZE]
            for i in range(0, len(self.pieces), PIECE_HASH_SIZE)
        )

    @property
    def num_pieces(self) -> int:
        return len(self.pieces) // PIECE_HASH_SIZE

    @property
    def is_multi_file(self) -> bool:
        return isinstance(self.layout, MultiFile)

    @property
    def files(self) -> Tuple[File, ...]:
        """Files in download order. A single-file torrent is one file named after the torrent."""
        if isinstance(self.layout, MultiFile):
            return self.layout.files
        return (File(length=self.layout.length, path=(self.name,)),)

    @property
    def total_length(self) -> int:
        return sum(f.length for f in self.files)

    @property
    def last_piece_length(self) -> int:
        return (self.total_length % self.piece_length) or self.piece_length


@dataclass(frozen=True)
class Torrent:
    info: Info
    announce: Optional[str] = None
    announce_list: Tuple[Tuple[str, ...], ...] = ()
    nodes: Tuple[Node, ...] = ()
    creation_date: Optional[int] = None
    comment: Optional[str] = None
    created_by: Optional[str] = None
    encoding: Optional[str] = None

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def is_private(self) -> bool:
        return self.info.private == 1

    def trackers(self) -> Tuple[str, ...]:
        """Every tracker URL, primary first, then tier by tier, without repeats."""
        seen = []
        candidates = [self.announce] if self.announce else []
        for tier in self.announce_list:
            candidates.extend(tier)
        for url in candidates:
            if url not in seen:
                seen.append(url)
        return tuple(seen)

    def __repr__(self):
        return (
            f"Torrent(name={self.info.name!r}, files={len(self.info.files)}, "
            f"pieces={self.info.num_pieces}, multi={self.info.is_multi_file}, "
            f"announce={self.announce!r})"
        )
