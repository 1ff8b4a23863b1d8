"""
Semantic checks on a mapped Torrent.

Checks run in a fixed order (info section first, then the rest) and stop
at the first failure, so the same input always reports the same error.
"""
from ..exceptions import ValidationCheck, ValidationError
from .model import PIECE_HASH_SIZE, Info, MultiFile, SingleFile, Torrent


def _validate_info(info: Info):
    if info.piece_length <= 0:
        raise ValidationError(ValidationCheck.PIECE_LENGTH, {"piece_length": info.piece_length})

    if len(info.pieces) % PIECE_HASH_SIZE:
        raise ValidationError(ValidationCheck.PIECES_LENGTH, {"pieces_length": len(info.pieces)})

    layout = info.layout
    if isinstance(layout, SingleFile):
        if layout.length < 0:
            raise ValidationError(ValidationCheck.FILE_LENGTH, {"length": layout.length})
    elif isinstance(layout, MultiFile):
        if not layout.files:
            raise ValidationError(ValidationCheck.FILES_EMPTY)
        for index, f in enumerate(layout.files):
            if f.length < 0:
                raise ValidationError(ValidationCheck.FILE_LENGTH, {"file": index, "length": f.length})
            if not f.path:
                raise ValidationError(ValidationCheck.PATH_EMPTY, {"file": index})
            if any(segment == "" for segment in f.path):
                raise ValidationError(ValidationCheck.PATH_SEGMENT_EMPTY, {"file": index})
    else:
        raise TypeError(f"Unknown file layout {type(layout)}")


def validate_torrent(torrent: Torrent) -> Torrent:
    """Returns the torrent unchanged, or raises ValidationError for the first broken invariant."""
    _validate_info(torrent.info)

    if torrent.creation_date is not None and torrent.creation_date < 0:
        raise ValidationError(ValidationCheck.CREATION_DATE, {"creation_date": torrent.creation_date})

    return torrent
