"""
Persists accepted uploads to disk.
"""
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# FULLWIDTH SOLIDUS keeps the name readable while making it one path segment
SEPARATOR_SUBSTITUTE = "／"
NUL_SUBSTITUTE = "\u2400"


def storage_name(display_name: str) -> str:
    """File name for a torrent, derived from its display name."""
    name = display_name.replace("/", SEPARATOR_SUBSTITUTE).replace("\\", SEPARATOR_SUBSTITUTE)
    name = name.replace("\x00", NUL_SUBSTITUTE)
    if name in ("", ".", ".."):
        name = name.replace(".", "．") or "unnamed"
    return f"{name}.torrent"


def save_torrent(directory: Path, display_name: str, raw: bytes) -> Path:
    """Writes the raw metainfo bytes as <display name>.torrent in directory."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / storage_name(display_name)
    target.write_bytes(raw)
    logger.info("stored %d bytes at %s", len(raw), target)
    return target
