"""
aiohttp front end: an upload page and the POST /torrent endpoint.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional

from aiohttp import web

from .config import Settings
from .storage import save_torrent
from .torrent import Fail, Success, inspect_torrent

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"
UPLOAD_FIELD = "file"

SETTINGS_KEY = web.AppKey("settings", Settings)


async def index(request: web.Request) -> web.FileResponse:
    return web.FileResponse(STATIC_DIR / "index.html")


async def _read_upload(request: web.Request) -> Optional[bytes]:
    """Returns the bytes of the first multipart part named 'file', if any."""
    reader = await request.multipart()
    while True:
        part = await reader.next()
        if part is None:
            return None
        if part.name == UPLOAD_FIELD:
            return bytes(await part.read())
        await part.release()


async def upload_torrent(request: web.Request) -> web.Response:
    settings = request.app[SETTINGS_KEY]

    raw = None
    if request.content_type.startswith("multipart/"):
        raw = await _read_upload(request)
    else:
        logger.info("upload with content type %r ignored", request.content_type)

    if raw is None:
        return web.json_response(Fail("no file uploaded").as_dict())

    loop = asyncio.get_running_loop()
    response = await loop.run_in_executor(None, inspect_torrent, raw)

    if isinstance(response, Success):
        try:
            await loop.run_in_executor(
                None, save_torrent, settings.storage_dir, response.torrent.name, raw
            )
        except (OSError, ValueError):
            logger.exception("could not store %r", response.torrent.name)

    return web.json_response(response.as_dict())


def create_app(settings: Optional[Settings] = None) -> web.Application:
    settings = settings or Settings()
    app = web.Application(client_max_size=settings.max_upload_size)
    app[SETTINGS_KEY] = settings
    app.router.add_get("/", index)
    app.router.add_post("/torrent", upload_torrent)
    return app


def run(settings: Settings):
    logger.info("listening on http://%s:%d", settings.host, settings.port)
    web.run_app(create_app(settings), host=settings.host, port=settings.port, print=None)
