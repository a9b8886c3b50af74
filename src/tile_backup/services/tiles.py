import logging
from typing import List, Optional, Sequence

import httpx

from ..errors import DownloadError
from ..models import BackupSettings, TileCoord

log = logging.getLogger(__name__)


def build_http_client(
    settings: BackupSettings,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    timeout = httpx.Timeout(settings.request_timeout, connect=settings.connect_timeout)
    return httpx.Client(
        headers={"User-Agent": settings.user_agent},
        timeout=timeout,
        transport=transport,
    )


def tile_url(template: str, coord: TileCoord) -> str:
    return template.format(x=coord.x, y=coord.y)


def fetch_tile(client: httpx.Client, template: str, coord: TileCoord) -> bytes:
    url = tile_url(template, coord)
    try:
        resp = client.get(url)
    except httpx.HTTPError as exc:
        raise DownloadError(f"Failed to fetch {coord.path}: {exc}") from exc
    if not resp.is_success:
        raise DownloadError(f"Failed to fetch {coord.path}: HTTP {resp.status_code}")
    return resp.content


def fetch_tiles(
    client: httpx.Client,
    template: str,
    coords: Sequence[TileCoord],
) -> List[bytes]:
    """
    Download tiles one by one in plan order. The first failure aborts the
    whole batch; nothing is retried.
    """
    log.info("Downloading %d tiles", len(coords))
    buffers: List[bytes] = []
    for coord in coords:
        buffers.append(fetch_tile(client, template, coord))
        log.debug("fetched %s", coord.path)
    log.info("Downloaded %d tiles", len(buffers))
    return buffers
