"""Pipeline stages: tile download, compositing, local save and webhook upload."""

from .compositor import compose_tiles
from .publisher import publish_backup, save_backup, webhook_message
from .tiles import build_http_client, fetch_tile, fetch_tiles, tile_url

__all__ = [
    "build_http_client",
    "tile_url",
    "fetch_tile",
    "fetch_tiles",
    "compose_tiles",
    "save_backup",
    "publish_backup",
    "webhook_message",
]
