from io import BytesIO
from pathlib import Path
from typing import Callable, List

import httpx
import pytest
from PIL import Image

from tile_backup.models import BackupSettings, GridBounds

TILE_URL = "https://tiles.test/files/s0/tiles/{x}/{y}.png"
WEBHOOK_URL = "https://chat.test/api/webhooks/1/token"


def make_png(size=(10, 10), color=(255, 0, 0, 255)) -> bytes:
    buf = BytesIO()
    Image.new("RGBA", size, color).save(buf, format="PNG")
    return buf.getvalue()


class RecordingHandler:
    """
    httpx.MockTransport handler: serves tiles via `tile_factory(x, y)` and
    answers webhook POSTs with `webhook_status`. Every request is kept.
    """

    def __init__(self, tile_factory: Callable[[int, int], httpx.Response], webhook_status: int = 204) -> None:
        self.tile_factory = tile_factory
        self.webhook_status = webhook_status
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if request.url.host == "tiles.test":
            x, y_png = request.url.path.split("/")[-2:]
            return self.tile_factory(int(x), int(y_png.removesuffix(".png")))
        return httpx.Response(self.webhook_status)

    @property
    def tile_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]

    @property
    def webhook_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def settings_factory(tmp_path: Path):
    def _make(**kwargs) -> BackupSettings:
        values = {
            "tile_url": TILE_URL,
            "bounds": GridBounds(x1=1, y1=1, x2=2, y2=2),
            "output_dir": tmp_path / "public" / "tiles" / "raw",
            "webhook_url": WEBHOOK_URL,
            "user_agent": "tile-backup/test",
            "request_timeout": 5.0,
            "connect_timeout": 5.0,
        }
        values.update(kwargs)
        return BackupSettings(**values)

    return _make
