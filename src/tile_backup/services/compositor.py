import logging
import math
from io import BytesIO
from typing import Sequence

from PIL import Image, UnidentifiedImageError

from ..errors import CompositeError

log = logging.getLogger(__name__)


def _open_tile(buffer: bytes, index: int) -> Image.Image:
    try:
        img = Image.open(BytesIO(buffer))
        img.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise CompositeError(f"Cannot decode tile #{index}: {exc}") from exc
    return img.convert("RGBA")


def compose_tiles(buffers: Sequence[bytes], cols: int) -> bytes:
    """
    Собираем тайлы в одно RGBA-полотно и кодируем в PNG:
    - размер тайла берём из первого буфера;
    - тайл i кладём в (col * w, row * h), где row = i // cols, col = i % cols;
    - фон прозрачный, масштабирование не выполняется;
    - тайл другого размера считается ошибкой, а не молча портит картинку.
    """
    if not buffers:
        raise CompositeError("No tiles to composite")
    if cols <= 0:
        raise CompositeError(f"Column count must be positive, got {cols}")

    first = _open_tile(buffers[0], 0)
    tile_w, tile_h = first.size
    rows = math.ceil(len(buffers) / cols)

    canvas = Image.new("RGBA", (tile_w * cols, tile_h * rows), (0, 0, 0, 0))
    for index, buffer in enumerate(buffers):
        tile = first if index == 0 else _open_tile(buffer, index)
        if tile.size != (tile_w, tile_h):
            raise CompositeError(
                f"Tile #{index} is {tile.size[0]}x{tile.size[1]}, "
                f"expected {tile_w}x{tile_h}"
            )
        row, col = divmod(index, cols)
        canvas.alpha_composite(tile, dest=(col * tile_w, row * tile_h))

    out = BytesIO()
    try:
        canvas.save(out, format="PNG")
    except OSError as exc:
        raise CompositeError(f"Cannot encode composite: {exc}") from exc
    log.info("Composited %d tiles into %dx%d", len(buffers), canvas.width, canvas.height)
    return out.getvalue()
