import re
from datetime import datetime, timezone
from typing import List

from .models import GridBounds, TileCoord

_UNSAFE_TS_CHARS = re.compile(r"[:.]")


def plan_tiles(bounds: GridBounds) -> List[TileCoord]:
    """
    Row-major обход прямоугольника: внешний цикл по y, внутренний по x.
    Индекс i соответствует row = i // cols, col = i % cols.
    """
    result: List[TileCoord] = []
    for y in range(bounds.y1, bounds.y2 + 1):
        for x in range(bounds.x1, bounds.x2 + 1):
            result.append(TileCoord(x=x, y=y))
    return result


def as_utc(dt: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def iso_timestamp(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and 'Z' suffix."""
    dt = as_utc(dt)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def make_backup_filename(dt: datetime, suffix: str = ".png") -> str:
    safe_ts = _UNSAFE_TS_CHARS.sub("-", iso_timestamp(dt))
    return f"tile_backup_{safe_ts}{suffix}"
