from __future__ import annotations

import json
import logging
import os
import sys
from typing import Optional


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line, friendly to cron mail and log collectors:
      { "t": 1714567890123, "lvl": "INFO", "name": "tile_backup.pipeline", "msg": "..." }
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            "t": int(record.created * 1000),
            "lvl": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload["extra"] = extra
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def resolve_level(level: Optional[str] = None) -> int:
    """
    Level precedence:
      - explicit `level` arg
      - env LOG_LEVEL (DEBUG/INFO/WARNING/ERROR)
      - default INFO
    """
    name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: Optional[str] = None, *, force: bool = False) -> None:
    root = logging.getLogger()
    if getattr(root, "_tile_backup_configured", False) and not force:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
    # httpx logs every request at INFO; keep that for DEBUG runs only
    logging.getLogger("httpx").setLevel(logging.DEBUG if root.level <= logging.DEBUG else logging.WARNING)
    root._tile_backup_configured = True  # type: ignore[attr-defined]


def flush_logging() -> None:
    for handler in logging.getLogger().handlers:
        handler.flush()
