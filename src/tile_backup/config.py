import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import ValidationError

from .errors import ConfigurationError
from .models import BackupSettings, GridBounds
from .version import __version__

TILE_URL = "https://backend.wplace.live/files/s0/tiles/{x}/{y}.png"
DEFAULT_BOUNDS = GridBounds(x1=1520, y1=865, x2=1525, y2=867)
DEFAULT_OUTPUT_DIR = Path("public/tiles/raw")
APP_VERSION = os.environ.get("APP_VERSION", __version__)
USER_AGENT = f"tile-backup/{APP_VERSION}"
REQUEST_TIMEOUT = 30.0
CONNECT_TIMEOUT = 20.0
# pause before process exit so buffered log output reaches the scheduler
EXIT_DELAY = 0.05

WEBHOOK_ENV = "TILE_BACKUP_WEBHOOK_URL"
_LEGACY_WEBHOOK_ENV = "DISCORD_WEBHOOK_URL"


def parse_bounds(raw: str) -> GridBounds:
    """
    "x1,y1,x2,y2" -> GridBounds. Whitespace around numbers is ignored.
    """
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 4:
        raise ConfigurationError(
            f"Grid bounds must be 'x1,y1,x2,y2', got {raw!r}"
        )
    try:
        x1, y1, x2, y2 = (int(p) for p in parts)
    except ValueError as exc:
        raise ConfigurationError(f"Grid bounds must be integers, got {raw!r}") from exc
    try:
        return GridBounds(x1=x1, y1=y1, x2=x2, y2=y2)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid grid bounds {raw!r}: {exc}") from exc


def _webhook_from_env(env: Mapping[str, str]) -> Optional[str]:
    value = env.get(WEBHOOK_ENV) or env.get(_LEGACY_WEBHOOK_ENV)
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_settings(env: Optional[Mapping[str, str]] = None, **overrides) -> BackupSettings:
    """
    Собираем настройки запуска:
    - значения по умолчанию из констант модуля;
    - переопределения из окружения (TILE_BACKUP_*);
    - явные overrides (например, из аргументов CLI) в последнюю очередь.
    """
    env = os.environ if env is None else env

    bounds_raw = env.get("TILE_BACKUP_BOUNDS")
    values = {
        "tile_url": env.get("TILE_BACKUP_TILE_URL", TILE_URL),
        "bounds": parse_bounds(bounds_raw) if bounds_raw else DEFAULT_BOUNDS,
        "output_dir": Path(
            env.get("TILE_BACKUP_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)
        ).expanduser(),
        "webhook_url": _webhook_from_env(env),
        "user_agent": USER_AGENT,
        "request_timeout": REQUEST_TIMEOUT,
        "connect_timeout": CONNECT_TIMEOUT,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return BackupSettings(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings: {exc}") from exc
