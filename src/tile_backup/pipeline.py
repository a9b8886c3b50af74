from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from .di import Container
from .errors import BackupError
from .models import BackupArtifact, BackupSettings, RunResult
from .services.compositor import compose_tiles
from .services.publisher import publish_backup, save_backup
from .services.tiles import fetch_tiles
from .utils import plan_tiles

log = logging.getLogger(__name__)


def run_backup(
    settings: BackupSettings,
    client: httpx.Client,
    now: Optional[datetime] = None,
) -> BackupArtifact:
    """
    plan -> fetch -> compose -> save -> publish, strictly one after another.
    Any stage failure propagates and later stages are not attempted.
    """
    log.info("Starting tile backup")
    coords = plan_tiles(settings.bounds)
    buffers = fetch_tiles(client, settings.tile_url, coords)
    composite = compose_tiles(buffers, settings.bounds.cols)

    created_at = now or datetime.now(timezone.utc)
    artifact = save_backup(composite, settings.output_dir, created_at)

    if settings.publish:
        publish_backup(client, settings.webhook_url, artifact)
    else:
        log.info("Publishing disabled, webhook upload skipped")

    log.info("Backup completed successfully")
    return artifact


def execute(container: Container, now: Optional[datetime] = None) -> RunResult:
    try:
        settings = container.settings
        with container.http_client() as client:
            artifact = run_backup(settings, client, now=now)
    except BackupError as exc:
        log.exception("Error performing backup (%s): %s", exc.kind, exc)
        return RunResult(ok=False, kind=exc.kind, message=str(exc))
    except Exception as exc:  # noqa: BLE001
        log.exception("Unexpected error performing backup: %s", exc)
        return RunResult(ok=False, kind="unexpected", message=str(exc))
    return RunResult(ok=True, message="Backup completed", artifact_path=artifact.path)
