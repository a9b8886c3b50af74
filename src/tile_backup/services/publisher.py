import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import httpx

from ..config import WEBHOOK_ENV
from ..errors import ConfigurationError, PersistenceError, PublishError
from ..models import BackupArtifact
from ..utils import as_utc, make_backup_filename

log = logging.getLogger(__name__)


def save_backup(content: bytes, output_dir: Path, created_at: datetime) -> BackupArtifact:
    filename = make_backup_filename(created_at)
    out_path = output_dir / filename
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(content)
    except OSError as exc:
        raise PersistenceError(f"Cannot write backup to {out_path}: {exc}") from exc
    log.info("Saved backup to %s", out_path)
    return BackupArtifact(
        filename=filename,
        created_at=created_at,
        content=content,
        path=out_path,
    )


def webhook_message(created_at: datetime) -> str:
    # <t:...:F> renders as a full local date/time in the chat client
    return f"Backup created at <t:{int(as_utc(created_at).timestamp())}:F>"


def publish_backup(
    client: httpx.Client,
    webhook_url: Optional[str],
    artifact: BackupArtifact,
) -> None:
    if not webhook_url:
        raise ConfigurationError(f"{WEBHOOK_ENV} environment variable is not set")

    files = {"file": (artifact.filename, artifact.content, "image/png")}
    data = {"content": webhook_message(artifact.created_at)}
    try:
        resp = client.post(webhook_url, data=data, files=files)
    except httpx.HTTPError as exc:
        raise PublishError(f"Failed to send to webhook: {exc}") from exc
    if not resp.is_success:
        raise PublishError(
            f"Failed to send to webhook: {resp.status_code} {resp.reason_phrase}"
        )
    log.info("Posted %s to webhook", artifact.filename)
