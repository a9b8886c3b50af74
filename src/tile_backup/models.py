from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TileCoord(BaseModel):
    x: int
    y: int

    model_config = ConfigDict(frozen=True)

    @property
    def path(self) -> str:
        return f"{self.x}/{self.y}"


class GridBounds(BaseModel):
    """
    Inclusive rectangle of tile indices: [x1, x2] x [y1, y2].
    """

    x1: int
    y1: int
    x2: int
    y2: int

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_order(self) -> "GridBounds":
        if self.x1 > self.x2:
            raise ValueError(f"x1 ({self.x1}) must not exceed x2 ({self.x2})")
        if self.y1 > self.y2:
            raise ValueError(f"y1 ({self.y1}) must not exceed y2 ({self.y2})")
        return self

    @property
    def cols(self) -> int:
        return self.x2 - self.x1 + 1

    @property
    def rows(self) -> int:
        return self.y2 - self.y1 + 1

    @property
    def tile_count(self) -> int:
        return self.cols * self.rows


class BackupSettings(BaseModel):
    tile_url: str
    bounds: GridBounds
    output_dir: Path
    webhook_url: Optional[str] = None
    publish: bool = True
    user_agent: str
    request_timeout: float = Field(gt=0)
    connect_timeout: float = Field(gt=0)

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("tile_url")
    @classmethod
    def _check_tile_url(cls, value: str) -> str:
        # only {x} and {y} are filled in when tiles are fetched
        try:
            value.format(x=0, y=0)
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"tile URL template {value!r} must use only {{x}} and {{y}}: {exc!r}") from exc
        return value


class BackupArtifact(BaseModel):
    filename: str
    created_at: datetime
    content: bytes = Field(repr=False)
    path: Optional[Path] = None

    model_config = ConfigDict(frozen=True)


class RunResult(BaseModel):
    ok: bool
    message: str
    kind: Optional[str] = None
    artifact_path: Optional[Path] = None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
