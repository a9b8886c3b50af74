from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator, Optional

import httpx

from .config import load_settings
from .models import BackupSettings
from .services.tiles import build_http_client


class Container:
    """
    Holds per-run settings and hands out the HTTP client. Settings are read
    lazily so configuration errors surface inside the run's error boundary.
    """

    def __init__(
        self,
        settings: Optional[BackupSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
        **overrides: Any,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._overrides = overrides

    @property
    def settings(self) -> BackupSettings:
        if self._settings is None:
            self._settings = load_settings(**self._overrides)
        return self._settings

    @contextmanager
    def http_client(self) -> Generator[httpx.Client, None, None]:
        client = build_http_client(self.settings, transport=self._transport)
        try:
            yield client
        finally:
            client.close()
