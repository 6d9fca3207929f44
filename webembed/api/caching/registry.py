# registro de assets: snapshot inmutable + swap atómico + TTL + retries
from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from threading import RLock
from typing import Callable, TypeVar

from webembed.api.caching.resource import ResourceRecord, build_record
from webembed.api.services import metrics
from webembed.api.settings import Settings

T = TypeVar("T")

logger = logging.getLogger("webembed.registry")


@dataclass(frozen=True)
class Snapshot:
    """
    Foto completa del directorio de assets.

    - records: path relativo POSIX -> ResourceRecord.
    - loaded_at_monotonic: permite TTL sin depender del reloj del sistema.
    """

    records: Mapping[str, ResourceRecord] = field(default_factory=dict)
    loaded_at_monotonic: float = 0.0


def _is_hidden(rel: Path) -> bool:
    return any(part.startswith(".") for part in rel.parts)


class AssetRegistry:
    """
    Assets compartidos en sólo-lectura.

    Un refresh construye un Snapshot nuevo y lo publica con una única
    asignación; los lectores nunca ven un mapping a medio construir.
    """

    def __init__(self, settings: Settings, root: Path) -> None:
        self._root = root
        self._gzip_level = settings.gzip_level
        self._ttl_seconds = max(0.0, settings.assets_reload_ttl_seconds)
        self._read_max_attempts = max(1, settings.file_read_max_attempts)
        self._read_retry_sleep_s = max(0.0, settings.file_read_retry_sleep_s)

        self._refresh_lock = RLock()
        self._snapshot: Snapshot | None = None

    @property
    def root(self) -> Path:
        return self._root

    def _read_with_retries(self, read_fn: Callable[[], T]) -> T:
        for attempt in range(self._read_max_attempts):
            try:
                return read_fn()
            except OSError:
                if attempt + 1 >= self._read_max_attempts:
                    raise
                metrics.inc("registry_read_retries_total", 1)
                time.sleep(self._read_retry_sleep_s)
        raise RuntimeError("read retries: unreachable")

    def _scan(self) -> dict[str, ResourceRecord]:
        if not self._root.is_dir():
            logger.warning("assets directory not found: %s", self._root)
            return {}

        records: dict[str, ResourceRecord] = {}
        for path in sorted(self._root.rglob("*")):
            if not path.is_file():
                continue
            rel = path.relative_to(self._root)
            if _is_hidden(rel):
                continue
            records[rel.as_posix()] = self._read_with_retries(
                lambda p=path: build_record(p, gzip_level=self._gzip_level)
            )
        return records

    def _is_fresh(self, snapshot: Snapshot) -> bool:
        if self._ttl_seconds <= 0.0:
            return True
        age = time.monotonic() - snapshot.loaded_at_monotonic
        return age <= self._ttl_seconds

    def _reload(self) -> Snapshot:
        with self._refresh_lock:
            snapshot = Snapshot(records=self._scan(), loaded_at_monotonic=time.monotonic())
            self._snapshot = snapshot
            metrics.inc("registry_refresh_total", 1)
            logger.info("assets loaded: %d from %s", len(snapshot.records), self._root)
            return snapshot

    def refresh(self) -> int:
        return len(self._reload().records)

    def _current(self) -> Snapshot:
        snapshot = self._snapshot
        if snapshot is not None and self._is_fresh(snapshot):
            return snapshot

        with self._refresh_lock:
            # otro hilo pudo refrescar mientras esperábamos el lock
            snapshot = self._snapshot
            if snapshot is None or not self._is_fresh(snapshot):
                snapshot = self._reload()
            return snapshot

    def get(self, path: str) -> ResourceRecord | None:
        return self._current().records.get(path.lstrip("/"))

    def paths(self) -> list[str]:
        return sorted(self._current().records)
