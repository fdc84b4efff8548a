"""Key/value store kept in a single JSON document on disk."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from offramp.config import get_storage_config

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)


class CorruptStoreError(RuntimeError):
    """Raised when the backing file exists but does not hold a JSON object."""


class JsonFileKeyValueStore:
    """KeyValueStore persisted as one JSON object.

    Every write rewrites the document through a temporary file and
    ``os.replace`` so a crash never leaves a half-written store behind.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or get_storage_config().recovery_store_path()
        self._lock = threading.Lock()

    def put(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)

    def keys(self, prefix: str = "") -> list[str]:
        with self._lock:
            return sorted(key for key in self._read() if key.startswith(prefix))

    def _read(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        if not raw.strip():
            return {}
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptStoreError(f"Store file {self.path} is not valid JSON") from exc
        if not isinstance(document, dict):
            raise CorruptStoreError(f"Store file {self.path} does not hold a JSON object")
        return {str(key): str(value) for key, value in document.items()}

    def _write(self, data: Mapping[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(dict(data), handle, indent=2, sort_keys=True)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        log.debug("Wrote %d entries to %s", len(data), self.path)


if TYPE_CHECKING:
    from offramp.domain.ports import KeyValueStore

    _kv_check: KeyValueStore = JsonFileKeyValueStore()
