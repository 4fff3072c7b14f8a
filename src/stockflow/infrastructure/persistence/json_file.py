"""Shared file handling for the JSON repositories.

Each repository owns one JSON document. Reads and read-modify-write
cycles run under a per-file lock; writes go to a temporary file that
is then renamed over the original, so a document is replaced whole or
not at all. OS-level failures surface as PersistenceError.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from stockflow.domain.exceptions import PersistenceError


class JsonFile:

    def __init__(self, file_path: Path, empty: Callable[[], Any]) -> None:
        self._file_path = file_path
        self._empty = empty
        self._lock = threading.RLock()
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def read(self) -> Any:
        with self._lock:
            try:
                return json.loads(self._file_path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc

    def write(self, document: Any) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        with self._lock:
            try:
                tmp_path.write_text(
                    json.dumps(document, indent=2) + "\n", encoding="utf-8"
                )
                os.replace(tmp_path, self._file_path)
            except OSError as exc:
                raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc

    @contextmanager
    def updating(self) -> Iterator[Any]:
        """Yield the loaded document; write it back when the block exits cleanly."""
        with self._lock:
            document = self.read()
            yield document
            self.write(document)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise PersistenceError(f"Cannot create {self._file_path.parent}: {exc}") from exc
            self.write(self._empty())
