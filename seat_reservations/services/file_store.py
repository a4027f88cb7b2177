"""
Local-disk persistence: one file per key under a directory.

Writes go to a temporary file in the same directory and are moved into place
with os.replace, so a crash mid-write leaves the previous record intact.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from seat_reservations.core.errors import StoreError
from seat_reservations.services.interfaces.store import PersistentStore


class FileStore(PersistentStore):
    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StoreError(key, str(e)) from e

    def save(self, key: str, blob: str) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(blob)
                os.replace(tmp_name, self._path(key))
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StoreError(key, str(e)) from e
