"""
JSON File Storage Implementation

The ledger lives in a single file, ``<data_dir>/<key>.json``.

Writes go to a temporary file in the same directory which is then renamed
over the old one, so a crash mid-write leaves the previous ledger intact.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from mileage_mate.audit import get_logger
from mileage_mate.config import StorageSettings, get_settings
from mileage_mate.storage.interface import (
    StorageBackend,
    StorageReadError,
    StorageWriteError,
)


logger = get_logger(__name__)


class JsonFileStorage(StorageBackend):
    """File-backed storage slot for the ledger."""

    def __init__(self, data_dir: Union[str, Path], key: str):
        self._data_dir = Path(data_dir)
        self._key = key

    @classmethod
    def from_settings(cls, settings: Optional[StorageSettings] = None) -> "JsonFileStorage":
        settings = settings or get_settings().storage
        return cls(settings.data_dir, settings.key)

    @property
    def key(self) -> str:
        return self._key

    @property
    def path(self) -> Path:
        return self._data_dir / f"{self._key}.json"

    def read(self) -> Optional[bytes]:
        """Read the ledger file; None if it does not exist yet."""
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageReadError(f"Failed to read {self.path}: {e}") from e

    def write(self, data: bytes) -> bool:
        """
        Atomically replace the ledger file.

        Raises:
            StorageWriteError: If the directory or file cannot be written;
                the previous ledger file is left as it was
        """
        tmp_name = None
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._data_dir,
                prefix=f".{self._key}-",
                suffix=".tmp",
            )
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
            return True
        except OSError as e:
            logger.error("ledger_write_failed", path=str(self.path), error=str(e))
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageWriteError(f"Failed to write {self.path}: {e}") from e
