"""Key-value stores backing the repositories.

A store maps a string key to an opaque byte value with synchronous
get/set and no transactions. Each repository keeps its whole collection
under one fixed key and rewrites it on every mutation.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "inventory_products"
ORDERS_KEY = "inventory_orders"

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class StoreUnavailableError(Exception):
    """The backing store cannot be reached in this execution context."""


class KeyValueStore(ABC):

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the stored value, or None if the key was never set."""

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Replace the value stored under *key*."""


class InMemoryStore(KeyValueStore):
    """Dict-backed store; contents vanish with the process."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)


class FileStore(KeyValueStore):
    """One ``<key>.json`` file per key inside a data directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def get(self, key: str) -> bytes | None:
        path = self._path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot read {path}: {exc}") from exc

    def set(self, key: str, value: bytes) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(value)
            tmp_path.replace(path)
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot write {path}: {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(value), path)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid store key: {key!r}")
        return self._directory / f"{key}.json"
