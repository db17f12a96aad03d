"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from invtrack.infrastructure.persistence.store import FileStore, KeyValueStore
from invtrack.infrastructure.persistence.store_order_repository import (
    StoreOrderRepository,
)
from invtrack.infrastructure.persistence.store_product_repository import (
    StoreProductRepository,
)

DATA_DIR_ENV = "INVTRACK_DATA_DIR"
LOG_LEVEL_ENV = "INVTRACK_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else _DEFAULT_DATA_DIR


def key_value_store(directory: Path | None = None) -> FileStore:
    return FileStore(directory or data_dir())


def product_repository(store: KeyValueStore) -> StoreProductRepository:
    return StoreProductRepository(store)


def order_repository(store: KeyValueStore) -> StoreOrderRepository:
    return StoreOrderRepository(store)


def configure_logging(level: str | None = None) -> None:
    level = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )
