"""ID and timestamp sources shared by the store-backed repositories."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable, Container

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]

# Bound on retries when an ID factory keeps returning IDs already in use.
MAX_ID_ATTEMPTS = 100


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def unique_id(factory: IdFactory, taken: Container[str]) -> str:
    """Draw IDs from *factory* until one is not in *taken*."""
    for _ in range(MAX_ID_ATTEMPTS):
        candidate = factory()
        if candidate not in taken:
            return candidate
    raise RuntimeError(f"ID factory produced {MAX_ID_ATTEMPTS} IDs that were all in use")
