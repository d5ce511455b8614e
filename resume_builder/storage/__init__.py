"""Key-value persistence capability and JSON blob helpers."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .json_file import JsonFileKeyValueStore
from .memory import InMemoryKeyValueStore
from .protocol import KeyValueStore

logger = logging.getLogger(__name__)


def read_json(store: KeyValueStore, key: str) -> Optional[Any]:
    """Decode the JSON blob under *key*; absent or malformed values read as ``None``."""
    raw = store.get(key)
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        logger.debug("Ignoring malformed JSON under key %s", key)
        return None


def write_json(store: KeyValueStore, key: str, value: Any) -> None:
    """Encode *value* as JSON and write it under *key*."""
    store.set(key, json.dumps(value))


__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "read_json",
    "write_json",
]
