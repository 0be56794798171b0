"""Namespaced weather cache mirrored to session storage.

Each namespace is persisted as one JSON object under ``weatherCache_<ns>``:

    {"paris": {"timestamp": "2026-10-18T09:00:00+00:00", "data": {...}}}

Forecast entries additionally carry ``rawData`` with the upstream body.
The in-memory maps are authoritative for the session; storage is a
best-effort mirror and its failures are logged, never raised.
"""

import copy
import json
import logging
import sqlite3

from tripweather.config.defaults import STORAGE_KEY_PREFIX
from tripweather.models.common import LocationKey, Namespace, parse_timestamp
from tripweather.models.weather import CacheEntry
from tripweather.storage.session_storage import MemorySessionStorage, SessionStorage

logger = logging.getLogger(__name__)

_PERSIST_ERRORS = (sqlite3.Error, OSError, TypeError, ValueError)


def storage_key(namespace: Namespace) -> str:
    return f"{STORAGE_KEY_PREFIX}{namespace.value}"


class CacheStore:
    def __init__(self, storage: SessionStorage | None = None):
        self.storage = storage if storage is not None else MemorySessionStorage()
        self._maps: dict[Namespace, dict[LocationKey, CacheEntry]] = {
            ns: self._load(ns) for ns in Namespace
        }

    def get(self, namespace: Namespace, key: LocationKey) -> CacheEntry | None:
        """Return a copy of the entry for key, fresh or stale, or None."""
        entry = self._maps[namespace].get(key)
        if entry is None:
            return None
        return copy.deepcopy(entry)

    def put(self, namespace: Namespace, key: LocationKey, entry: CacheEntry) -> None:
        """Replace the entry for key and mirror the whole namespace to storage."""
        self._maps[namespace][key] = copy.deepcopy(entry)
        self._persist(namespace)

    def keys(self, namespace: Namespace) -> list[LocationKey]:
        return list(self._maps[namespace])

    def clear(self, namespace: Namespace | None = None) -> None:
        targets = [namespace] if namespace is not None else list(Namespace)
        for ns in targets:
            self._maps[ns].clear()
            self._persist(ns)

    def _persist(self, namespace: Namespace) -> None:
        try:
            payload = json.dumps(
                {k: _encode_entry(e) for k, e in self._maps[namespace].items()}
            )
            self.storage.set_item(storage_key(namespace), payload)
        except _PERSIST_ERRORS as e:
            logger.warning(
                "Failed to update %s cache in session storage: %s", namespace, e
            )

    def _load(self, namespace: Namespace) -> dict[LocationKey, CacheEntry]:
        try:
            stored = self.storage.get_item(storage_key(namespace))
            if stored is None:
                return {}
            raw = json.loads(stored)
        except _PERSIST_ERRORS as e:
            logger.warning(
                "Failed to load %s cache from session storage: %s", namespace, e
            )
            return {}

        if not isinstance(raw, dict):
            logger.warning(
                "Ignoring %s cache in session storage: expected an object, got %s",
                namespace, type(raw).__name__,
            )
            return {}

        entries: dict[LocationKey, CacheEntry] = {}
        for key, value in raw.items():
            entry = _decode_entry(value)
            if entry is None:
                logger.warning("Skipping malformed %s cache entry %r", namespace, key)
                continue
            entries[key] = entry
        return entries


def _encode_entry(entry: CacheEntry) -> dict:
    encoded = {"timestamp": entry.timestamp.isoformat(), "data": entry.data}
    if entry.raw_data is not None:
        encoded["rawData"] = entry.raw_data
    return encoded


def _decode_entry(value: object) -> CacheEntry | None:
    if not isinstance(value, dict) or "data" not in value:
        return None
    timestamp = parse_timestamp(value.get("timestamp"))
    if timestamp is None:
        return None
    raw_data = value.get("rawData")
    return CacheEntry(
        timestamp=timestamp,
        data=value["data"],
        raw_data=raw_data if isinstance(raw_data, dict) else None,
    )
