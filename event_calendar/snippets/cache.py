"""Snippet caches keyed by page revision.

The engine only needs ``get``/``set``; any object with that shape (a
memcached or database-backed store, for instance) can be passed instead.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from pathlib import Path
from typing import Protocol

from event_calendar import settings


logger = logging.getLogger(__name__)

SNIPPET_CACHE_PREFIX = "eventcalendar-snippet-"


def make_snippet_cache_key(revision_id: int) -> str:
    """Cache key of the snippet for one revision of a page."""
    return f"{SNIPPET_CACHE_PREFIX}{revision_id}"


class SnippetCache(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str, ttl: int | None = None) -> None:
        ...


class InMemorySnippetCache:
    """Process-local cache, mostly useful for tests and one-off scripts."""

    def __init__(self, clock=time.time):
        self._entries: dict[str, tuple[str, float | None]] = {}
        self._clock = clock

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= self._clock():
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: str, ttl: int | None = None) -> None:
        expires_at = self._clock() + ttl if ttl is not None else None
        self._entries[key] = (value, expires_at)

    def __len__(self) -> int:
        return len(self._entries)


class FileSnippetCache:
    """One JSON file per snippet, named by the SHA-256 of its key.

    Unreadable or corrupt entries count as misses; write failures propagate.
    """

    def __init__(self, cache_dir: Path | None = None, default_ttl: int | None = None, clock=time.time):
        self.cache_dir = Path(cache_dir or settings.SNIPPET_CACHE_DIR)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.default_ttl = settings.SNIPPET_TTL_SECONDS if default_ttl is None else default_ttl
        self._clock = clock

    def _get_cache_key(self, key: str) -> str:
        return hashlib.sha256(key.encode("utf-8")).hexdigest()

    def _path(self, key: str) -> Path:
        return self.cache_dir / f"{self._get_cache_key(key)}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable snippet cache entry %s: %s", path.name, e)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed snippet cache entry %s", path.name)
            return None

        expires_at = data.get("expires_at")
        if expires_at is not None and expires_at <= self._clock():
            logger.debug("Snippet cache entry %s expired", key)
            return None
        value = data.get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str, ttl: int | None = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        data = {
            "key": key,
            "value": value,
            "expires_at": self._clock() + ttl if ttl is not None else None,
        }
        with self._path(key).open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
