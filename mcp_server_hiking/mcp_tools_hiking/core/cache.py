from __future__ import annotations

import hashlib
import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)


@dataclass
class FileCache:
    """File-based JSON cache with TTL for upstream API payloads.

    Open-Meteo and sunrise-sunset.org are free but rate limited, and an agent tends
    to ask for the same forecast several times in one conversation.
    Entries are stored as `{"_cached_at": <unix>, "value": <payload>}`.
    """
    cache_dir: str
    ttl_seconds: int = 24 * 3600
    enabled: bool = True

    def __post_init__(self) -> None:
        if self.enabled:
            os.makedirs(self.cache_dir, exist_ok=True)

    def _path_for_key(self, key: str) -> str:
        h = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return os.path.join(self.cache_dir, f"{h}.json")

    def get(self, key: str, ttl_seconds: Optional[int] = None) -> Optional[Dict[str, Any]]:
        if not self.enabled:
            return None
        path = self._path_for_key(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                envelope = json.load(f)
        except (OSError, ValueError):
            # unreadable entry, treat as a miss and let the next set() overwrite it
            logger.warning("Ignoring unreadable cache entry %s", path)
            return None

        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        cached_at = envelope.get("_cached_at") if isinstance(envelope, dict) else None
        if cached_at is None or (time.time() - float(cached_at)) > ttl:
            return None
        logger.debug("cache hit: %s", key)
        return envelope.get("value")

    def set(self, key: str, value: Dict[str, Any]) -> None:
        if not self.enabled:
            return
        path = self._path_for_key(key)
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"_cached_at": time.time(), "value": value}, f, ensure_ascii=False, indent=2)
