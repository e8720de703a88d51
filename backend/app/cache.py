from __future__ import annotations

import datetime
import threading

from pydantic import BaseModel, ConfigDict

FRESHNESS_WINDOW = datetime.timedelta(seconds=60)


class CacheEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    inserted_at: datetime.datetime
    payload: str


class QuoteCache:
    """Process-wide symbol -> serialized quote store.

    Entries are immutable and replaced by reference, so readers never take the
    lock and never observe a half-written entry. Writers are serialized and the
    entry with the newest timestamp wins.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._write_lock = threading.Lock()

    def get(self, symbol: str) -> CacheEntry | None:
        return self._entries.get(symbol)

    def put(self, symbol: str, payload: str, timestamp: datetime.datetime) -> CacheEntry:
        entry = CacheEntry(symbol=symbol, inserted_at=timestamp, payload=payload)
        with self._write_lock:
            current = self._entries.get(symbol)
            if current is not None and current.inserted_at > timestamp:
                return current
            self._entries[symbol] = entry
        return entry

    def clear(self) -> None:
        with self._write_lock:
            self._entries = {}

    def __len__(self) -> int:
        return len(self._entries)


def is_fresh(entry: CacheEntry, now: datetime.datetime) -> bool:
    return now - entry.inserted_at < FRESHNESS_WINDOW


quote_cache = QuoteCache()
