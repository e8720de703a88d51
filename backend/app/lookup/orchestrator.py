"""Quote lookup: validate, serve from cache while fresh, otherwise fetch."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from app.cache import QuoteCache, is_fresh, quote_cache
from app.lookup.transform import serialize_quote, to_served_quote
from app.providers import marketstack
from app.schemas.provider import UpstreamError
from app.schemas.quote import RawQuote

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], RawQuote | UpstreamError]
Clock = Callable[[], datetime.datetime]


class InputError(ValueError):
    """Raised when the lookup symbol is missing or empty."""


@dataclass(frozen=True)
class LookupResult:
    symbol: str
    payload: str
    source: Literal["cache", "upstream"]


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


def normalize_symbol(raw_symbol: str | None) -> str:
    symbol = (raw_symbol or "").strip().upper()
    if not symbol:
        raise InputError("sym required")
    return symbol


class QuoteLookup:
    """Ties the cache, the upstream client and the transformer together.

    Freshness is decided once per request. Concurrent requests for the same
    stale symbol each fetch on their own; the cache keeps the newest result.
    """

    def __init__(
        self,
        cache: QuoteCache,
        fetcher: Fetcher = marketstack.fetch_latest_quote,
        clock: Clock = _utcnow,
    ) -> None:
        self.cache = cache
        self.fetcher = fetcher
        self.clock = clock

    def lookup(self, raw_symbol: str | None) -> LookupResult | UpstreamError:
        symbol = normalize_symbol(raw_symbol)

        entry = self.cache.get(symbol)
        if entry is not None and is_fresh(entry, self.clock()):
            logger.info("Returning cached quote for %s", symbol)
            return LookupResult(symbol=symbol, payload=entry.payload, source="cache")

        fetched = self.fetcher(symbol)
        if isinstance(fetched, UpstreamError):
            return fetched

        payload = serialize_quote(to_served_quote(fetched))
        self.cache.put(symbol, payload, self.clock())
        return LookupResult(symbol=symbol, payload=payload, source="upstream")


quote_lookup = QuoteLookup(quote_cache)
