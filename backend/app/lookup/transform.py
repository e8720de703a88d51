from __future__ import annotations

import json

from app.schemas.quote import RawQuote, ServedQuote


def to_served_quote(raw: RawQuote) -> ServedQuote:
    return ServedQuote(
        name=raw.symbol,
        symbol=raw.symbol,
        exchange=raw.exchange,
        date=raw.date,
        open=raw.open,
        high=raw.high,
        low=raw.low,
        close=raw.close,
        volume=raw.volume,
    )


def serialize_quote(quote: ServedQuote) -> str:
    # Field order follows the model definition.
    return json.dumps(quote.model_dump(), indent="\t")
