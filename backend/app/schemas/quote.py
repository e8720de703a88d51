from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Smart-mode union keeps the JSON number type the provider sent.
Number = int | float


class RawQuote(BaseModel):
    """Latest end-of-day record as returned by marketstack."""

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    symbol: str
    exchange: str
    date: str
    open: Number
    high: Number
    low: Number
    close: Number
    volume: Number


class ServedQuote(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str
    symbol: str
    exchange: str
    date: str
    open: Number
    high: Number
    low: Number
    close: Number
    volume: Number
