from __future__ import annotations

import json
import logging
import socket
from http.client import HTTPException as HTTPClientError
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from pydantic import ValidationError

from app.config.settings import settings
from app.schemas.provider import UpstreamError
from app.schemas.quote import RawQuote

logger = logging.getLogger(__name__)

_LATEST_EOD_PATH = "/v1/tickers/{symbol}/eod/latest"


def build_url(symbol: str, access_key: str, base_url: str | None = None) -> str:
    base = (base_url or settings.providers.marketstack_base_url).rstrip("/")
    path = _LATEST_EOD_PATH.format(symbol=quote(symbol, safe=""))
    return f"{base}{path}?{urlencode({'access_key': access_key})}"


def _reject_constant(token: str) -> None:
    raise ValueError(f"non-JSON number {token}")


def _error(symbol: str, kind: str, message: str, status_code: int | None = None) -> UpstreamError:
    logger.warning("marketstack %s failure for %s: %s", kind, symbol, message)
    return UpstreamError(symbol=symbol, kind=kind, message=message, status_code=status_code)


def fetch_latest_quote(symbol: str) -> RawQuote | UpstreamError:
    access_key = settings.providers.marketstack_access_key
    if not access_key:
        return _error(symbol, "missing_key", "marketstack access key is not configured")

    logger.info("Requesting new quote for %s", symbol)
    request = Request(build_url(symbol, access_key), method="GET")
    try:
        with urlopen(request, timeout=settings.providers.provider_timeout_seconds) as response:
            body = response.read()
    except HTTPError as exc:
        if exc.fp is not None:
            exc.close()
        return _error(symbol, "transport", f"provider returned HTTP {exc.code}", exc.code)
    except (URLError, HTTPClientError, TimeoutError, socket.timeout, ConnectionError) as exc:
        reason = getattr(exc, "reason", exc)
        return _error(symbol, "transport", f"request failed: {reason}")

    try:
        payload = json.loads(body.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as exc:
        return _error(symbol, "decode", f"invalid JSON body: {exc}")

    if not isinstance(payload, dict):
        return _error(symbol, "decode", "expected a JSON object")

    try:
        return RawQuote.model_validate(payload)
    except ValidationError as exc:
        return _error(symbol, "decode", f"unexpected quote schema: {exc.error_count()} invalid field(s)")
