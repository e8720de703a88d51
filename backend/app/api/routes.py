from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse, Response

from app.lookup.orchestrator import InputError, QuoteLookup, quote_lookup
from app.schemas.provider import UpstreamError

router = APIRouter()

# Missing symbol answers 401, not 400.
_MISSING_SYMBOL_STATUS = status.HTTP_401_UNAUTHORIZED


def get_quote_lookup() -> QuoteLookup:
    return quote_lookup


def _json_payload(payload: str) -> Response:
    return Response(content=payload, media_type="application/json")


def _raise_on_upstream_error(error: UpstreamError) -> None:
    raise HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={
            "message": "upstream unavailable",
            "cause": error.kind,
            "error": error.message,
        },
    )


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


# Plain ``def`` so each lookup runs on the threadpool; the upstream call
# blocks only its own request.
@router.get("/api/lookup/")
@router.get("/api/lookup", include_in_schema=False)
def lookup_quote(
    sym: str = Query(default=""),
    lookup: QuoteLookup = Depends(get_quote_lookup),
) -> Response:
    try:
        result = lookup.lookup(sym)
    except InputError as exc:
        return PlainTextResponse(str(exc), status_code=_MISSING_SYMBOL_STATUS)

    if isinstance(result, UpstreamError):
        _raise_on_upstream_error(result)
    return _json_payload(result.payload)
