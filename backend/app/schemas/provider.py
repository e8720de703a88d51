from typing import Literal

from pydantic import BaseModel, ConfigDict


class UpstreamError(BaseModel):
    model_config = ConfigDict(frozen=True)

    provider: str = "marketstack"
    symbol: str
    kind: Literal["transport", "decode", "missing_key"]
    message: str
    status_code: int | None = None
