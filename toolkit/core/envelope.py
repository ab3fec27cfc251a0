# toolkit/core/envelope.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class JSONResponse(BaseModel):
    error: bool = False
    message: str = ""
    data: Any | None = None

    def to_payload(self) -> dict[str, Any]:
        # "data" só aparece quando existe
        payload: dict[str, Any] = {"error": self.error, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload
