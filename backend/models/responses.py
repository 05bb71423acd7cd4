from __future__ import annotations

from pydantic import BaseModel


class ConversionResponse(BaseModel):
    convertedAmount: float


class ErrorResponse(BaseModel):
    error: str
