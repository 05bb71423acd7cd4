"""
Data models for conversions and rate snapshots.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional


@dataclass(frozen=True)
class RateSnapshot:
    """
    Currency-to-base rates returned by one provider call.

    Valid only for the request that fetched it; never cached or persisted.
    """
    rates: Mapping[str, float]
    base: Optional[str] = None  # e.g. "EUR" for Fixer

    def rate_for(self, code: str) -> Optional[float]:
        """Rate for an uppercase currency code, or None when unknown."""
        return self.rates.get(code)


@dataclass(frozen=True)
class ConversionLogEntry:
    """One successful conversion, as written to the log store."""
    timestamp: datetime  # UTC, set at write time
    from_currency: str
    to_currency: str
    amount: float
    converted_amount: float
    response_time_ms: int
    client_agent: Optional[str] = None

    @property
    def currency_pair(self) -> str:
        return f"{self.from_currency}/{self.to_currency}"
