"""Provider base class for exchange rate sources."""
from __future__ import annotations

from abc import ABC, abstractmethod

from currency_converter.models import RateSnapshot


class BaseRateProvider(ABC):
    """Abstract base class for rate providers.

    Implementations make at most one outbound call per ``fetch_rates`` and
    report every failure as ``UpstreamError``.
    """

    NAME: str = "base"

    @abstractmethod
    async def fetch_rates(self) -> RateSnapshot:
        """Fetch the provider's current rate table."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True when the upstream service looks reachable/healthy."""
