"""Fixer.io provider implementation."""
from __future__ import annotations

import math
from typing import Any, Dict

import httpx

from currency_converter.config import DEFAULT_PROVIDER_BASE_URL, DEFAULT_PROVIDER_TIMEOUT
from currency_converter.models import RateSnapshot
from currency_converter.providers.base import BaseRateProvider
from currency_converter.utils.decorators import log_execution
from currency_converter.utils.errors import UpstreamError
from currency_converter.utils.logging import get_logger


logger = get_logger(__name__)


class FixerClient(BaseRateProvider):
    """
    Client for the Fixer ``/latest`` endpoint.

    Response format: {"success": true, "base": "EUR", "rates": {"USD": 1.08, ...}}
    """

    NAME = "fixer"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_PROVIDER_BASE_URL,
        timeout: float = DEFAULT_PROVIDER_TIMEOUT,
    ) -> None:
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def latest_url(self) -> str:
        return f"{self.base_url}/latest"

    @log_execution(log_args=False, log_result=False)
    async def fetch_rates(self) -> RateSnapshot:
        params = {"access_key": self._api_key}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.latest_url, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            # str(e) can embed the request URL, which carries the access key
            logger.error(f"Fixer request to {self.latest_url} failed: {type(e).__name__}")
            raise UpstreamError("Failed to fetch exchange rates") from e
        except ValueError as e:
            logger.error(f"Fixer returned a non-JSON body: {e}")
            raise UpstreamError("Invalid response from Fixer") from e

        return self._parse(data)

    def _parse(self, data: Any) -> RateSnapshot:
        if not isinstance(data, dict):
            logger.error("Fixer response is not a JSON object")
            raise UpstreamError("Invalid response from Fixer")

        if not data.get("success", True):
            error_info = data.get("error") or {}
            if isinstance(error_info, dict):
                error_msg = f"{error_info.get('type', 'unknown')} - {error_info.get('info', 'no details')}"
            else:
                error_msg = str(error_info)
            logger.error(f"Fixer API error: {error_msg}")
            raise UpstreamError(f"Fixer API error: {error_msg}")

        raw_rates = data.get("rates")
        if not isinstance(raw_rates, dict):
            logger.error("Fixer response missing 'rates' mapping")
            raise UpstreamError("Fixer response missing rates")

        rates: Dict[str, float] = {}
        for code, value in raw_rates.items():
            if isinstance(value, bool):
                raise UpstreamError(f"Invalid rate for {code}: {value!r}")
            try:
                rate = float(value)
            except (TypeError, ValueError) as e:
                raise UpstreamError(f"Invalid rate for {code}: {value!r}") from e
            if not math.isfinite(rate):
                raise UpstreamError(f"Invalid rate for {code}: {value!r}")
            rates[str(code).upper()] = rate

        logger.info(f"Fetched {len(rates)} rates from Fixer (base={data.get('base')})")
        return RateSnapshot(rates=rates, base=data.get("base"))

    async def health_check(self) -> bool:
        try:
            await self.fetch_rates()
            return True
        except UpstreamError:
            return False
