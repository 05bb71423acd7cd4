"""Single-request conversion pipeline: validate, fetch rates, compute, log."""
from __future__ import annotations

import asyncio
import math
import time
from datetime import datetime, timezone
from typing import Optional

from currency_converter import engine
from currency_converter.database.log_store import ConversionLogStore
from currency_converter.models import ConversionLogEntry
from currency_converter.providers.base import BaseRateProvider
from currency_converter.utils.errors import ComputationError, PersistenceError, ValidationError
from currency_converter.utils.logging import get_logger


logger = get_logger(__name__)


class ConversionGateway:
    """Orchestrates one conversion request.

    Holds no per-request state, so a single instance serves concurrent
    requests. A log entry is written only after a successful conversion, and
    a failed write never fails the conversion.
    """

    def __init__(self, provider: BaseRateProvider, store: ConversionLogStore):
        self.provider = provider
        self.store = store

    async def convert(
        self,
        from_currency: Optional[str],
        to_currency: Optional[str],
        amount: Optional[str],
        client_agent: Optional[str] = None,
    ) -> float:
        """
        Convert ``amount`` from one currency to another at live rates.

        Args:
            from_currency: Source currency code, any case
            to_currency: Target currency code, any case
            amount: Amount as received from the client
            client_agent: Caller's User-Agent, stored for display only

        Returns:
            The converted amount

        Raises:
            ValidationError: missing parameter, invalid amount or unknown currency
            UpstreamError: the rate provider failed
        """
        if from_currency is None or to_currency is None or amount is None:
            raise ValidationError("missing parameter", kind=ValidationError.MISSING_PARAMETER)

        value = parse_amount(amount)
        base_code = from_currency.strip().upper()
        target_code = to_currency.strip().upper()

        started = time.perf_counter()
        snapshot = await self.provider.fetch_rates()

        base_rate = snapshot.rate_for(base_code)
        target_rate = snapshot.rate_for(target_code)
        if base_rate is None or target_rate is None:
            logger.info(f"Unknown currency code in {base_code}/{target_code}")
            raise ValidationError("unknown currency code", kind=ValidationError.UNKNOWN_CURRENCY)

        try:
            rate = engine.exchange_rate(base_rate, target_rate)
        except ComputationError as e:
            logger.warning(f"Degenerate rate data for {base_code}/{target_code}: {e}")
            raise ValidationError("unknown currency code", kind=ValidationError.UNKNOWN_CURRENCY) from e

        try:
            converted = engine.apply_rate(value, rate)
        except ComputationError as e:
            logger.info(f"Amount {value} overflows {base_code}/{target_code}: {e}")
            raise ValidationError("invalid amount", kind=ValidationError.INVALID_AMOUNT) from e

        elapsed_ms = int(round((time.perf_counter() - started) * 1000))

        entry = ConversionLogEntry(
            timestamp=datetime.now(timezone.utc),
            client_agent=client_agent,
            from_currency=base_code,
            to_currency=target_code,
            amount=value,
            converted_amount=converted,
            response_time_ms=elapsed_ms,
        )
        await self._record(entry)

        logger.info(
            f"Converted {value} {base_code} to {target_code}",
            extra={"from_currency": base_code, "to_currency": target_code, "response_time_ms": elapsed_ms},
        )
        return converted

    async def _record(self, entry: ConversionLogEntry) -> None:
        # Logging is best-effort: the caller still gets the converted amount
        try:
            await asyncio.to_thread(self.store.append, entry)
        except PersistenceError as e:
            logger.warning(f"Conversion log write failed for {entry.currency_pair}: {e}")


def parse_amount(raw: str) -> float:
    """Parse a client-supplied amount; must be a finite, non-negative number."""
    # float() also accepts digit-group underscores ("1_000"), which are not decimals
    if isinstance(raw, str) and "_" in raw:
        raise ValidationError("invalid amount", kind=ValidationError.INVALID_AMOUNT)
    try:
        value = float(raw.strip())
    except (AttributeError, ValueError) as e:
        raise ValidationError("invalid amount", kind=ValidationError.INVALID_AMOUNT) from e
    if not math.isfinite(value) or value < 0:
        raise ValidationError("invalid amount", kind=ValidationError.INVALID_AMOUNT)
    return value
