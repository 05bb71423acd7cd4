"""Data access layer for conversion log entries."""
from __future__ import annotations

import contextlib
import threading
from datetime import timezone
from typing import Iterator

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from currency_converter.database.models import ConversionLog
from currency_converter.models import ConversionLogEntry
from currency_converter.utils.errors import PersistenceError
from currency_converter.utils.logging import get_logger


logger = get_logger(__name__)

NO_DATA = "N/A"

_GROUPABLE_FIELDS = {
    "from_currency": ConversionLog.from_currency,
    "to_currency": ConversionLog.to_currency,
    "fromCurrency": ConversionLog.from_currency,
    "toCurrency": ConversionLog.to_currency,
}


class ConversionLogStore:
    """Append-only store of conversion log entries plus aggregate queries.

    Every operation opens its own session, so one store instance can be
    shared by concurrent requests. When the engine hands every session the
    same connection (in-memory SQLite), operations are serialised on a lock.
    Storage failures surface as ``PersistenceError``.
    """

    def __init__(self, session_factory: sessionmaker):
        self.SessionLocal = session_factory
        bind = session_factory.kw.get("bind")
        if bind is not None and isinstance(bind.pool, StaticPool):
            self._lock = threading.RLock()
        else:
            self._lock = contextlib.nullcontext()

    def append(self, entry: ConversionLogEntry) -> None:
        """Persist one entry in its own transaction."""
        try:
            with self._lock, self.SessionLocal() as session:
                session.add(
                    ConversionLog(
                        timestamp=entry.timestamp,
                        client_agent=entry.client_agent,
                        from_currency=entry.from_currency,
                        to_currency=entry.to_currency,
                        amount=entry.amount,
                        converted_amount=entry.converted_amount,
                        response_time_ms=entry.response_time_ms,
                    )
                )
                session.commit()
        except Exception as e:  # noqa: BLE001
            raise PersistenceError(f"Failed to write conversion log: {e}") from e

    def count(self) -> int:
        """Total number of entries."""
        try:
            with self._lock, self.SessionLocal() as session:
                return session.execute(select(func.count(ConversionLog.id))).scalar_one()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to count conversion logs: {e}") from e

    def average_response_time(self) -> float:
        """Mean response time in ms; 0.0 when the store is empty."""
        try:
            with self._lock, self.SessionLocal() as session:
                avg = session.execute(select(func.avg(ConversionLog.response_time_ms))).scalar_one()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to average response times: {e}") from e
        return float(avg) if avg is not None else 0.0

    def most_common(self, field: str) -> str:
        """Most frequent value of ``from_currency`` or ``to_currency``.

        Ties go to the value first seen in insertion order. Returns ``NO_DATA``
        when the store is empty.
        """
        column = _GROUPABLE_FIELDS.get(field)
        if column is None:
            raise ValueError(f"Cannot aggregate on field: {field}")

        stmt = (
            select(column, func.count(ConversionLog.id).label("occurrences"))
            .group_by(column)
            .order_by(func.count(ConversionLog.id).desc(), func.min(ConversionLog.id).asc())
            .limit(1)
        )
        try:
            with self._lock, self.SessionLocal() as session:
                row = session.execute(stmt).first()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to aggregate conversion logs: {e}") from e
        return row[0] if row is not None else NO_DATA

    def list_all(self, batch_size: int = 100) -> Iterator[ConversionLogEntry]:
        """Lazily yield every entry in insertion order."""
        stmt = select(ConversionLog).order_by(ConversionLog.id.asc()).execution_options(yield_per=batch_size)
        try:
            with self._lock, self.SessionLocal() as session:
                for record in session.execute(stmt).scalars():
                    yield _to_entry(record)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to list conversion logs: {e}") from e

    def ping(self) -> None:
        """Round-trip a trivial query; raises PersistenceError when unreachable."""
        try:
            with self._lock, self.SessionLocal() as session:
                session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Database unreachable: {e}") from e


def _to_entry(record: ConversionLog) -> ConversionLogEntry:
    timestamp = record.timestamp
    # SQLite drops tzinfo; values are always written in UTC
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return ConversionLogEntry(
        timestamp=timestamp,
        client_agent=record.client_agent,
        from_currency=record.from_currency,
        to_currency=record.to_currency,
        amount=record.amount,
        converted_amount=record.converted_amount,
        response_time_ms=record.response_time_ms,
    )
