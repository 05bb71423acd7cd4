"""Database models for the Currency Converter."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Float, Integer, DateTime, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class ConversionLog(Base):
    """Append-only conversion log table; id order is insertion order."""
    __tablename__ = "conversion_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    client_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    from_currency: Mapped[str] = mapped_column(String(16), index=True)
    to_currency: Mapped[str] = mapped_column(String(16), index=True)
    amount: Mapped[float] = mapped_column(Float)
    converted_amount: Mapped[float] = mapped_column(Float)
    response_time_ms: Mapped[int] = mapped_column(Integer)
