"""Conversion log persistence."""

from .connection import build_engine, build_session_factory, create_tables, drop_tables
from .log_store import ConversionLogStore, NO_DATA
from .models import Base, ConversionLog

__all__ = [
    "Base",
    "ConversionLog",
    "ConversionLogStore",
    "NO_DATA",
    "build_engine",
    "build_session_factory",
    "create_tables",
    "drop_tables",
]
