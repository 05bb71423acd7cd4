"""Pytest configuration and fixtures."""
from datetime import datetime, timezone
from pathlib import Path
import tempfile

import pytest
import yaml

from currency_converter.database import ConversionLogStore, build_engine, build_session_factory, create_tables, drop_tables
from currency_converter.models import ConversionLogEntry, RateSnapshot
from currency_converter.providers.base import BaseRateProvider
from currency_converter.utils.errors import UpstreamError


# EUR-based table in the shape Fixer returns
SAMPLE_RATES = {
    "EUR": 1.0,
    "USD": 1.08,
    "GBP": 0.85,
    "JPY": 160.5,
    "ZZZ": 0.0,
}


class FakeRateProvider(BaseRateProvider):
    """In-process provider returning a fixed table or failing on demand."""

    NAME = "fake"

    def __init__(self, rates=None, fail: bool = False):
        self.rates = dict(SAMPLE_RATES if rates is None else rates)
        self.fail = fail
        self.calls = 0

    async def fetch_rates(self) -> RateSnapshot:
        self.calls += 1
        if self.fail:
            raise UpstreamError("provider down")
        return RateSnapshot(rates=dict(self.rates), base="EUR")

    async def health_check(self) -> bool:
        return not self.fail


class BrokenLogStore:
    """Store whose every operation fails like an unreachable database."""

    def __init__(self, error):
        self.error = error
        self.append_calls = 0

    def append(self, entry):
        self.append_calls += 1
        raise self.error

    def count(self):
        raise self.error

    def average_response_time(self):
        raise self.error

    def most_common(self, field):
        raise self.error

    def list_all(self):
        raise self.error

    def ping(self):
        raise self.error


def make_entry(
    from_currency: str = "USD",
    to_currency: str = "EUR",
    amount: float = 100.0,
    converted_amount: float = 92.59,
    response_time_ms: int = 120,
    client_agent: str = "pytest",
) -> ConversionLogEntry:
    return ConversionLogEntry(
        timestamp=datetime.now(timezone.utc),
        client_agent=client_agent,
        from_currency=from_currency,
        to_currency=to_currency,
        amount=amount,
        converted_amount=converted_amount,
        response_time_ms=response_time_ms,
    )


@pytest.fixture
def log_store():
    """Log store over a fresh in-memory SQLite database."""
    engine = build_engine("sqlite://")
    create_tables(engine)
    yield ConversionLogStore(build_session_factory(engine))
    drop_tables(engine)
    engine.dispose()


@pytest.fixture
def fake_provider():
    return FakeRateProvider()


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    config_data = {
        'provider': {
            'name': 'fixer',
            'base_url': 'http://fixer.test/api',
            'timeout': 2.5,
        },
        'database': {
            'echo': False,
        },
        'logging': {
            'level': 'DEBUG',
            'format': 'text'
        }
    }

    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(config_data, f)
        config_path = f.name

    yield config_path

    # Cleanup
    Path(config_path).unlink()


@pytest.fixture
def required_env(monkeypatch):
    """Provide the two required environment variables."""
    monkeypatch.setenv("FIXER_API_KEY", "test-key")
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.delenv("FIXER_BASE_URL", raising=False)
    monkeypatch.delenv("PROVIDER_TIMEOUT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def entry_factory():
    """Build ConversionLogEntry objects with sensible defaults."""
    return make_entry


@pytest.fixture
def broken_store():
    from currency_converter.utils.errors import PersistenceError
    return BrokenLogStore(PersistenceError("database unavailable"))
