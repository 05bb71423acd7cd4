"""Tests for health check functionality."""
import pytest
from currency_converter.config import Settings
from currency_converter.health import (
    check_database,
    check_config,
    check_provider,
    get_health_status,
    HealthStatus
)


@pytest.mark.asyncio
async def test_check_database(log_store):
    result = await check_database(log_store)
    assert result["status"] == HealthStatus.HEALTHY


@pytest.mark.asyncio
async def test_check_database_unreachable(broken_store):
    result = await check_database(broken_store)
    assert result["status"] == HealthStatus.UNHEALTHY


@pytest.mark.asyncio
async def test_check_config():
    settings = Settings(fixer_api_key="k", database_url="sqlite://")
    assert (await check_config(settings))["status"] == HealthStatus.HEALTHY
    assert (await check_config(None))["status"] == HealthStatus.DEGRADED


@pytest.mark.asyncio
async def test_get_health_status(log_store):
    status = await get_health_status(log_store, Settings(fixer_api_key="k", database_url="sqlite://"))

    assert status["status"] == HealthStatus.HEALTHY
    assert "timestamp" in status
    assert set(status["components"]) == {"database", "config"}


@pytest.mark.asyncio
async def test_get_health_status_unhealthy(broken_store):
    status = await get_health_status(broken_store, None)
    assert status["status"] == HealthStatus.UNHEALTHY


@pytest.mark.asyncio
async def test_check_provider(fake_provider):
    assert (await check_provider(fake_provider))["status"] == HealthStatus.HEALTHY
    fake_provider.fail = True
    assert (await check_provider(fake_provider))["status"] == HealthStatus.DEGRADED


@pytest.mark.asyncio
async def test_get_health_status_with_provider(log_store, fake_provider):
    settings = Settings(fixer_api_key="k", database_url="sqlite://")
    fake_provider.fail = True
    status = await get_health_status(log_store, settings, fake_provider)

    assert status["status"] == HealthStatus.DEGRADED
    assert status["components"]["provider"]["status"] == HealthStatus.DEGRADED
