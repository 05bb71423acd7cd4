"""System health checks."""
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import asyncio
from currency_converter.config import Settings
from currency_converter.database.log_store import ConversionLogStore
from currency_converter.providers.base import BaseRateProvider
from currency_converter.utils.errors import PersistenceError
from currency_converter.utils.logging import get_logger

logger = get_logger(__name__)


class HealthStatus:
    """Health check status."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


async def check_database(store: ConversionLogStore) -> Dict[str, Any]:
    """Check database connectivity."""
    try:
        await asyncio.to_thread(store.ping)
        return {
            "status": HealthStatus.HEALTHY,
            "message": "Database connection OK"
        }
    except PersistenceError as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": HealthStatus.UNHEALTHY,
            "message": "Database unreachable"
        }


async def check_config(settings: Optional[Settings]) -> Dict[str, Any]:
    """Check that runtime settings are present and usable."""
    if settings is None:
        return {
            "status": HealthStatus.DEGRADED,
            "message": "Running without loaded settings"
        }
    if not settings.fixer_api_key or not settings.database_url:
        return {
            "status": HealthStatus.UNHEALTHY,
            "message": "Missing provider credential or database URL"
        }
    return {
        "status": HealthStatus.HEALTHY,
        "message": "Configuration loaded"
    }


async def check_provider(provider: BaseRateProvider) -> Dict[str, Any]:
    """Check that the rate provider answers with usable rates.

    Costs one upstream call, so callers opt in.
    """
    if await provider.health_check():
        return {
            "status": HealthStatus.HEALTHY,
            "message": "Rate provider reachable"
        }
    logger.warning("Rate provider health check failed")
    return {
        "status": HealthStatus.DEGRADED,
        "message": "Rate provider unreachable"
    }


async def get_health_status(
    store: ConversionLogStore,
    settings: Optional[Settings] = None,
    provider: Optional[BaseRateProvider] = None,
) -> Dict[str, Any]:
    """
    Get overall system health status.

    The rate provider is only checked when one is passed in.

    Returns:
        Dict containing overall status and component statuses
    """
    database_health, config_health = await asyncio.gather(
        check_database(store),
        check_config(settings),
    )

    components = {
        "database": database_health,
        "config": config_health,
    }
    if provider is not None:
        components["provider"] = await check_provider(provider)

    statuses = [c["status"] for c in components.values()]

    if all(s == HealthStatus.HEALTHY for s in statuses):
        overall_status = HealthStatus.HEALTHY
    elif any(s == HealthStatus.UNHEALTHY for s in statuses):
        overall_status = HealthStatus.UNHEALTHY
    else:
        overall_status = HealthStatus.DEGRADED

    return {
        "status": overall_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": components,
    }
