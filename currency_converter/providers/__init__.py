"""Provider factory and exports."""

from currency_converter.config import Settings
from currency_converter.utils.errors import ConfigurationError

from .base import BaseRateProvider
from .fixer import FixerClient


def get_provider(settings: Settings) -> BaseRateProvider:
    """Build the provider named by ``settings.provider_name``.

    Canonical names:
    - "fixer"
    """
    if settings.provider_name == FixerClient.NAME:
        return FixerClient(
            api_key=settings.fixer_api_key,
            base_url=settings.provider_base_url,
            timeout=settings.provider_timeout,
        )
    raise ConfigurationError(f"Unknown provider: {settings.provider_name}")


__all__ = [
    "BaseRateProvider",
    "FixerClient",
    "get_provider",
]
