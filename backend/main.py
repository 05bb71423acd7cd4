from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from backend.routes import conversion, dashboard, health
from currency_converter import __version__
from currency_converter.analytics import AnalyticsView
from currency_converter.config import Settings, load_settings
from currency_converter.database import ConversionLogStore, build_engine, build_session_factory, create_tables
from currency_converter.gateway import ConversionGateway
from currency_converter.providers import BaseRateProvider, get_provider
from currency_converter.utils.logging import get_logger


logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[BaseRateProvider] = None,
    store: Optional[ConversionLogStore] = None,
) -> FastAPI:
    """Build the application.

    Settings are loaded from the environment when not given; a missing
    credential or database URL raises ConfigurationError before any route is
    served. Tests pass a fake provider and a store over an in-memory database.
    """
    if settings is None and (provider is None or store is None):
        settings = load_settings()

    if store is None:
        engine = build_engine(settings.database_url, echo=settings.database_echo)
        create_tables(engine)
        store = ConversionLogStore(build_session_factory(engine))
    if provider is None:
        provider = get_provider(settings)

    app = FastAPI(
        title="Currency Converter API",
        description="Live currency conversion with logged requests and a dashboard",
        version=__version__,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.gateway = ConversionGateway(provider, store)
    app.state.analytics = AnalyticsView(store)

    app.include_router(conversion.router, tags=["conversion"])
    app.include_router(dashboard.router, tags=["dashboard"])
    app.include_router(health.router, tags=["health"])

    logger.info(f"Currency Converter ready (provider={provider.NAME})")
    return app
