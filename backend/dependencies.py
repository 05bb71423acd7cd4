from __future__ import annotations

from fastapi import Request

from currency_converter.analytics import AnalyticsView
from currency_converter.database.log_store import ConversionLogStore
from currency_converter.gateway import ConversionGateway


def get_gateway(request: Request) -> ConversionGateway:
    return request.app.state.gateway


def get_analytics_view(request: Request) -> AnalyticsView:
    return request.app.state.analytics


def get_log_store(request: Request) -> ConversionLogStore:
    """Get the log store wired in by ``create_app``."""
    return request.app.state.store
