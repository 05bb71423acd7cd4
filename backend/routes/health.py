from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from backend.dependencies import get_log_store
from currency_converter.health import get_health_status


router = APIRouter()


@router.get("/health")
async def health(request: Request, include_provider: bool = False, store=Depends(get_log_store)):
    provider = request.app.state.gateway.provider if include_provider else None
    status = await get_health_status(store, request.app.state.settings, provider)
    # health structure is already a dict with status, components
    return status
