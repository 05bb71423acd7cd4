from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, JSONResponse

from backend.dependencies import get_analytics_view
from backend.models.responses import ErrorResponse
from currency_converter.analytics import AnalyticsView
from currency_converter.utils.errors import UpstreamError


router = APIRouter()


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(view: AnalyticsView = Depends(get_analytics_view)):
    """Render conversion analytics and the full log table."""
    try:
        return HTMLResponse(view.render())
    except UpstreamError as e:
        return JSONResponse(status_code=500, content=ErrorResponse(error=str(e)).model_dump())
