from __future__ import annotations

from typing import Dict, Optional
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from backend.dependencies import get_gateway
from backend.models.responses import ConversionResponse, ErrorResponse
from currency_converter.gateway import ConversionGateway
from currency_converter.utils.errors import UpstreamError, ValidationError


logger = logging.getLogger(__name__)

router = APIRouter()

PARAMETERS = ("from", "to", "amount")

CLIENT_MESSAGES = {
    ValidationError.MISSING_PARAMETER: "Missing query parameters: 'from', 'to', 'amount'",
    ValidationError.INVALID_AMOUNT: "Invalid amount value",
    ValidationError.UNKNOWN_CURRENCY: "Invalid currency codes",
}
UPSTREAM_MESSAGE = "Failed to fetch exchange rates"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def _collect_params(request: Request) -> Dict[str, Optional[str]]:
    """Read from/to/amount from the query string, falling back to a form body."""
    params: Dict[str, Optional[str]] = {name: request.query_params.get(name) for name in PARAMETERS}
    if request.method == "POST" and any(value is None for value in params.values()):
        form = await request.form()
        for name in PARAMETERS:
            value = form.get(name)
            if params[name] is None and isinstance(value, str):
                params[name] = value
    return params


@router.api_route(
    "/convertCurrency",
    methods=["GET", "POST"],
    response_model=ConversionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def convert_currency(request: Request, gateway: ConversionGateway = Depends(get_gateway)):
    params = await _collect_params(request)

    try:
        converted = await gateway.convert(
            from_currency=params["from"],
            to_currency=params["to"],
            amount=params["amount"],
            client_agent=request.headers.get("user-agent"),
        )
    except ValidationError as e:
        return _error(400, CLIENT_MESSAGES.get(e.kind, str(e)))
    except UpstreamError:
        return _error(500, UPSTREAM_MESSAGE)
    except Exception as e:  # noqa: BLE001
        logger.exception("Unexpected conversion failure")
        return _error(500, str(e))

    return ConversionResponse(convertedAmount=converted)
