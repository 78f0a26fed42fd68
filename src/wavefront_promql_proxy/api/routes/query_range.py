from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from wavefront_promql_proxy.api.dependencies import get_executor, get_settings
from wavefront_promql_proxy.api.schemas import ErrorResponse, QueryRangeResponse
from wavefront_promql_proxy.config import ProxySettings
from wavefront_promql_proxy.core.errors import ProxyError, to_error_payload
from wavefront_promql_proxy.core.pipeline import run_query_range
from wavefront_promql_proxy.core.ports.executor import QueryExecutor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["query"])

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


async def _request_params(request: Request) -> dict[str, str]:
    """Merge form body and URL parameters; the first value wins, body before URL."""
    params: dict[str, str] = {}
    if request.method == "POST" and request.headers.get("content-type", "").startswith(_FORM_CONTENT_TYPE):
        form = await request.form()
        for key, value in form.multi_items():
            if isinstance(value, str):
                params.setdefault(key, value)
    for key, value in request.query_params.multi_items():
        params.setdefault(key, value)
    return params


@router.api_route(
    "/query_range",
    methods=["GET", "POST"],
    response_model=QueryRangeResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def query_range(
    request: Request,
    executor: QueryExecutor = Depends(get_executor),
    settings: ProxySettings = Depends(get_settings),
) -> QueryRangeResponse | JSONResponse:
    """Evaluate a range query by way of the Wavefront backend."""
    params = await _request_params(request)
    try:
        matrix = await run_query_range(params, executor, settings.skew)
    except ProxyError as exc:
        payload = to_error_payload(exc)
        logger.warning("query_range rejected (%s): %s", type(exc).__name__, payload.message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse.from_payload(payload).model_dump(by_alias=True),
        )
    return QueryRangeResponse.from_matrix(matrix)
