from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wavefront_promql_proxy.core.errors import TransportError
from wavefront_promql_proxy.core.models import QueryResult, RawSeries, TranslatedQuery

logger = logging.getLogger(__name__)

CHART_API_PATH = "/api/v2/chart/api"


# --- Chart API response schemas ---


class ChartTimeSeries(BaseModel):
    model_config = ConfigDict(extra="ignore")

    label: str = ""
    host: str = ""
    tags: dict[str, str] = Field(default_factory=dict)
    data: list[tuple[float, float]] = Field(default_factory=list)


class ChartResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    timeseries: list[ChartTimeSeries] = Field(default_factory=list)
    error_type: str | None = Field(None, alias="errorType")
    error_message: str | None = Field(None, alias="errorMessage")

    def to_result(self) -> QueryResult:
        return QueryResult(
            series=tuple(
                RawSeries(label=ts.label, host=ts.host, tags=dict(ts.tags), samples=tuple(ts.data))
                for ts in self.timeseries
            ),
            error_type=self.error_type or "",
            error_message=self.error_message or "",
        )


def normalize_address(address: str) -> str:
    """Turn ``example.wavefront.com`` into ``https://example.wavefront.com``."""
    address = address.strip().rstrip("/")
    if "://" not in address:
        address = f"https://{address}"
    return address


class WavefrontQueryExecutor:
    """Run translated queries against the Wavefront chart API.

    Implements the ``QueryExecutor`` protocol. One pooled client is shared by
    all requests; call ``dispose()`` on shutdown.
    """

    def __init__(
        self,
        address: str,
        token: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=normalize_address(address),
            headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def execute(self, query: TranslatedQuery) -> QueryResult:
        params = {
            "q": query.expression,
            "s": str(query.start_ms),
            "e": str(query.end_ms),
            "g": query.granularity,
        }
        try:
            response = await self._client.get(CHART_API_PATH, params=params)
            response.raise_for_status()
            chart = ChartResponse.model_validate_json(response.content)
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"wavefront returned HTTP {exc.response.status_code}: {exc.response.text.strip()}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"wavefront request failed: {exc!s}") from exc
        except ValidationError as exc:
            raise TransportError(f"wavefront returned an unreadable response: {exc.error_count()} error(s)") from exc

        logger.debug("Wavefront returned %d series for %r", len(chart.timeseries), query.expression)
        return chart.to_result()

    async def dispose(self) -> None:
        await self._client.aclose()
