from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from wavefront_promql_proxy.core.models import ErrorPayload, MatrixResponse

# --- Prometheus HTTP API response schemas ---


class SeriesSchema(BaseModel):
    metric: dict[str, str]
    values: list[tuple[float, str]]


class MatrixDataSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    result_type: str = Field("matrix", alias="resultType")
    result: list[SeriesSchema]


class QueryRangeResponse(BaseModel):
    status: str = "success"
    data: MatrixDataSchema

    @classmethod
    def from_matrix(cls, matrix: MatrixResponse) -> QueryRangeResponse:
        return cls(
            status=matrix.status,
            data=MatrixDataSchema(
                result_type=matrix.result_type,
                result=[SeriesSchema(metric=dict(s.metric_labels), values=list(s.values)) for s in matrix.series],
            ),
        )


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "error"
    error_type: str = Field(alias="errorType")
    error: str

    @classmethod
    def from_payload(cls, payload: ErrorPayload) -> ErrorResponse:
        return cls(status=payload.status, error_type=payload.error_type, error=payload.message)


# --- Custom endpoint schemas ---


class HealthResponse(BaseModel):
    status: str = "ok"
