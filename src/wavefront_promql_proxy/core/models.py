from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

# Backend granularity token for one-second buckets.
GRANULARITY_SECOND = "s"


@dataclass(frozen=True)
class Query:
    """A validated range query in the caller's time base (seconds)."""

    start: float
    end: float
    step: float
    expression: str


@dataclass(frozen=True)
class TranslatedQuery:
    """The backend window: absolute milliseconds, exclusive end."""

    expression: str
    start_ms: int
    end_ms: int
    granularity: str = GRANULARITY_SECOND


@dataclass(frozen=True)
class RawSeries:
    label: str = ""
    host: str = ""
    tags: Mapping[str, str] = field(default_factory=dict)
    # (timestamp_seconds, value), ascending by timestamp
    samples: tuple[tuple[float, float], ...] = ()


@dataclass(frozen=True)
class QueryResult:
    """What the backend returned for a translated query.

    A non-empty ``error_type`` means the backend rejected the query itself.
    """

    series: tuple[RawSeries, ...] = ()
    error_type: str = ""
    error_message: str = ""

    @property
    def failed(self) -> bool:
        return bool(self.error_type)


@dataclass(frozen=True)
class ResampledSeries:
    metric_labels: Mapping[str, str]
    values: tuple[tuple[float, str], ...]


@dataclass(frozen=True)
class MatrixResponse:
    series: tuple[ResampledSeries, ...]
    status: str = "success"
    result_type: str = "matrix"


@dataclass(frozen=True)
class ErrorPayload:
    error_type: str
    message: str
    status: str = "error"
