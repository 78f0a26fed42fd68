from wavefront_promql_proxy.core.errors import UpstreamError
from wavefront_promql_proxy.core.models import MatrixResponse, Query, QueryResult, RawSeries, ResampledSeries
from wavefront_promql_proxy.core.resample import resample
from wavefront_promql_proxy.core.sort import sort_series

METRIC_NAME_LABEL = "__name__"
INSTANCE_LABEL = "instance"


def build_metric_labels(series: RawSeries) -> dict[str, str]:
    """Rebuild a Prometheus label set from a backend series.

    Tags are applied last, so a tag named ``__name__`` or ``instance``
    replaces the value derived from the series label or host.
    """
    labels: dict[str, str] = {}
    if series.label:
        labels[METRIC_NAME_LABEL] = series.label
    if series.host:
        labels[INSTANCE_LABEL] = series.host
    labels.update(series.tags)
    return labels


def assemble_matrix(result: QueryResult, query: Query) -> MatrixResponse:
    """Resample every backend series and return them as a sorted matrix.

    ``result`` timestamps must already be in the caller's time base.
    Raises ``UpstreamError`` if the backend rejected the query.
    """
    if result.failed:
        raise UpstreamError(result.error_message)
    resampled = (
        ResampledSeries(metric_labels=build_metric_labels(s), values=resample(s.samples, query)) for s in result.series
    )
    return MatrixResponse(series=sort_series(resampled))
