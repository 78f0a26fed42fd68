from dataclasses import replace

from wavefront_promql_proxy.core.models import RawSeries


def skew_later(series: RawSeries, skew: float) -> RawSeries:
    """Shift every sample ``skew`` seconds later, back into the caller's time base."""
    if not skew:
        return series
    return replace(series, samples=tuple((ts + skew, value) for ts, value in series.samples))
