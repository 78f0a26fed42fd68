import math

from wavefront_promql_proxy.core.models import GRANULARITY_SECOND, Query, TranslatedQuery

# The first backend point may land after the nominal start; reach back far
# enough that the first grid point usually has a sample at or before it.
LEAD_IN_SECONDS = 15.0

# Caller end is inclusive, backend end is exclusive.
END_PAD_SECONDS = 1.0


def translate_query(query: Query, skew: float = 0.0) -> TranslatedQuery:
    """Map a range query onto the backend window, shifted earlier by ``skew`` seconds.

    The backend is always asked for one-second granularity; the caller's step
    is applied afterwards by the resampler.
    """
    start_ms = math.floor((query.start - LEAD_IN_SECONDS - skew) * 1000)
    end_ms = math.floor((query.end + END_PAD_SECONDS - skew) * 1000)
    return TranslatedQuery(
        expression=query.expression,
        start_ms=start_ms,
        end_ms=end_ms,
        granularity=GRANULARITY_SECOND,
    )
